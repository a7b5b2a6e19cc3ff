"""Tests for report sinks: in-memory, webhook delivery and failure isolation."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import httpx
import pytest

from feedwatch.models.config import ReportSinkConfig
from feedwatch.models.report import Report
from feedwatch.models.snapshots import Snapshot
from feedwatch.report.aggregator import build_report
from feedwatch.sinks import (
    InMemorySink,
    ReportSink,
    WebhookReportSink,
    build_report_sink,
    write_safely,
)
from feedwatch.sinks.webhook import EVENT_HEADER

_TS = datetime(2026, 3, 1, 9, 0, 0, tzinfo=UTC)
_URL = "https://hooks.example.com/feedwatch"


def _report() -> Report:
    return build_report([Snapshot(iteration=1, timestamp=_TS, items=({"id": "a"},))])


class _ExplodingSink(ReportSink):
    @property
    def sink_name(self) -> str:
        return "exploding"

    async def write_snapshot(self, snapshot: Snapshot) -> bool:
        raise OSError("disk full")

    async def write_report(self, report: Report) -> bool:
        return False


# ---------------------------------------------------------------------------
# InMemorySink
# ---------------------------------------------------------------------------


class TestInMemorySink:
    async def test_collects_snapshots_and_report(self) -> None:
        sink = InMemorySink()
        snapshot = Snapshot(iteration=1, timestamp=_TS, items=())
        report = _report()

        assert await sink.write_snapshot(snapshot) is True
        assert await sink.write_report(report) is True

        assert sink.snapshots == [snapshot]
        assert sink.report is report


# ---------------------------------------------------------------------------
# WebhookReportSink
# ---------------------------------------------------------------------------


class TestWebhookReportSink:
    def test_empty_url_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            WebhookReportSink(url="")

    async def test_posts_wire_document(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(202)

        sink = WebhookReportSink(
            url=_URL,
            headers={"Authorization": "Bearer t0ken"},
            transport=httpx.MockTransport(handler),
        )
        report = _report()

        assert await sink.write_report(report) is True

        assert len(captured) == 1
        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == _URL
        assert request.headers["Authorization"] == "Bearer t0ken"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers[EVENT_HEADER] == "report"
        assert json.loads(request.content) == report.to_dict()

    async def test_non_2xx_returns_false(self) -> None:
        sink = WebhookReportSink(
            url=_URL,
            transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")),
        )
        assert await sink.write_report(_report()) is False

    async def test_timeout_returns_false(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        sink = WebhookReportSink(url=_URL, transport=httpx.MockTransport(handler))
        assert await sink.write_report(_report()) is False

    async def test_transport_error_returns_false(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        sink = WebhookReportSink(url=_URL, transport=httpx.MockTransport(handler))
        assert await sink.write_report(_report()) is False

    async def test_snapshot_is_posted_on_write(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200)

        sink = WebhookReportSink(url=_URL, transport=httpx.MockTransport(handler))
        snapshot = Snapshot(iteration=2, timestamp=_TS, items=({"id": "a", "tags": ("x",)},))

        assert await sink.write_snapshot(snapshot) is True

        assert len(captured) == 1
        assert captured[0].headers[EVENT_HEADER] == "snapshot"
        assert json.loads(captured[0].content) == {
            "iteration": 2,
            "timestamp": "2026-03-01T09:00:00+00:00",
            "itemCount": 1,
            "items": [{"id": "a", "tags": ["x"]}],
        }

    async def test_malformed_snapshot_posts_null_items(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200)

        sink = WebhookReportSink(url=_URL, transport=httpx.MockTransport(handler))

        assert await sink.write_snapshot(Snapshot(iteration=1, timestamp=_TS, items=None)) is True
        assert json.loads(captured[0].content)["items"] is None

    async def test_failed_snapshot_post_returns_false(self) -> None:
        sink = WebhookReportSink(
            url=_URL,
            transport=httpx.MockTransport(lambda request: httpx.Response(502)),
        )
        assert await sink.write_snapshot(Snapshot(iteration=1, timestamp=_TS)) is False


# ---------------------------------------------------------------------------
# Factory and failure isolation
# ---------------------------------------------------------------------------


class TestBuildReportSink:
    def test_webhook_selected_when_url_configured(self) -> None:
        sink = build_report_sink(ReportSinkConfig(webhook_url=_URL))
        assert isinstance(sink, WebhookReportSink)

    def test_memory_sink_by_default(self) -> None:
        assert isinstance(build_report_sink(ReportSinkConfig()), InMemorySink)


class TestWriteSafely:
    async def test_unexpected_exception_is_swallowed(self) -> None:
        sink = _ExplodingSink()
        snapshot = Snapshot(iteration=1, timestamp=_TS)
        assert await write_safely(sink, lambda: sink.write_snapshot(snapshot), "snapshot") is False

    async def test_false_result_is_passed_through(self) -> None:
        sink = _ExplodingSink()
        assert await write_safely(sink, lambda: sink.write_report(_report()), "report") is False

    async def test_success_is_passed_through(self) -> None:
        sink = InMemorySink()
        report = _report()
        assert await write_safely(sink, lambda: sink.write_report(report), "report") is True
        assert sink.report is report
