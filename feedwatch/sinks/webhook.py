"""JSON webhook sink.

POSTs every snapshot as soon as it is captured and the report wire document
once the run has been aggregated.  Both go to the same URL; the
``X-Feedwatch-Event`` header (``snapshot`` or ``report``) tells them apart.
"""

from __future__ import annotations

import httpx
import structlog

from feedwatch.models.report import Report
from feedwatch.models.snapshots import Snapshot
from feedwatch.report.wire import snapshot_to_dict
from feedwatch.sinks.base import ReportSink

_log = structlog.get_logger(component="sinks.webhook")

EVENT_HEADER = "X-Feedwatch-Event"


class WebhookReportSink(ReportSink):
    """Delivers snapshots and the report by POSTing JSON to a URL.

    Args:
        url:       Full endpoint URL.
        headers:   Optional extra headers (e.g. Authorization).
        timeout:   HTTP request timeout in seconds. Defaults to 10.
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not url:
            raise ValueError("Webhook url must not be empty")
        self._url = url
        self._headers = headers or {}
        self._timeout = timeout
        self._transport = transport

    @property
    def sink_name(self) -> str:
        return "webhook"

    async def write_snapshot(self, snapshot: Snapshot) -> bool:
        """POST *snapshot* as JSON.  Returns True on a 2xx response."""
        return await self._post("snapshot", snapshot_to_dict(snapshot), iteration=snapshot.iteration)

    async def write_report(self, report: Report) -> bool:
        """POST *report* as JSON.  Returns True on a 2xx response."""
        return await self._post("report", report.to_dict(), iterations=report.summary.total_iterations)

    async def _post(self, event: str, payload: dict[str, object], **context: object) -> bool:
        request_headers = {
            "Content-Type": "application/json",
            EVENT_HEADER: event,
            **self._headers,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, json=payload, headers=request_headers)
                if response.is_success:
                    _log.info(f"{event}_delivered", status_code=response.status_code, **context)
                    return True
                _log.warning(
                    "webhook_non_2xx_response",
                    event=event,
                    status_code=response.status_code,
                    body=response.text[:200],
                    **context,
                )
                return False
        except httpx.TimeoutException:
            _log.warning("webhook_request_timeout", event=event, url=self._url, **context)
            return False
        except httpx.HTTPError as exc:
            _log.warning("webhook_http_error", event=event, error=str(exc), **context)
            return False
