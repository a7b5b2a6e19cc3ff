"""Persistence sinks for feedwatch.

Exports:
    ReportSink        -- Abstract base for snapshot/report sinks.
    InMemorySink      -- Keeps snapshots and the report in process.
    WebhookReportSink -- POSTs snapshots and the report as JSON.
    build_report_sink -- Factory used by build_monitor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from feedwatch.sinks.base import ReportSink, write_safely
from feedwatch.sinks.memory import InMemorySink
from feedwatch.sinks.webhook import WebhookReportSink

if TYPE_CHECKING:
    from feedwatch.models.config import ReportSinkConfig

_log = structlog.get_logger(component="sinks")

__all__ = [
    "InMemorySink",
    "ReportSink",
    "WebhookReportSink",
    "build_report_sink",
    "write_safely",
]


def build_report_sink(config: ReportSinkConfig) -> ReportSink:
    """Pick a sink from configuration.

    A non-empty ``webhook_url`` selects the webhook sink; otherwise results
    stay in memory.
    """
    if config.webhook_url:
        _log.info("webhook_sink_enabled")
        return WebhookReportSink(url=config.webhook_url, timeout=config.webhook_timeout_seconds)
    _log.debug("memory_sink_selected", reason="no webhook url configured")
    return InMemorySink()
