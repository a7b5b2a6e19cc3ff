"""Persistence sink interface for feedwatch.

ReportSink -- ABC every sink must implement.
write_safely -- Calls a sink method, logging instead of propagating failures
                so that a broken sink never aborts a monitoring run.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

import structlog

from feedwatch.models.report import Report
from feedwatch.models.snapshots import Snapshot

_log = structlog.get_logger(component="sinks.base")


class ReportSink(ABC):
    """Abstract base class for snapshot and report sinks.

    Implementations should not raise; return ``False`` instead.
    """

    @property
    @abstractmethod
    def sink_name(self) -> str:
        """Human-readable sink identifier used in logs."""

    @abstractmethod
    async def write_snapshot(self, snapshot: Snapshot) -> bool:
        """Persist one snapshot, keyed by its timestamp.

        Returns:
            True  -- snapshot accepted.
            False -- write failed (already logged inside implementation).
        """

    @abstractmethod
    async def write_report(self, report: Report) -> bool:
        """Persist the completed report.  Called at most once per run."""


async def write_safely(
    sink: ReportSink,
    write: Callable[[], Awaitable[bool]],
    what: str,
) -> bool:
    """Run *write* and swallow unexpected sink errors after logging them."""
    try:
        success = await write()
    except Exception as exc:  # noqa: BLE001
        _log.error("sink_unexpected_error", sink=sink.sink_name, target=what, error=str(exc))
        return False

    if not success:
        _log.warning("sink_write_failed", sink=sink.sink_name, target=what)
    return success
