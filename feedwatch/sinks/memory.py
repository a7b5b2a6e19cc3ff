"""In-process sink that keeps everything it is handed."""

from __future__ import annotations

from feedwatch.models.report import Report
from feedwatch.models.snapshots import Snapshot
from feedwatch.sinks.base import ReportSink


class InMemorySink(ReportSink):
    """Collects snapshots and the report in memory.

    Useful for embedding callers that post-process results themselves and
    for tests.
    """

    def __init__(self) -> None:
        self.snapshots: list[Snapshot] = []
        self.report: Report | None = None

    @property
    def sink_name(self) -> str:
        return "memory"

    async def write_snapshot(self, snapshot: Snapshot) -> bool:
        self.snapshots.append(snapshot)
        return True

    async def write_report(self, report: Report) -> bool:
        self.report = report
        return True
