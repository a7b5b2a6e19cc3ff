"""Report data structures produced by the aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from feedwatch.models.snapshots import Comparison


class RunState(StrEnum):
    """Lifecycle of a monitoring run.

    idle -> acquiring -> waiting -> acquiring ... -> completed
         -> aggregating -> reported
    Any fetch failure while acquiring moves to failed, which is terminal.
    """

    IDLE = "idle"
    ACQUIRING = "acquiring"
    WAITING = "waiting"
    COMPLETED = "completed"
    AGGREGATING = "aggregating"
    REPORTED = "reported"
    FAILED = "failed"


@dataclass(frozen=True)
class RunSummary:
    """Wall-clock facts about the run.

    ``total_duration`` and ``average_interval`` are in milliseconds.
    ``average_interval`` divides by the iteration count, not by the number
    of gaps between fetches.
    """

    total_iterations: int
    total_duration: int
    average_interval: float
    start_time: datetime | None
    end_time: datetime | None


@dataclass(frozen=True)
class IterationRecord:
    """Per-snapshot projection."""

    iteration: int
    timestamp: datetime
    item_count: int
    tagged_count: int


@dataclass(frozen=True)
class ReportStatistics:
    """Aggregates across all comparisons and iterations."""

    total_new: int = 0
    total_removed: int = 0
    total_modified: int = 0
    avg_items_per_iteration: float = 0.0
    min_items: int = 0
    max_items: int = 0


@dataclass(frozen=True)
class Report:
    """Immutable artifact summarizing a whole run."""

    summary: RunSummary
    iterations: tuple[IterationRecord, ...] = field(default_factory=tuple)
    comparisons: tuple[Comparison, ...] = field(default_factory=tuple)
    statistics: ReportStatistics = field(default_factory=ReportStatistics)

    def to_dict(self) -> dict[str, object]:
        """Return the JSON-shaped wire document for this report."""
        from feedwatch.report.wire import report_to_dict

        return report_to_dict(self)
