"""Report aggregation over a completed run.

``build_report`` is pure: given the same ordered snapshots and run bounds it
always produces the same Report.  Malformed snapshots count as zero items so
a single bad sample never invalidates the run.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import structlog

from feedwatch.diff.collections import DEFAULT_KEYS, ItemKeys, compare_snapshots
from feedwatch.models.report import (
    IterationRecord,
    Report,
    ReportStatistics,
    RunSummary,
)
from feedwatch.models.snapshots import Comparison, Snapshot
from feedwatch.report.tagging import TagPredicate, count_tagged

_log = structlog.get_logger(component="report.aggregator")


def build_report(
    snapshots: Sequence[Snapshot],
    tagger: TagPredicate | None = None,
    keys: ItemKeys = DEFAULT_KEYS,
    started_at: datetime | None = None,
    finished_at: datetime | None = None,
) -> Report:
    """Aggregate *snapshots* into a Report.

    Args:
        snapshots:   Snapshots in strictly increasing iteration order.
        tagger:      Predicate selecting items counted in ``tagged_count``.
                     None disables tagging.
        keys:        Identity and summary field locations.
        started_at:  Run start.  Defaults to the first snapshot's timestamp.
        finished_at: Run end.  Defaults to the last snapshot's timestamp.

    Raises:
        ValueError: if the snapshots are not in strictly increasing
            iteration order.
    """
    _check_order(snapshots)

    iterations = tuple(
        IterationRecord(
            iteration=snapshot.iteration,
            timestamp=snapshot.timestamp,
            item_count=snapshot.item_count,
            tagged_count=count_tagged(snapshot.item_list, tagger),
        )
        for snapshot in snapshots
    )
    comparisons = tuple(
        compare_snapshots(snapshots[i - 1], snapshots[i], keys) for i in range(1, len(snapshots))
    )

    malformed = sum(1 for snapshot in snapshots if snapshot.malformed)
    if malformed:
        _log.warning("malformed_snapshots_counted_as_empty", count=malformed)

    report = Report(
        summary=_summarize_run(snapshots, started_at, finished_at),
        iterations=iterations,
        comparisons=comparisons,
        statistics=_compute_statistics(iterations, comparisons),
    )
    _log.info(
        "report_built",
        iterations=len(iterations),
        comparisons=len(comparisons),
        total_new=report.statistics.total_new,
        total_removed=report.statistics.total_removed,
        total_modified=report.statistics.total_modified,
    )
    return report


def _check_order(snapshots: Sequence[Snapshot]) -> None:
    for earlier, later in zip(snapshots, snapshots[1:]):
        if later.iteration <= earlier.iteration:
            raise ValueError(
                f"Snapshots out of order: iteration {later.iteration} follows {earlier.iteration}"
            )


def _summarize_run(
    snapshots: Sequence[Snapshot],
    started_at: datetime | None,
    finished_at: datetime | None,
) -> RunSummary:
    start = started_at if started_at is not None else (snapshots[0].timestamp if snapshots else None)
    end = finished_at if finished_at is not None else (snapshots[-1].timestamp if snapshots else None)

    total_duration = 0
    if start is not None and end is not None:
        total_duration = round((end - start).total_seconds() * 1000)

    total_iterations = len(snapshots)
    average_interval = total_duration / total_iterations if total_iterations else 0.0

    return RunSummary(
        total_iterations=total_iterations,
        total_duration=total_duration,
        average_interval=average_interval,
        start_time=start,
        end_time=end,
    )


def _compute_statistics(
    iterations: Sequence[IterationRecord],
    comparisons: Sequence[Comparison],
) -> ReportStatistics:
    counts = [record.item_count for record in iterations]
    return ReportStatistics(
        total_new=sum(len(c.new_items) for c in comparisons),
        total_removed=sum(len(c.removed_items) for c in comparisons),
        total_modified=sum(len(c.modified_items) for c in comparisons),
        # Empty runs report zeros rather than dividing by zero
        avg_items_per_iteration=sum(counts) / len(counts) if counts else 0.0,
        min_items=min(counts, default=0),
        max_items=max(counts, default=0),
    )
