"""Full monitoring run: acquire, aggregate, deliver.

FeedMonitor owns the run state machine::

    idle -> acquiring <-> waiting -> completed -> aggregating -> reported
                 \\-> failed

A failed run never reaches aggregation and writes no report.
"""

from __future__ import annotations

import functools
from datetime import timedelta

import structlog

from feedwatch.diff.collections import DEFAULT_KEYS, ItemKeys
from feedwatch.models.config import FeedWatchConfig
from feedwatch.models.report import Report, RunState
from feedwatch.models.snapshots import Snapshot
from feedwatch.monitor.acquirer import Clock, FeedSource, SnapshotAcquirer, SystemClock
from feedwatch.report.aggregator import build_report
from feedwatch.report.tagging import TagPredicate, attachment_kind_tagger
from feedwatch.sinks import ReportSink, build_report_sink, write_safely

_log = structlog.get_logger(component="monitor.runner")


class FeedMonitor:
    """Runs one monitoring session end to end.

    Args:
        source:     Feed source capability.
        iterations: Number of snapshots to take.
        interval:   Wait between fetches, in seconds or as a timedelta.
        sink:       Receives every snapshot and the final report.
        clock:      Time capability; defaults to the system clock.
        tagger:     Predicate for ``taggedCount``; None disables tagging.
        keys:       Identity and summary field locations.
    """

    def __init__(
        self,
        source: FeedSource,
        iterations: int = 10,
        interval: float | timedelta = 10.0,
        sink: ReportSink | None = None,
        clock: Clock | None = None,
        tagger: TagPredicate | None = None,
        keys: ItemKeys = DEFAULT_KEYS,
    ) -> None:
        self._iterations = iterations
        self._interval = interval
        self._sink = sink
        self._clock = clock or SystemClock()
        self._tagger = tagger
        self._keys = keys
        self._acquirer = SnapshotAcquirer(source, clock=self._clock, sink=sink)
        self._post_acquisition_state: RunState | None = None
        self.report: Report | None = None

    @property
    def state(self) -> RunState:
        return self._post_acquisition_state or self._acquirer.state

    @property
    def snapshots(self) -> tuple[Snapshot, ...]:
        return self._acquirer.snapshots

    async def run(self) -> Report:
        """Acquire all snapshots, build the report and hand it to the sink.

        Raises:
            RunFailedError: propagated from the acquirer; no report is built.
        """
        snapshots = await self._acquirer.run(self._iterations, self._interval)

        self._post_acquisition_state = RunState.AGGREGATING
        report = build_report(
            snapshots,
            tagger=self._tagger,
            keys=self._keys,
            started_at=self._acquirer.started_at,
            finished_at=self._clock.now(),
        )

        if self._sink is not None:
            await write_safely(self._sink, functools.partial(self._sink.write_report, report), "report")

        self.report = report
        self._post_acquisition_state = RunState.REPORTED
        _log.info(
            "run_reported",
            iterations=report.summary.total_iterations,
            duration_ms=report.summary.total_duration,
        )
        return report


def build_monitor(
    config: FeedWatchConfig,
    source: FeedSource,
    sink: ReportSink | None = None,
    clock: Clock | None = None,
) -> FeedMonitor:
    """Wire a FeedMonitor from configuration.

    When *sink* is None the sink is chosen by ``build_report_sink``.
    """
    tagger: TagPredicate | None = None
    if config.tagging.attachment_kind:
        tagger = attachment_kind_tagger(
            config.tagging.attachment_kind,
            attachments_path=config.tagging.attachments_path,
        )

    keys = ItemKeys(
        id_field=config.items.id_field,
        text_field=config.items.summary_text_field,
        posted_at_field=config.items.summary_posted_at_field,
        text_length=config.items.summary_text_length,
    )

    return FeedMonitor(
        source,
        iterations=config.monitor.iterations,
        interval=config.monitor.interval_seconds,
        sink=sink if sink is not None else build_report_sink(config.sink),
        clock=clock,
        tagger=tagger,
        keys=keys,
    )
