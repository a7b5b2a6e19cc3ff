"""Application bootstrap for feedwatch.

Wires components in dependency order for a single run:
config → logging → sink → monitor → report.

Obtaining the feed is the embedding caller's job; it passes a FeedSource in.
"""

from __future__ import annotations

from feedwatch.config import load_config
from feedwatch.errors import RunFailedError
from feedwatch.models.config import FeedWatchConfig
from feedwatch.models.report import Report
from feedwatch.monitor.acquirer import Clock, FeedSource
from feedwatch.monitor.runner import build_monitor
from feedwatch.observability.logging import (
    bind_run_context,
    clear_run_context,
    get_logger,
    setup_logging,
)
from feedwatch.sinks import ReportSink


async def run_monitor(
    source: FeedSource,
    config: FeedWatchConfig | None = None,
    sink: ReportSink | None = None,
    clock: Clock | None = None,
) -> Report:
    """Run one monitoring session and return its report.

    Configuration is read from FEEDWATCH_* environment variables when
    *config* is not given.

    Raises:
        RunFailedError: if any fetch fails.  Snapshots already handed to the
            sink are the only artifacts of a failed run.
    """
    config = config or load_config()
    setup_logging(config.log)
    log = get_logger("app", version=_feedwatch_version())
    bind_run_context(config.monitor.iterations, config.monitor.interval_seconds)
    log.info("feedwatch starting")

    monitor = build_monitor(config, source, sink=sink, clock=clock)
    try:
        report = await monitor.run()
    except RunFailedError as exc:
        log.error(
            "run failed",
            iteration=exc.iteration,
            error=str(exc.cause),
            snapshots_captured=len(monitor.snapshots),
        )
        raise
    finally:
        clear_run_context()

    log.info(
        "feedwatch finished",
        new_items=report.statistics.total_new,
        removed_items=report.statistics.total_removed,
        modified_items=report.statistics.total_modified,
    )
    return report


def _feedwatch_version() -> str:
    from feedwatch import __version__

    return __version__
