"""Snapshot acquisition loop.

The acquirer fetches ``iterations`` snapshots one after another, waiting
``interval`` between fetches.  It is strictly sequential: iteration i+1
never starts before snapshot i has been built and appended.  The only
suspension points are the awaited ``fetch()`` and the interval sleep.

Failure policy is fail-fast: the first FetchError aborts the run with a
RunFailedError.  Snapshots captured before the failure stay readable via
``snapshots`` so a caller may aggregate them explicitly.
"""

from __future__ import annotations

import asyncio
import copy
import functools
from collections.abc import Awaitable, Callable, Mapping, Sequence
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

import structlog

from feedwatch.errors import FetchError, RunFailedError
from feedwatch.models.document import Item
from feedwatch.models.report import RunState
from feedwatch.models.snapshots import Snapshot
from feedwatch.sinks.base import ReportSink, write_safely

_log = structlog.get_logger(component="monitor.acquirer")

FeedPayload = Sequence[Item] | Mapping[str, Any]


class FeedSource(Protocol):
    """Capability that produces the feed's current items.

    May return either the item list itself or an envelope mapping with an
    ``items`` key.  Raises FetchError when the feed cannot be obtained;
    retry, back-off and authentication are handled inside the source.
    """

    async def fetch(self) -> FeedPayload: ...


class Clock(Protocol):
    """Time capability injected into the acquirer."""

    def now(self) -> datetime: ...

    async def sleep(self, seconds: float) -> None: ...


class SystemClock:
    """Wall-clock time and asyncio sleep."""

    def now(self) -> datetime:
        return datetime.now(tz=UTC)

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class CallableFeedSource:
    """Adapts a zero-argument coroutine function into a FeedSource."""

    def __init__(self, fetch_fn: Callable[[], Awaitable[FeedPayload]]) -> None:
        self._fetch_fn = fetch_fn

    async def fetch(self) -> FeedPayload:
        return await self._fetch_fn()


class SnapshotAcquirer:
    """Owns the append-only snapshot store for a single run.

    A run can only be started once; a failed acquirer stays failed.
    """

    def __init__(
        self,
        source: FeedSource,
        clock: Clock | None = None,
        sink: ReportSink | None = None,
    ) -> None:
        self._source = source
        self._clock = clock or SystemClock()
        self._sink = sink
        self._store: list[Snapshot] = []
        self._state = RunState.IDLE
        self._current_iteration = 0
        self.started_at: datetime | None = None
        self.finished_at: datetime | None = None

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def current_iteration(self) -> int:
        return self._current_iteration

    @property
    def snapshots(self) -> tuple[Snapshot, ...]:
        return tuple(self._store)

    async def run(self, iterations: int, interval: float | timedelta) -> tuple[Snapshot, ...]:
        """Acquire *iterations* snapshots, sleeping *interval* between them.

        Args:
            iterations: Number of snapshots to take; must be at least 1.
            interval:   Wait between fetches, in seconds or as a timedelta.

        Raises:
            ValueError:     on invalid arguments.
            RuntimeError:   if this acquirer has already been run.
            RunFailedError: when the feed source raises FetchError.
        """
        if self._state is not RunState.IDLE:
            raise RuntimeError(f"Acquirer cannot run from state '{self._state}'")
        if iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {iterations}")
        seconds = interval.total_seconds() if isinstance(interval, timedelta) else float(interval)
        if seconds < 0:
            raise ValueError(f"interval must be >= 0, got {seconds}")

        self.started_at = self._clock.now()
        _log.info("acquisition_started", iterations=iterations, interval_seconds=seconds)

        for iteration in range(1, iterations + 1):
            self._state = RunState.ACQUIRING
            self._current_iteration = iteration
            snapshot = await self._acquire(iteration, iterations)

            self._store.append(snapshot)
            _log.info(
                "snapshot_acquired",
                iteration=iteration,
                of=iterations,
                items=snapshot.item_count,
                malformed=snapshot.malformed,
            )
            if self._sink is not None:
                await write_safely(
                    self._sink,
                    functools.partial(self._sink.write_snapshot, snapshot),
                    "snapshot",
                )

            if iteration < iterations:
                self._state = RunState.WAITING
                _log.debug("waiting_for_next_fetch", seconds=seconds)
                await self._clock.sleep(seconds)

        self.finished_at = self._clock.now()
        self._state = RunState.COMPLETED
        _log.info("acquisition_completed", snapshots=len(self._store))
        return self.snapshots

    async def _acquire(self, iteration: int, iterations: int) -> Snapshot:
        _log.debug("fetching_feed", iteration=iteration, of=iterations)
        try:
            payload = await self._source.fetch()
        except FetchError as exc:
            self._state = RunState.FAILED
            _log.error("fetch_failed", iteration=iteration, error=str(exc))
            raise RunFailedError(iteration, exc) from exc
        except Exception:
            self._state = RunState.FAILED
            raise

        return Snapshot(
            iteration=iteration,
            timestamp=self._clock.now(),
            items=_capture_items(payload, iteration),
        )


def _capture_items(payload: object, iteration: int) -> tuple[Item, ...] | None:
    """Deep-copy the payload's items so the source cannot mutate the store.

    Returns None for payloads without a usable item list.
    """
    items = payload.get("items") if isinstance(payload, Mapping) else payload
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        _log.warning(
            "malformed_feed_payload",
            iteration=iteration,
            payload_type=type(payload).__name__,
        )
        return None
    return tuple(copy.deepcopy(list(items)))
