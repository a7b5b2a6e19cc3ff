"""Shared fixtures for feedwatch integration tests.

Provides a deterministic clock and a scripted feed source so full runs can
be exercised without real time passing or a real feed behind them.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import pytest

from feedwatch.sinks import InMemorySink

_START = datetime(2026, 3, 1, 9, 0, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Virtual clock: ``sleep`` advances time instantly and is recorded."""

    def __init__(self, start: datetime = _START) -> None:
        self.current = start
        self.sleeps: list[float] = []

    def now(self) -> datetime:
        return self.current

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += timedelta(seconds=seconds)

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


# ---------------------------------------------------------------------------
# Feed source
# ---------------------------------------------------------------------------


class ScriptedFeedSource:
    """Returns pre-recorded payloads in order; exceptions in the script are raised."""

    def __init__(
        self,
        script: Sequence[object],
        clock: FakeClock | None = None,
        fetch_seconds: float = 0.0,
    ) -> None:
        self._script = list(script)
        self._clock = clock
        self._fetch_seconds = fetch_seconds
        self.calls = 0

    async def fetch(self) -> object:
        step = self._script[self.calls]
        self.calls += 1
        if self._clock is not None:
            self._clock.advance(self._fetch_seconds)
        if isinstance(step, BaseException):
            raise step
        return step


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def memory_sink() -> InMemorySink:
    return InMemorySink()


@pytest.fixture()
def scripted_source(clock: FakeClock):
    """Factory fixture: ``scripted_source(script, fetch_seconds=0.0)``."""

    def _make(script: Sequence[object], fetch_seconds: float = 0.0) -> ScriptedFeedSource:
        return ScriptedFeedSource(script, clock=clock, fetch_seconds=fetch_seconds)

    return _make
