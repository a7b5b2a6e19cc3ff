"""Monitor package: snapshot acquisition and full-run orchestration."""

from feedwatch.monitor.acquirer import (
    CallableFeedSource,
    Clock,
    FeedSource,
    SnapshotAcquirer,
    SystemClock,
)
from feedwatch.monitor.runner import FeedMonitor, build_monitor

__all__ = [
    "CallableFeedSource",
    "Clock",
    "FeedMonitor",
    "FeedSource",
    "SnapshotAcquirer",
    "SystemClock",
    "build_monitor",
]
