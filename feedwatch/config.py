"""Configuration loading from FEEDWATCH_* environment variables.

Unset variables take the dataclass defaults.  Counts are clamped into range;
malformed numbers, negative durations and unknown choices raise ValueError
naming the offending variable.
"""

from __future__ import annotations

import os
from collections.abc import Collection

from feedwatch.models.config import (
    FeedWatchConfig,
    ItemConfig,
    LogConfig,
    MonitorConfig,
    ReportSinkConfig,
    TaggingConfig,
)
from feedwatch.observability.logging import LOG_LEVELS

_PREFIX = "FEEDWATCH_"
_TRUTHY = frozenset({"true", "1", "yes", "on"})


def _env(key: str, default: str = "") -> str:
    return os.environ.get(_PREFIX + key, default)


def _number(key: str, default: float, cast: type[int] | type[float]) -> int | float:
    raw = _env(key).strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"Invalid number for {_PREFIX}{key}: {raw!r}") from None


def _env_count(key: str, default: int, lo: int = 0, hi: int | None = None) -> int:
    """Integer clamped into [lo, hi]."""
    value = max(int(_number(key, default, int)), lo)
    return value if hi is None else min(value, hi)


def _env_seconds(key: str, default: float) -> float:
    """Non-negative duration in seconds."""
    value = float(_number(key, default, float))
    if value < 0:
        raise ValueError(f"Invalid interval for {_PREFIX}{key}: {value}. Must be >= 0 seconds")
    return value


def _env_flag(key: str, default: bool) -> bool:
    raw = _env(key).strip().lower()
    return default if not raw else raw in _TRUTHY


def _env_field(key: str, default: str) -> str:
    """Item field path; blank values fall back to *default*."""
    return _env(key).strip() or default


def _env_choice(key: str, default: str, choices: Collection[str], what: str) -> str:
    value = _env(key, default).lower()
    if value not in choices:
        raise ValueError(f"Invalid {what} for {_PREFIX}{key}: {value!r}. Must be one of {sorted(choices)}")
    return value


def load_config() -> FeedWatchConfig:
    """Load configuration from FEEDWATCH_* environment variables."""
    return FeedWatchConfig(
        monitor=MonitorConfig(
            iterations=_env_count("ITERATIONS", 10, lo=1, hi=10000),
            interval_seconds=_env_seconds("INTERVAL_SECONDS", 10.0),
        ),
        items=ItemConfig(
            id_field=_env_field("ID_FIELD", "id"),
            summary_text_field=_env_field("SUMMARY_TEXT_FIELD", "text"),
            summary_posted_at_field=_env_field("SUMMARY_POSTED_AT_FIELD", "posted_at"),
            summary_text_length=_env_count("SUMMARY_TEXT_LENGTH", 100),
        ),
        tagging=TaggingConfig(
            attachment_kind=_env("TAG_ATTACHMENT_KIND").strip(),
            attachments_path=_env_field("TAG_ATTACHMENTS_PATH", "attachments"),
        ),
        sink=ReportSinkConfig(
            webhook_url=_env("REPORT_WEBHOOK_URL").strip(),
            webhook_timeout_seconds=_env_seconds("REPORT_WEBHOOK_TIMEOUT", 10.0),
        ),
        log=LogConfig(
            level=_env_choice("LOG_LEVEL", "info", LOG_LEVELS, "log level"),
            json=_env_flag("LOG_JSON", True),
        ),
    )
