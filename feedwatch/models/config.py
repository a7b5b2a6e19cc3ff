"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class MonitorConfig:
    """Acquisition loop configuration."""

    iterations: int = 10
    interval_seconds: float = 10.0


@dataclass
class ItemConfig:
    """How feed items are identified and summarised."""

    id_field: str = "id"
    summary_text_field: str = "text"
    summary_posted_at_field: str = "posted_at"
    summary_text_length: int = 100


@dataclass
class TaggingConfig:
    """Tagged-item predicate configuration.

    An empty ``attachment_kind`` disables tagging (every tagged count is 0).
    """

    attachment_kind: str = ""
    attachments_path: str = "attachments"


@dataclass
class ReportSinkConfig:
    """Report delivery configuration."""

    webhook_url: str = ""
    webhook_timeout_seconds: float = 10.0


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    json: bool = True


@dataclass
class FeedWatchConfig:
    """Top-level feedwatch configuration."""

    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    items: ItemConfig = field(default_factory=ItemConfig)
    tagging: TaggingConfig = field(default_factory=TaggingConfig)
    sink: ReportSinkConfig = field(default_factory=ReportSinkConfig)
    log: LogConfig = field(default_factory=LogConfig)
