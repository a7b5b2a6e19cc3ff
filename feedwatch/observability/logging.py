"""Structured logging for feedwatch runs.

Records go to stderr as JSON lines (or coloured console output when
``FEEDWATCH_LOG_JSON=false``).  While a run is in progress every record also
carries ``run_id``, ``iterations`` and ``interval_seconds`` through
structlog's contextvars integration.
"""

from __future__ import annotations

import logging
import sys
from uuid import uuid4

import structlog

from feedwatch.models.config import LogConfig

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_RUN_KEYS = ("run_id", "iterations", "interval_seconds")

_PRE_RENDER: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.dev.set_exc_info,
    structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
)


def setup_logging(log: LogConfig | None = None) -> None:
    """Install the feedwatch processor chain for *log* (defaults: info, JSON)."""
    log = log or LogConfig()
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if log.json else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[*_PRE_RENDER, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVELS.get(log.level.lower(), logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def bind_run_context(iterations: int, interval_seconds: float) -> str:
    """Attach run-wide fields to every subsequent log record; returns the run id."""
    run_id = uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(
        **dict(zip(_RUN_KEYS, (run_id, iterations, interval_seconds), strict=True))
    )
    return run_id


def clear_run_context() -> None:
    structlog.contextvars.unbind_contextvars(*_RUN_KEYS)


def get_logger(component: str, **context: object) -> structlog.stdlib.BoundLogger:
    """Logger tagged with *component* and any extra fixed *context*."""
    return structlog.get_logger(component=component, **context)  # type: ignore[return-value]
