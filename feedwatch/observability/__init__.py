"""Observability helpers for feedwatch (structured logging)."""

from feedwatch.observability.logging import (
    bind_run_context,
    clear_run_context,
    get_logger,
    setup_logging,
)

__all__ = ["bind_run_context", "clear_run_context", "get_logger", "setup_logging"]
