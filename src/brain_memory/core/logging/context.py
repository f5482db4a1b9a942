"""Logging context utilities for structured logging.

A request-scoped context (for example the MCP tool name being served) is kept
in a context variable and bound onto every message logged through
``log_with_context``.
"""

from contextvars import ContextVar
from typing import Any

from .setup import get_logger

logger = get_logger(__name__)

_log_context: ContextVar[dict[str, Any] | None] = ContextVar("log_context", default=None)


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    context: dict[str, Any] | None = _log_context.get()
    if context is None:
        context = {}
        _log_context.set(context)
    return context.copy()


def set_log_context(context: dict[str, Any]) -> None:
    """Replace the logging context."""
    _log_context.set(context)


def update_log_context(key: str, value: Any) -> None:
    """Update a single key in the logging context."""
    context = get_log_context()
    context[key] = value
    _log_context.set(context)


def clear_log_context() -> None:
    """Clear the current logging context."""
    _log_context.set({})


def log_with_context(
    level: str,
    message: str,
    extra: dict[str, Any] | None = None,
    logger_name: str | None = None,
) -> None:
    """Log a message with the current context.

    Args:
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        extra: Additional context to include
        logger_name: Optional alternative logger name
    """
    logger_instance = get_logger(logger_name) if logger_name else logger

    context = get_log_context()
    if extra:
        context.update(extra)

    bound_logger = logger_instance.bind(**context)
    getattr(bound_logger, level.lower())(message)


def info(message: str, extra: dict[str, Any] | None = None, logger_name: str | None = None) -> None:
    """Log an info message with context."""
    log_with_context("info", message, extra, logger_name)
