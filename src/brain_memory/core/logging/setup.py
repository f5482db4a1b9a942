"""Centralized logging setup with Logfire integration.

Logfire is configured from settings (token optional); structlog carries the
application logs. The stdio MCP transport owns stdout, so the output stream is
a parameter and defaults to stderr.
"""

import logging
import sys
from typing import TextIO

import logfire
import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder
from structlog.types import EventDict, Processor, WrappedLogger
from structlog.typing import FilteringBoundLogger


def add_logfire_context(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add Logfire-specific context to log events."""
    if "error" in event_dict:
        event_dict["error_type"] = type(event_dict["error"]).__name__

    return event_dict


def configure_logfire(token: str | None = None, console: bool = False) -> None:
    """Configure Logfire for the service.

    Nothing is sent unless a token is present; local console output is off by
    default so that it never interleaves with a stdio transport.
    """
    logfire.configure(
        service_name="brain-memory",
        token=token or None,
        send_to_logfire="if-token-present",
        console=None if console else False,
    )


def setup_logging(level: str = "INFO", stream: TextIO | None = None, colors: bool = False) -> None:
    """Set up application-wide logging with Logfire and structlog integration.

    Args:
        level: Minimum log level name
        stream: Output stream for rendered logs (stderr when omitted)
        colors: Whether the console renderer uses ANSI colours
    """
    stream = stream or sys.stderr
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        CallsiteParameterAdder(
            parameters=[
                CallsiteParameter.FILENAME,
                CallsiteParameter.LINENO,
                CallsiteParameter.FUNC_NAME,
            ]
        ),
        add_logfire_context,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        # Must come before the final renderer
        logfire.StructlogProcessor(),
        structlog.dev.ConsoleRenderer(colors=colors),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    # Route standard library logs (redis, httpx, uvicorn) through the same chain
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=colors),
        foreign_pre_chain=processors[:-2],
    )
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structured logger instance.

    Args:
        name: The name of the logger (usually __name__)

    Returns:
        A configured structlog logger instance
    """
    return structlog.get_logger(name)
