"""Structured logging setup."""

import logging
import sys
from typing import Any

import structlog


def setup_logging(level: str = "INFO", log_format: str = "json") -> Any:
    """Configure structlog for the process.

    Args:
        level: Minimum log level name
        log_format: "json" for machine-readable lines, "plain" for console output

    Returns:
        Logger bound to the shellactions namespace
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    return structlog.get_logger("shellactions")
