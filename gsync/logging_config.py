"""Structlog configuration.

Diagnostics go to stderr so they never mix with the plan printed on stdout.
"""

import logging
import sys
from typing import Any

import structlog

VERBOSITY_LEVELS = {
    0: logging.ERROR,
    1: logging.INFO,
    2: logging.DEBUG,
}


def level_for(verbosity: int) -> int:
    """Map the number of ``-v`` flags to a logging level."""
    return VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)


def _select_renderer(log_format: str) -> Any:
    if log_format.lower() == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(verbosity: int = 0, log_format: str = "console") -> None:
    """Configure structlog; later calls replace the earlier configuration."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _select_renderer(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_for(verbosity)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
