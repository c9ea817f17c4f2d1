"""
Structured logging configuration using structlog.

Log level and rendering are read from the environment so the CLI and
library callers share one setup.
"""

import logging
import os
import sys

import structlog


def get_log_level() -> str:
    """Get the log level name from environment."""
    return os.getenv("LOG_LEVEL", "WARNING").upper()


def use_json_logs() -> bool:
    """Whether log lines should be rendered as JSON."""
    return os.getenv("LOG_JSON", "false").lower() in ("1", "true", "yes")


def setup_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Log level name. Defaults to LOG_LEVEL env var.
        json_logs: Render JSON instead of console output. Defaults to LOG_JSON.
    """
    level_name = (level or get_log_level()).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    if json_logs is None:
        json_logs = use_json_logs()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if json_logs
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
