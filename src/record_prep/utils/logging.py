"""Logging configuration helpers with Structlog integration.

Key Responsibilities:
    - Configure standard library logging with single-line JSON formatting
    - Configure Structlog so module loggers emit key/value events

Collaborators:
    - Upstream: Ingestion entry-points call :func:`configure_logging` once
    - Downstream: Relies on ``logging`` and ``structlog``

Side Effects:
    - Configures global logging handlers and the Structlog pipeline

Thread Safety:
    - Logging configuration should be invoked once during process startup
"""

# ==============================================================================
# IMPORTS
# ==============================================================================

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import structlog

from record_prep.config.settings import LoggingSettings

# ==============================================================================
# FORMATTERS
# ==============================================================================

_RESERVED_RECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


class JsonFormatter(logging.Formatter):
    """Formats log records as single line JSON objects."""

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def format(self, record: logging.LogRecord) -> str:
        """Serialise a log record into a JSON string."""
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, self.datefmt),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS:
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True, default=str)


# ==============================================================================
# CONFIGURATION HELPERS
# ==============================================================================


def _resolve_level(level: int | str | None) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    if isinstance(level, int):
        return level
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    settings: LoggingSettings | None = None,
) -> None:
    """Configure global logging for the application.

    Args:
        level: Optional logging level or level name. When ``settings`` is
            provided this argument is ignored.
        settings: Optional logging settings object providing level and
            renderer configuration.

    Note:
        Calling this function reconfigures the root logger and should therefore
        happen once during application startup.
    """
    json_output = True
    if settings is not None:
        level = settings.level
        json_output = settings.json_output
    level_value = _resolve_level(level)

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    # keep pytest capture handlers so caplog still works after reconfiguration
    preserved_handlers = [
        existing
        for existing in root_logger.handlers
        if str(getattr(existing.__class__, "__module__", "")).startswith("_pytest.")
    ]
    logging.basicConfig(
        level=level_value,
        handlers=[*preserved_handlers, handler],
        force=True,
    )

    renderer: Any = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger with the given name."""
    return logging.getLogger(name)
