"""
Structured Logging Configuration Module for Social Saver

Provides JSON or plain-text log output, a logger factory, application-wide
setup with Uvicorn integration, and context enrichment via LoggerAdapter so
that every line emitted while a URL moves through the extraction and
classification pipeline can carry the URL and platform it belongs to.

Usage:
    from app.utils.logger import add_log_context, get_logger, setup_logging

    setup_logging(log_level="INFO", json_logs=True)

    logger = get_logger(__name__)
    ctx_logger = add_log_context(logger, url="https://example.com", platform="article")
    ctx_logger.info("Extraction complete")
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any


# =============================================================================
# Constants
# =============================================================================

LOG_LEVEL_MAP: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Third-party loggers that are chatty at INFO
THIRD_PARTY_LOGGERS: list[str] = [
    "uvicorn.access",
    "urllib3",
    "httpx",
    "httpcore",
    "pymongo",
    "motor",
    "langchain",
    "langchain_core",
    "langchain_google_genai",
    "google_genai",
    "cohere",
    "asyncio",
]


# =============================================================================
# JSONFormatter Class
# =============================================================================


class JSONFormatter(logging.Formatter):
    """
    Logging formatter that renders each record as one compact JSON object.

    Extra fields supplied through ``extra=`` or a ``ContextLoggerAdapter`` are
    nested under ``"extra"`` so log aggregation can filter on them.

    Example output:
        {"timestamp":"2025-01-15T10:30:45.123456+00:00","level":"INFO",
         "logger":"app.services.bookmark_pipeline","message":"Bookmark ready",
         "extra":{"url":"https://x.com/a/status/1","platform":"twitter"}}
    """

    # Standard LogRecord attributes to exclude from extra fields
    RESERVED_ATTRS: set[str] = {
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
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "taskName",
    }

    def __init__(self, include_source_location: bool = False) -> None:
        super().__init__()
        self.include_source_location = include_source_location

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="microseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_source_location:
            log_entry["source"] = {
                "filename": record.filename,
                "lineno": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            log_entry["exception"] = {
                "type": exc_type.__name__ if exc_type else "Unknown",
                "message": str(exc_value) if exc_value else "",
                "traceback": "".join(traceback.format_exception(*record.exc_info)),
            }

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if not key.startswith("_") and key not in self.RESERVED_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        # default=str keeps the formatter from raising on odd extra values
        return json.dumps(log_entry, ensure_ascii=False, separators=(",", ":"), default=str)


# =============================================================================
# Standard Text Formatter
# =============================================================================


class StandardFormatter(logging.Formatter):
    """
    Human-readable formatter for local development.

    Format: [TIMESTAMP] LEVEL logger_name: message
    """

    DEFAULT_FORMAT: str = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
    DEFAULT_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(
            fmt=fmt or self.DEFAULT_FORMAT,
            datefmt=datefmt or self.DEFAULT_DATE_FORMAT,
        )


# =============================================================================
# Logger Factory and Application Setup
# =============================================================================


def get_log_level_from_string(level_str: str) -> int:
    """Convert a level name such as ``"info"`` to its logging constant (INFO if unknown)."""
    return LOG_LEVEL_MAP.get(level_str.upper(), logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """
    Return the logger for ``name``.

    Handlers are configured once on the root logger by ``setup_logging``;
    module loggers simply propagate to it.
    """
    return logging.getLogger(name)


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    third_party_level: str = "WARNING",
) -> None:
    """
    Configure application-wide logging.

    Replaces any handlers on the root logger with a single stdout handler,
    routes Uvicorn's loggers through it, and raises the threshold of noisy
    third-party libraries.

    Args:
        log_level: Level for application loggers (case-insensitive)
        json_logs: Use ``JSONFormatter`` when True, ``StandardFormatter`` otherwise
        third_party_level: Level applied to ``THIRD_PARTY_LOGGERS``
    """
    level = get_log_level_from_string(log_level)

    formatter: logging.Formatter
    if json_logs:
        formatter = JSONFormatter(include_source_location=level <= logging.DEBUG)
    else:
        formatter = StandardFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for uvicorn_logger_name in ("uvicorn", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(uvicorn_logger_name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True

    third_party = get_log_level_from_string(third_party_level)
    for logger_name in THIRD_PARTY_LOGGERS:
        logging.getLogger(logger_name).setLevel(third_party)

    root_logger.debug(
        "Logging configured: level=%s json=%s", logging.getLevelName(level), json_logs
    )


# =============================================================================
# Context Enrichment
# =============================================================================


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    LoggerAdapter that merges its context into each call's ``extra`` dict
    instead of replacing it.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple:
        extra = kwargs.get("extra", {})
        for key, value in self.extra.items():
            if key not in extra:
                extra[key] = value
        kwargs["extra"] = extra
        return msg, kwargs


def add_log_context(logger: logging.Logger, **kwargs: Any) -> logging.LoggerAdapter:
    """
    Wrap ``logger`` so every message carries the given context fields.

    Example:
        ctx_logger = add_log_context(logger, url=url, platform="instagram")
        ctx_logger.warning("oEmbed failed, falling back to meta tags")
    """
    return ContextLoggerAdapter(logger, kwargs)


__all__ = [
    "ContextLoggerAdapter",
    "JSONFormatter",
    "StandardFormatter",
    "add_log_context",
    "get_log_level_from_string",
    "get_logger",
    "setup_logging",
]
