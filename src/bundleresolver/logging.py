"""Structured logging configuration for bundleresolver.

Provides JSON-formatted logs for machine consumption and
human-readable logs for interactive use. Logs go to stderr because
stdout carries the output rows.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .config import get_settings

# Attributes present on every LogRecord; anything else came in via `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.funcName:
            log_data["function"] = record.funcName
        if record.lineno:
            log_data["line"] = record.lineno

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable log formatter."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(level: str | None = None) -> None:
    """Configure logging based on settings.

    Args:
        level: Optional level name overriding the configured one
    """
    settings = get_settings()

    log_level = getattr(logging, (level or settings.log_level).upper(), logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    if settings.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    get_logger(__name__).debug(
        "Logging initialized",
        extra={"log_level": logging.getLevelName(log_level), "log_format": settings.log_format},
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds context to all log messages."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        """Process the logging message and add extra context."""
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def get_context_logger(name: str, **context: Any) -> LoggerAdapter:
    """Get a logger with additional context.

    Usage:
        logger = get_context_logger(__name__, platform="android")
        logger.info("Fetching listing")  # Includes platform
    """
    return LoggerAdapter(get_logger(name), context)


# =========================
# Convenience functions
# =========================


def log_resolution_attempt(platform: str, bundle: str, url: str) -> None:
    """Log an outbound store request."""
    logger = get_logger("bundleresolver.resolvers")
    logger.debug(
        f"Requesting {platform} listing for {bundle}",
        extra={"platform": platform, "bundle": bundle, "url": url, "event": "request"},
    )


def log_resolution_fallback(platform: str, bundle: str, strategy: str, reason: str) -> None:
    """Log that a fallback path is being taken."""
    logger = get_logger("bundleresolver.resolvers")
    logger.info(
        f"Falling back to {strategy} for {bundle}: {reason}",
        extra={
            "platform": platform,
            "bundle": bundle,
            "strategy": strategy,
            "reason": reason,
            "event": "fallback",
        },
    )


def log_run_complete(
    lines: int, resolved: int, failed: int, skipped: int, duration_seconds: float
) -> None:
    """Log the summary of a processing run."""
    logger = get_logger("bundleresolver.processor")
    logger.info(
        f"Processed {lines} lines ({resolved} resolved, {failed} failed)",
        extra={
            "lines": lines,
            "resolved": resolved,
            "failed": failed,
            "skipped": skipped,
            "duration_seconds": duration_seconds,
            "event": "run_complete",
        },
    )
