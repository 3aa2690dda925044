"""
Logging configuration and structured logging helpers.

Context passed as keyword arguments is attached to the record and rendered
by the configured formatter (plain text or one JSON object per line).
"""
import json
import logging
import sys
from typing import Any, Optional, Union

from app.core.config import settings

LOGGER_NAME = "moodjournal"

# Attributes present on every LogRecord; anything else came from `extra`.
_RESERVED_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class ContextFormatter(logging.Formatter):
    """Text formatter that appends ``key=value`` context pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = _record_context(record)
        if not context:
            return base
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{base} | {pairs}"


class JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_record_context(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def _build_formatter(fmt: str) -> logging.Formatter:
    if fmt == "json":
        return JsonFormatter()
    return ContextFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Logger:
    """Configure the application logger. Safe to call more than once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level or settings.log_level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_build_formatter(fmt or settings.log_format))
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def log_info(message: str, **context: Any) -> None:
    get_logger().info(message, extra=context)


def log_warning(message: str, **context: Any) -> None:
    get_logger().warning(message, extra=context)


def log_error(error: Union[BaseException, str], **context: Any) -> None:
    """Log an error. Exceptions are logged with their traceback."""
    logger = get_logger()
    if isinstance(error, BaseException):
        logger.error(
            f"{type(error).__name__}: {error}",
            exc_info=(type(error), error, error.__traceback__),
            extra=context,
        )
    else:
        logger.error(error, extra=context)
