"""Logging bootstrap for the ``corral`` logger with optional structured output."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from corral.config import StoreSettings, get_settings

LOGGER_NAME = "corral"

_STANDARD_LOG_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys() | {"message", "asctime"}
)


class JsonFormatter(logging.Formatter):
    """Emit JSON lines for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOG_ATTRS:
                data[key] = value
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"), default=repr)


def configure_logging(settings: StoreSettings | None = None) -> logging.Logger:
    """Attach a stderr handler to the ``corral`` logger.

    Replaces handlers installed by a previous call, leaves the root logger
    alone.

    Args:
        settings: Settings to read level and format from (default: get_settings()).

    Returns:
        The configured ``corral`` logger.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    formatter: logging.Formatter
    if settings.structured_logs:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    stderr_handler = logging.StreamHandler()
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(settings.log_level)
    logger.addHandler(stderr_handler)
    return logger
