"""
Logging configuration.

JSON lines in production so the output can be shipped as-is, a short
human-readable format everywhere else.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from .config import Settings, get_settings

ROOT_LOGGER = "user_api"


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        for key in ("user_id", "path", "method"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """Configure the service logger once; safe to call again (handlers are replaced)."""
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if settings.is_production:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)-8s %(name)s: %(message)s", "%H:%M:%S"))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def mask_phone(phone_number: str | None) -> str:
    """Keep the country prefix and the last two digits, hide the rest."""
    value = phone_number or ""
    if len(value) <= 5:
        return "***"
    return f"{value[:3]}***{value[-2:]}"
