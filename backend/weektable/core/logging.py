"""Centralized logging configuration."""
from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any, Dict, Optional

from weektable.core.request_context import get_request_id

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"


class RequestIdFilter(logging.Filter):
    """Stamp each record with the current request id ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


def build_logging_config(log_level: str, scheduling_log_level: Optional[str] = None) -> Dict[str, Any]:
    """
    dictConfig payload for the API process.

    The engine loggers (parser skips, placement summaries) live under
    ``weektable.scheduling`` and may be turned up independently of the root.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT}},
        "filters": {"request_id": {"()": "weektable.core.logging.RequestIdFilter"}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "filters": ["request_id"],
            }
        },
        "loggers": {
            "weektable.scheduling": {"level": (scheduling_log_level or log_level).upper()},
        },
        "root": {"handlers": ["console"], "level": log_level.upper()},
    }


def configure_logging(*, log_level: str = "INFO", scheduling_log_level: Optional[str] = None) -> None:
    """Configure application logging once at startup."""
    if getattr(configure_logging, "_configured", False):
        return

    dictConfig(build_logging_config(log_level, scheduling_log_level))
    logging.getLogger(__name__).debug("Logging configured at %s", log_level)
    setattr(configure_logging, "_configured", True)
