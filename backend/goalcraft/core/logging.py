"""Centralized logging configuration."""
from __future__ import annotations

import logging
from logging.config import dictConfig

from goalcraft.core.context import get_goal_key, get_request_id

# Client libraries that log every HTTP round-trip at INFO.
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "opik")


class RequestContextFilter(logging.Filter):
    """Add request_id and goal attributes to log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - minimal logic
        record.request_id = get_request_id() or "-"
        record.goal = get_goal_key() or "-"
        return True


def configure_logging(*, log_level: str = "INFO", debug: bool = False) -> None:
    """Configure application logging once at startup."""
    if getattr(configure_logging, "_configured", False):
        return

    level = "DEBUG" if debug else log_level.upper()
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(goal)s | %(message)s",
                }
            },
            "filters": {
                "request_context": {
                    "()": "goalcraft.core.logging.RequestContextFilter",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "level": level,
                    "filters": ["request_context"],
                }
            },
            "loggers": {name: {"level": "WARNING"} for name in NOISY_LOGGERS},
            "root": {
                "handlers": ["console"],
                "level": level,
            },
        }
    )

    logging.getLogger(__name__).debug("Logging configured at %s", level)
    setattr(configure_logging, "_configured", True)
