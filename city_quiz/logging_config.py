"""
Logging setup for the CLI and the API server.

Production (APP_ENV=production) emits one JSON object per line; anything a
module passes through ``extra=`` (the quiz logs ``mode`` and ``session``)
becomes a top-level key. Development uses a plain one-line format.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import json_log_formatter

from city_quiz.config import get_settings

_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class QuizJSONFormatter(json_log_formatter.JSONFormatter):
    """JSONFormatter that also records the level and logger name."""

    def json_record(self, message: str, extra: dict, record: logging.LogRecord) -> dict:
        payload = super().json_record(message, extra, record)
        payload["level"] = record.levelname
        payload["logger"] = record.name
        return payload


def setup_logging(level_name: Optional[str] = None) -> None:
    """Configure the root logger. ``level_name`` overrides LOG_LEVEL."""
    settings = get_settings()
    name = (level_name or settings.log_level).upper()
    level = getattr(logging, name, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if settings.env == "production":
        handler.setFormatter(QuizJSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))
