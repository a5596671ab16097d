"""Structured JSON logging for the timeline engine and its CLI."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, TextIO

from .config import settings
from .utils.datetime_utils import now_utc

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RESERVED_LOG_RECORD_KEYS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def __init__(self, service: str, environment: str) -> None:
        super().__init__()
        self._service = service
        self._environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": now_utc().isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "service": self._service,
            "environment": self._environment,
            "message": record.getMessage(),
        }
        payload.update(
            {
                key: value
                for key, value in record.__dict__.items()
                if key not in _RESERVED_LOG_RECORD_KEYS
            }
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _normalize_log_level(level: str | None, environment: str) -> int:
    if level:
        normalized = level.strip().upper()
    else:
        normalized = "INFO" if environment.lower() == "production" else "DEBUG"
    return logging.getLevelNamesMapping().get(normalized, logging.INFO)


def configure_logging(
    service: str | None = None,
    environment: str | None = None,
    log_level: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Install the JSON handler on the root logger.

    Unset arguments fall back to ``Settings``. Output goes to stderr by default
    so the CLI can keep stdout for the artifact itself.
    """
    service = service or settings.service_name
    environment = environment or settings.environment
    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.setFormatter(JSONFormatter(service=service, environment=environment))
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(_normalize_log_level(log_level or settings.log_level, environment))
