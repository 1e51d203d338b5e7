"""Centralized logging configuration.

- Structured logs (JSON) to stdout for centralized collection.
- Attribute values under validation are never logged (they are often personal data:
  emails, usernames, identifiers). Only class/attribute names and outcomes are.
- Extra fields are optional; the formatter must never raise due to missing keys.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import UTC, datetime
from typing import Any

from uniqueness.core.settings import get_settings

_EXTRA_FIELDS = (
    "target",
    "attribute",
    "outcome",
    "duration_ms",
    "error_count",
    "request_id",
    "http_method",
    "request_path",
    "status_code",
)


class JsonFormatter(logging.Formatter):
    """Emit JSON logs while safely handling missing `extra` fields.

    We avoid the classic `'%(target)s'`-style formatter because it raises KeyError
    when a record doesn't include those fields (e.g. SQLAlchemy's own logs).
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            payload[name] = getattr(record, name, None)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str | None = None) -> None:
    """Configure logging (JSON to stdout) for hosts that don't bring their own config."""

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": "uniqueness.core.logging.JsonFormatter",
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {
                "level": (level or get_settings().log_level).upper(),
                "handlers": ["default"],
            },
        }
    )
