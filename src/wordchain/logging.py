"""Logging setup (text or compact JSON lines).

Modules log through named stdlib loggers (``wordchain.server``,
``wordchain.auth``, ``wordchain.routing``, ``wordchain.store``,
``wordchain.audit``). ``configure_logging`` installs the handlers once at
process start; libraries and tests never call it.
"""

from __future__ import annotations

import json
import logging
import time
import traceback
from logging.config import dictConfig
from typing import Any


def _compact_json(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


class ExtrasFormatter(logging.Formatter):
    """Append a structured ``data`` payload (``extra={"data": ...}``) when present."""

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        data = record.__dict__.get("data")
        if data:
            return f"{formatted} | data={_compact_json(data)}"
        return formatted


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "message": record.getMessage(),
            "severity": record.levelname,
            "logger": record.name,
            "timestamp": (
                f"{time.strftime('%Y-%m-%dT%H:%M:%S', time.gmtime(record.created))}"
                f".{int(record.msecs):03d}Z"
            ),
        }
        data = record.__dict__.get("data")
        if data:
            payload["data"] = data
        if record.exc_info:
            payload["exception"] = "".join(traceback.format_exception(*record.exc_info)).rstrip(
                "\n"
            )
        return _compact_json(payload)


def build_logging_config(level: str = "info", fmt: str = "text") -> dict[str, Any]:
    """Return a ``dictConfig`` mapping for the given level and format."""
    formatter = "json" if fmt == "json" else "text"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {
                "()": ExtrasFormatter,
                "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            },
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "wordchain": {"level": level.upper(), "handlers": ["console"], "propagate": False},
            "uvicorn": {"level": level.upper(), "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": level.upper(), "handlers": ["console"], "propagate": False},
        },
    }


def configure_logging(level: str = "info", fmt: str = "text") -> None:
    """Install wordchain's logging handlers for the process."""
    dictConfig(build_logging_config(level, fmt))
