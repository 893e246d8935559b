"""
Structured logger with text or JSON output.

Wraps the standard ``logging`` module. Extra keyword arguments passed to a
log call become fields on the record: appended as ``key=value`` in text mode,
merged into the object in JSON mode.
"""

import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from .interface import Logger

# Attributes every LogRecord already has; never treated as extra fields.
_RECORD_KEYS = frozenset(
    {
        "args", "asctime", "created", "exc_info", "exc_text", "filename",
        "funcName", "levelname", "levelno", "lineno", "module",
        "msecs", "message", "msg", "name", "pathname", "process",
        "processName", "relativeCreated", "stack_info", "thread",
        "threadName", "taskName",
    }
)


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_KEYS and key != "session_id"
    }


class JsonFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        session_id = getattr(record, "session_id", None)
        if session_id:
            log_data["session_id"] = str(session_id)

        log_data.update(_extra_fields(record))
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter that appends extra fields to the message."""

    def format(self, record: logging.LogRecord) -> str:
        s = super().format(record)
        extra = _extra_fields(record)
        if extra:
            s += " " + " ".join(f"{k}={v}" for k, v in extra.items())
        return s


class StructuredLogger(Logger):
    """Logger that writes structured records to a stream.

    Example:
        logger = StructuredLogger(name="envcascade-api")
        logger.info("Loaded env file", tier=1, path="/srv/apps/api/.env")

        # JSON lines for log aggregation
        logger = StructuredLogger(name="envcascade-api", json_format=True)
    """

    def __init__(
        self,
        name: str = "envcascade",
        level: int = logging.INFO,
        json_format: bool = False,
        stream: Optional[TextIO] = None,
    ):
        self._name = name
        self._session_id = str(uuid.uuid4())[:8]
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)

        # Re-creating a logger with the same name must not duplicate output
        if self._logger.hasHandlers():
            self._logger.handlers.clear()
        self._logger.propagate = False

        if json_format:
            formatter: logging.Formatter = JsonFormatter()
        else:
            formatter = TextFormatter(
                "%(asctime)s [%(levelname)s] [%(name)s] [session:%(session_id)s] %(message)s"
            )

        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(formatter)
        self._logger.addHandler(handler)

    @property
    def name(self) -> str:
        return self._name

    def get_session_id(self) -> str:
        return self._session_id

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        extra: Dict[str, Any] = {"session_id": self._session_id}
        for k, v in kwargs.items():
            # Reserved names would make logging raise KeyError
            extra[f"_{k}" if k in _RECORD_KEYS else k] = v
        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)
