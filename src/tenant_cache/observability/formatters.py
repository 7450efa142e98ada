"""
Tenant Cache - Log Formatters

Text and JSON formatters for the event log. Both render the structured
``context`` mapping attached to each record by EventLogger.
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

LINE_FORMAT = "[%(asctime)s] %(levelname)s in %(pathname)s:%(lineno)d: %(message)s"

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = frozenset(
    (
        "args",
        "msg",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
        "asctime",
    )
)


def _to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


class ContextLineFormatter(logging.Formatter):
    """
    One line per record: ``[time] LEVEL in file:line: message {context}``.

    The file and line are those of the code that called the logger.
    """

    def __init__(self, fmt: str = LINE_FORMAT, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if context:
            line = f"{line} {_to_json(context)}"
        return line


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        # Add any extra fields (including "context")
        for key, value in record.__dict__.items():
            if key not in log_data and not key.startswith("_") and key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return _to_json(log_data)
