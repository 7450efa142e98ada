"""
Tenant Cache - Event Logger

A rotating-file logger that doubles as the cache's event recorder.

Each EventLogger is constructed explicitly and passed to whatever needs it;
there is no process-wide instance. Log files rotate daily and the newest
``max_files`` rotations are kept.

Usage:
    with EventLogger(log_path="/var/log/app", logger_name="cache") as events:
        cache = TenantCache(options, event_recorder=events)
        events.info("Cache warmed", {"entries": 42})
"""

import logging
from collections.abc import Mapping
from enum import Enum
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from types import TracebackType
from typing import Any

from ..config.schemas import LoggingSettings
from .events import EventKind
from .formatters import ContextLineFormatter, JSONFormatter

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

_EVENT_MESSAGES = {
    EventKind.REQUEST_RECEIVED: "Request received",
    EventKind.RESPONSE_RECEIVED: "Response received",
}


def form_logger_name(path: str, name: str) -> str:
    """
    Build the log file path for a logger.

    Trailing slashes on path are ignored and path separators in name are
    replaced with underscores: ``("/var/logs/", "a/b")`` -> ``/var/logs/a_b.log``.
    """
    path = path.rstrip("/") + "/"
    name = name.replace("/", "_").replace("\\", "_")
    return f"{path}{name}.log"


def resolve_level(level: int | str | Enum) -> int:
    """Return the numeric logging level for an int, level name or LogLevel."""
    if isinstance(level, int):
        return level
    name = str(level.value if isinstance(level, Enum) else level).upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


class EventLogger:
    """
    Leveled logger writing to a daily-rotated file.

    Records carry the caller's file and line and an optional structured
    context mapping.
    """

    def __init__(
        self,
        log_path: str = "/tmp",
        logger_name: str = "tenant_cache",
        max_files: int = 10,
        level: int | str | Enum = logging.DEBUG,
        json_format: bool = False,
    ) -> None:
        """
        Create the logger and open its log file.

        Args:
            log_path: Directory holding the log files
            logger_name: Logger name, also the log file's base name
            max_files: Number of rotated files to keep
            level: Minimum level written
            json_format: Write JSON lines instead of plain text
        """
        self.log_file = Path(form_logger_name(log_path, logger_name))
        self.max_files = max_files

        # Not registered with logging.getLogger(): each instance has its own handlers
        self.logger = logging.Logger(logger_name, level=resolve_level(level))

        self._handler = TimedRotatingFileHandler(
            self.log_file,
            when="midnight",
            backupCount=max_files,
            encoding="utf-8",
        )
        self._handler.setFormatter(JSONFormatter() if json_format else ContextLineFormatter())
        self.logger.addHandler(self._handler)

    @classmethod
    def from_settings(cls, settings: LoggingSettings) -> "EventLogger":
        """Create an EventLogger from the logging section of loaded settings."""
        return cls(
            log_path=settings.log_path,
            logger_name=settings.logger_name,
            max_files=settings.max_files,
            level=settings.level,
            json_format=settings.json_format,
        )

    # stacklevel=3 attributes records to the caller of the public method
    def _emit(self, level: int, message: str, context: Mapping[str, Any] | None) -> None:
        self.logger.log(level, message, extra={"context": dict(context or {})}, stacklevel=3)

    def log(self, level: int | str | Enum, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._emit(resolve_level(level), message, context)

    def debug(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._emit(logging.DEBUG, message, context)

    def info(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._emit(logging.INFO, message, context)

    def notice(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._emit(NOTICE, message, context)

    def warning(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._emit(logging.WARNING, message, context)

    def error(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._emit(logging.ERROR, message, context)

    def log_request(self, request: Mapping[str, Any]) -> None:
        self._emit(logging.INFO, _EVENT_MESSAGES[EventKind.REQUEST_RECEIVED], request)

    def log_response(self, response: Mapping[str, Any]) -> None:
        self._emit(logging.INFO, _EVENT_MESSAGES[EventKind.RESPONSE_RECEIVED], response)

    def record_event(self, kind: EventKind | str, payload: Mapping[str, Any]) -> None:
        """Log a cache event at INFO level (EventRecorder protocol)."""
        self._emit(logging.INFO, _EVENT_MESSAGES[EventKind(kind)], payload)

    def close(self) -> None:
        """Flush and close the log file."""
        self.logger.removeHandler(self._handler)
        self._handler.close()

    def __enter__(self) -> "EventLogger":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
