"""
Tenant Cache - Observability Module

Event reporting for the cache and the rotating-file EventLogger that
implements it.

Usage:
    from tenant_cache.observability import EventLogger

    events = EventLogger(log_path="/var/log/app", logger_name="cache")
    cache = TenantCache(options, event_recorder=events)
"""

from .events import EventKind, EventRecorder
from .formatters import ContextLineFormatter, JSONFormatter
from .logger import NOTICE, EventLogger, form_logger_name

__all__ = [
    # Event protocol
    "EventKind",
    "EventRecorder",
    # Logger
    "EventLogger",
    "form_logger_name",
    "NOTICE",
    # Formatters
    "ContextLineFormatter",
    "JSONFormatter",
]
