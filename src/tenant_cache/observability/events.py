"""
Tenant Cache - Event Reporting Protocol

The narrow interface through which the cache reports activity to a logging
collaborator. Any object with a matching record_event() method can be injected.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class EventKind(str, Enum):
    """Kinds of events reported by the cache."""

    REQUEST_RECEIVED = "request_received"
    RESPONSE_RECEIVED = "response_received"


@runtime_checkable
class EventRecorder(Protocol):
    """Collaborator accepting structured events."""

    def record_event(self, kind: EventKind, payload: Mapping[str, Any]) -> None: ...
