"""
Domain Events Package

Architectural Intent:
- Contains lifecycle events emitted by server operations
- Events are the mechanism for observers (audit, notifications) to react
"""

from hearth.domain.events.event_base import DomainEvent
from hearth.domain.events.server_events import (
    ServerStartedEvent,
    ServerStartFailedEvent,
    ServerStoppedEvent,
    StatusQueriedEvent,
)

__all__ = [
    "DomainEvent",
    "ServerStartedEvent",
    "ServerStartFailedEvent",
    "ServerStoppedEvent",
    "StatusQueriedEvent",
]
