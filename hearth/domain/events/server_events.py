"""
Server Lifecycle Events

Published by the use cases once an operation reaches its result.
aggregate_id is the server name.
"""

from dataclasses import dataclass
from typing import Optional

from hearth.domain.events.event_base import DomainEvent


@dataclass(frozen=True)
class ServerStartedEvent(DomainEvent):
    host: str = ""
    session: str = ""
    elapsed_seconds: float = 0.0


@dataclass(frozen=True)
class ServerStartFailedEvent(DomainEvent):
    host: str = ""
    session: str = ""
    reason: str = ""


@dataclass(frozen=True)
class ServerStoppedEvent(DomainEvent):
    host: str = ""
    already_stopped: bool = False
    timed_out: bool = False


@dataclass(frozen=True)
class StatusQueriedEvent(DomainEvent):
    running: bool = False
    online: Optional[int] = None
    max_players: Optional[int] = None
