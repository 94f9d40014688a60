"""
Server Status Value Objects

Architectural Intent:
- ServerStatus is produced fresh by every status query and never cached
- "unknown" (None) is a distinct value from zero for online/max
- MetricsSnapshot is the monitoring view of a status, where unknown
  collapses to zero players
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PlayerList:
    """A successfully parsed player-list response."""
    online: int
    max_players: int
    players: tuple[str, ...] = ()


@dataclass(frozen=True)
class ServerStatus:
    running: bool
    online: Optional[int] = None
    max_players: Optional[int] = None
    players: tuple[str, ...] = ()

    @classmethod
    def not_running(cls) -> "ServerStatus":
        return cls(running=False)

    @classmethod
    def undetermined(cls) -> "ServerStatus":
        return cls(running=True)

    @classmethod
    def from_player_list(cls, player_list: PlayerList) -> "ServerStatus":
        return cls(
            running=True,
            online=player_list.online,
            max_players=player_list.max_players,
            players=player_list.players,
        )

    @property
    def determined(self) -> bool:
        return self.online is not None

    def to_dict(self) -> dict:
        return {
            "server_running": self.running,
            "online": self.online,
            "max": self.max_players,
            "players": list(self.players),
        }


@dataclass(frozen=True)
class MetricsSnapshot:
    running: bool
    online: int = 0
    max_players: Optional[int] = None
    players: tuple[str, ...] = ()

    @classmethod
    def from_status(cls, status: ServerStatus) -> "MetricsSnapshot":
        return cls(
            running=status.running,
            online=status.online or 0,
            max_players=status.max_players,
            players=status.players,
        )

    def to_dict(self) -> dict:
        return {
            "server_running": self.running,
            "online": self.online,
            "max": self.max_players,
            "players": list(self.players),
        }
