"""
Output Matching Service

Architectural Intent:
- Recognises an expected response inside freshly appended log text
- Kept apart from the polling and timeout logic so the pattern can be
  swapped or hardened without touching the query protocol

Domain Logic:
- The server answers "list" with a line like
  "There are 2 of a max of 20 players online: Alice, Bob"
- An empty name list after a match is an empty tuple, not "unknown"
- Trailing commas and stray whitespace between names are tolerated
"""

from __future__ import annotations
import re
from typing import Generic, Optional, Protocol, TypeVar

from hearth.domain.value_objects.server_status import PlayerList

T = TypeVar("T", covariant=True)

PLAYER_LIST_RE = re.compile(
    r"There are (\d+) of a max of (\d+) players online:(.*)"
)


class OutputMatcher(Protocol, Generic[T]):
    """Port for anything that can pick a response out of new log output."""

    def match(self, text: str) -> Optional[T]: ...


class PlayerListMatcher:
    """Parses the server's answer to the "list" console command."""

    def __init__(self, pattern: re.Pattern = PLAYER_LIST_RE):
        self.pattern = pattern

    def match(self, text: str) -> Optional[PlayerList]:
        m = self.pattern.search(text)
        if not m:
            return None
        return PlayerList(
            online=int(m.group(1)),
            max_players=int(m.group(2)),
            players=split_names(m.group(3)),
        )


def split_names(raw: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in raw.split(",") if name.strip())
