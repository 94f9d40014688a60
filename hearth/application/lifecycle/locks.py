"""
Per-server operation locks.

Serialises lifecycle operations issued through one controller against the
same host/session. Controllers in other processes are not covered; callers
that run several must serialise them externally.
"""

import asyncio

from hearth.domain.value_objects.server_target import ServerTarget


class ServerLocks:
    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def for_target(self, target: ServerTarget) -> asyncio.Lock:
        key = target.lock_key
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]
