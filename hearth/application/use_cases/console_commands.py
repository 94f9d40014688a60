"""
Console Commands Use Case

Architectural Intent:
- Fire-and-forget console commands typed into the server session:
  say (broadcast), op and deop (operator status)
- Gated like every other operation: no host or no session means the
  command is skipped, not failed
- Player names are reduced to [A-Za-z0-9_] before reaching the console
"""

from __future__ import annotations
import logging
import re

from hearth.application.dtos.server_dtos import ConsoleResult
from hearth.application.lifecycle.locks import ServerLocks
from hearth.application.lifecycle.session_manager import SessionManager
from hearth.application.lifecycle.transport_gate import TransportGate, TransportState
from hearth.domain.ports.result_sink_port import ResultSinkPort
from hearth.domain.value_objects.server_target import ServerTarget

logger = logging.getLogger(__name__)

_PLAYER_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_]")


def sanitize_player_name(name: str) -> str:
    return _PLAYER_UNSAFE_RE.sub("", name)


class ConsoleCommands:
    def __init__(
        self,
        gate: TransportGate,
        sessions: SessionManager,
        results: ResultSinkPort,
        locks: ServerLocks,
    ):
        self.gate = gate
        self.sessions = sessions
        self.results = results
        self.locks = locks

    async def say(self, target: ServerTarget, message: str) -> ConsoleResult:
        if not message or not message.strip():
            raise ValueError("message is required")
        # one console line per command
        line = " ".join(message.split())
        return await self._send(target, "say", f"say {line}")

    async def op(self, target: ServerTarget, player_name: str) -> ConsoleResult:
        name = self._require_player(player_name)
        return await self._send(target, "op", f"op {name}")

    async def deop(self, target: ServerTarget, player_name: str) -> ConsoleResult:
        name = self._require_player(player_name)
        return await self._send(target, "deop", f"deop {name}")

    @staticmethod
    def _require_player(player_name: str) -> str:
        if not player_name:
            raise ValueError("player_name is required")
        name = sanitize_player_name(player_name)
        if not name:
            raise ValueError(f"player_name has no valid characters: {player_name!r}")
        return name

    async def _send(self, target: ServerTarget, operation: str, line: str) -> ConsoleResult:
        async with self.locks.for_target(target):
            node = target.node()
            state = await self.gate.check(node)
            if state != TransportState.REACHABLE:
                logger.info("[%s] Host %s - skipping", operation, state.name.lower())
                result = ConsoleResult(success=True, skipped=True)
            elif not await self.sessions.exists(node, target.session_id()):
                logger.info("[%s] No tmux session - server not running", operation)
                result = ConsoleResult(success=True, skipped=True)
            else:
                logger.info("[%s] Sending: %s", operation, line)
                sent = await self.sessions.send(node, target.session_id(), line)
                result = ConsoleResult(success=sent, skipped=False)

        await self.results.write("server", target.server_name, result.to_record())
        return result
