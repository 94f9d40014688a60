"""
Status Query Protocol

Architectural Intent:
- Request/response on top of an unstructured channel: send "list" into the
  session, then read the answer back out of the log
- The watermark is captured before the command is sent
- The settle interval is an empirical pause, not an acknowledgment
- Absence (no host, no session) reports "not running"; an unparseable
  answer reports "running, status undetermined". Neither raises.
"""

from __future__ import annotations
import logging
from typing import Optional

from hearth.application.lifecycle.log_tail import LogTailReader
from hearth.application.lifecycle.session_manager import SessionManager
from hearth.application.lifecycle.transport_gate import TransportGate, TransportState
from hearth.domain.services.output_matcher import OutputMatcher, PlayerListMatcher
from hearth.domain.value_objects.node import Node
from hearth.domain.value_objects.server_status import PlayerList, ServerStatus
from hearth.domain.value_objects.server_target import ServerTarget

logger = logging.getLogger(__name__)

LIST_COMMAND = "list"


class StatusQueryProtocol:
    def __init__(
        self,
        gate: TransportGate,
        sessions: SessionManager,
        logs: LogTailReader,
        matcher: Optional[OutputMatcher[PlayerList]] = None,
    ):
        self.gate = gate
        self.sessions = sessions
        self.logs = logs
        self.matcher = matcher or PlayerListMatcher()

    async def query(
        self,
        target: ServerTarget,
        settle: float = 2.0,
        retry_window: float = 0.0,
        retry_interval: float = 0.5,
    ) -> ServerStatus:
        node = target.node()
        state = await self.gate.check(node)
        if state != TransportState.REACHABLE:
            logger.info("[status] Host %s - server not running", state.name.lower())
            return ServerStatus.not_running()
        return await self.query_reachable(
            node, target, settle, retry_window, retry_interval
        )

    async def query_reachable(
        self,
        node: Node,
        target: ServerTarget,
        settle: float = 2.0,
        retry_window: float = 0.0,
        retry_interval: float = 0.5,
    ) -> ServerStatus:
        """Run the protocol against a host the caller already found reachable."""
        session_id = target.session_id()
        if not await self.sessions.exists(node, session_id):
            logger.info("[status] No tmux session - server not running")
            return ServerStatus.not_running()

        watermark = await self.logs.watermark(node, target.log_path)
        logger.info("[status] Log has %d lines, sending '%s' command...", watermark, LIST_COMMAND)
        await self.sessions.send(node, session_id, LIST_COMMAND)

        player_list = await self.logs.await_pattern(
            node,
            target.log_path,
            watermark,
            self.matcher,
            settle=settle,
            retry_window=retry_window,
            retry_interval=retry_interval,
        )
        if player_list is None:
            logger.info("[status] Could not parse player list from log")
            return ServerStatus.undetermined()

        logger.info(
            "[status] %d/%d players online: %s",
            player_list.online,
            player_list.max_players,
            ", ".join(player_list.players) or "(none)",
        )
        return ServerStatus.from_player_list(player_list)
