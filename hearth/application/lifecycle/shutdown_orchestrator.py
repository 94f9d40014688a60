"""
Shutdown Orchestrator

Architectural Intent:
- Graceful, bounded, idempotent stop of the hosted process
- Sequence: gate -> "stop" into the session -> capture PID fresh ->
  poll `kill -0` until exit or deadline -> always kill the session
- Killing the session last keeps a wrapper restart loop from respawning
  the process
- A deadline miss is reported via timed_out, never raised

Concurrency:
- No lock here; overlapping stop/start against one session race on session
  identity. Use cases serialise per server through ServerLocks.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from hearth.application.lifecycle.session_manager import SessionManager
from hearth.application.lifecycle.shell import quote, unselfmatching
from hearth.application.lifecycle.transport_gate import TransportGate, TransportState
from hearth.domain.ports.clock_port import ClockPort
from hearth.domain.ports.remote_executor_port import RemoteExecutorPort
from hearth.domain.value_objects.deadline import Deadline
from hearth.domain.value_objects.node import Node
from hearth.domain.value_objects.server_target import ServerTarget

logger = logging.getLogger(__name__)

STOP_COMMAND = "stop"
WARN_MESSAGE = "== SERVER SHUTTING DOWN IN 30 SECONDS =="


@dataclass(frozen=True)
class ShutdownReport:
    already_stopped: bool
    timed_out: bool = False
    pid: Optional[int] = None
    elapsed: float = 0.0


class ProcessTracker:
    """
    Liveness checks for the hosted process by pattern and by PID.

    sshd runs every command through `$SHELL -c`, whose command line contains
    the pgrep pattern, so patterns are rewritten with unselfmatching().
    """

    def __init__(self, executor: RemoteExecutorPort):
        self.executor = executor

    async def any_running(self, node: Node, pattern: str) -> bool:
        pattern = quote(unselfmatching(pattern))
        result = await self.executor.run(
            node,
            f"pgrep -f {pattern} > /dev/null 2>&1 && echo running || echo stopped",
        )
        return result.stdout.strip() == "running"

    async def find_pid(self, node: Node, pattern: str, fallback: str) -> Optional[int]:
        pattern = quote(unselfmatching(pattern))
        fallback = quote(unselfmatching(fallback))
        result = await self.executor.run(
            node, f"pgrep -f {pattern} || pgrep -f {fallback}"
        )
        for line in result.stdout.splitlines():
            line = line.strip()
            if line.isdigit():
                return int(line)
        return None

    async def is_alive(self, node: Node, pid: int) -> bool:
        result = await self.executor.run(
            node, f"kill -0 {int(pid)} 2>/dev/null && echo running || echo stopped"
        )
        return result.stdout.strip() == "running"


class ShutdownOrchestrator:
    def __init__(
        self,
        gate: TransportGate,
        sessions: SessionManager,
        processes: ProcessTracker,
        clock: ClockPort,
    ):
        self.gate = gate
        self.sessions = sessions
        self.processes = processes
        self.clock = clock

    async def stop(
        self, target: ServerTarget, timeout: float = 90.0, interval: float = 3.0
    ) -> ShutdownReport:
        node = target.node()
        state = await self.gate.check(node)
        if state != TransportState.REACHABLE:
            logger.info("[stop] Host %s - VM may be stopped already", state.name.lower())
            return ShutdownReport(already_stopped=True)

        session_id = target.session_id()
        session_exists = await self.sessions.exists(node, session_id)
        process_running = await self.processes.any_running(node, target.process_fallback)
        if not session_exists and not process_running:
            logger.info("[stop] No tmux session and no server process - already stopped")
            return ShutdownReport(already_stopped=True)

        if session_exists:
            logger.info("[stop] Sending '%s' to tmux session '%s'...", STOP_COMMAND, session_id)
            await self.sessions.send(node, session_id, STOP_COMMAND)

        pid = await self.processes.find_pid(
            node, target.process_pattern, target.process_fallback
        )
        deadline = Deadline(self.clock.now(), timeout, interval)
        exited = False
        if pid is None:
            logger.info("[stop] No server process found after stop command")
            exited = True
        else:
            logger.info("[stop] Tracking PID %d, waiting for exit (up to %ss)...", pid, timeout)
            while not deadline.expired(self.clock.now()):
                await self.clock.sleep(interval)
                if not await self.processes.is_alive(node, pid):
                    exited = True
                    logger.info(
                        "[stop] PID %d exited after %.0fs",
                        pid, deadline.elapsed(self.clock.now()),
                    )
                    break

        timed_out = not exited
        if timed_out:
            logger.warning("[stop] Timed out waiting for PID %s to exit", pid)

        logger.info("[stop] Killing tmux session to prevent restart loop...")
        await self.sessions.kill(node, session_id)

        return ShutdownReport(
            already_stopped=False,
            timed_out=timed_out,
            pid=pid,
            elapsed=deadline.elapsed(self.clock.now()),
        )

    async def warn(
        self,
        target: ServerTarget,
        count: int = 3,
        pause: float = 30.0,
        message: str = WARN_MESSAGE,
    ) -> bool:
        """
        Broadcast a shutdown warning `count` times, then pause. Returns False
        without doing anything when there is no host or no session.
        """
        node = target.node()
        if await self.gate.check(node) != TransportState.REACHABLE:
            logger.info("[warn] No reachable host - skipping warning")
            return False
        session_id = target.session_id()
        if not await self.sessions.exists(node, session_id):
            logger.info("[warn] No tmux session - skipping warning")
            return False

        logger.info("[warn] Broadcasting shutdown warning...")
        for _ in range(count):
            await self.sessions.send(node, session_id, f"say {message}")
        if pause > 0:
            logger.info("[warn] Waiting %ss...", pause)
            await self.clock.sleep(pause)
        return True
