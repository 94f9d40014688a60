"""
Readiness Poller

Architectural Intent:
- Bounded loop taking a freshly started server from WAITING to
  READY, DEAD or TIMED_OUT
- Both signals are checked every tick, log first: the ready marker is the
  authoritative success signal, a vanished session means the process died
- The deadline is checked before sleeping, and the log and session are
  checked again after waking, so the tick that crosses the deadline still
  gets one final look before TIMED_OUT
"""

import logging

from hearth.application.lifecycle.log_tail import LogTailReader
from hearth.application.lifecycle.session_manager import SessionManager
from hearth.domain.ports.clock_port import ClockPort
from hearth.domain.value_objects.deadline import Deadline
from hearth.domain.value_objects.node import Node
from hearth.domain.value_objects.readiness import ReadinessOutcome, ReadinessState
from hearth.domain.value_objects.session_id import SessionId

logger = logging.getLogger(__name__)


class ReadinessPoller:
    def __init__(self, sessions: SessionManager, logs: LogTailReader, clock: ClockPort):
        self.sessions = sessions
        self.logs = logs
        self.clock = clock

    async def wait(
        self,
        node: Node,
        session_id: SessionId,
        log_path: str,
        startup_log: str,
        marker: str,
        timeout: float,
        interval: float,
    ) -> ReadinessOutcome:
        deadline = Deadline(self.clock.now(), timeout, interval)
        logger.info("[start] Waiting up to %ss for server to be ready...", timeout)

        while True:
            if await self.logs.contains(node, log_path, marker):
                elapsed = deadline.elapsed(self.clock.now())
                logger.info("[start] Server is ready! (%.0fs)", elapsed)
                return ReadinessOutcome(ReadinessState.READY, elapsed)

            if not await self.sessions.exists(node, session_id):
                elapsed = deadline.elapsed(self.clock.now())
                logger.warning(
                    "[start] Session '%s' exited before becoming ready (%.0fs)",
                    session_id, elapsed,
                )
                output = await self.logs.read_all(node, startup_log)
                return ReadinessOutcome(ReadinessState.DEAD, elapsed, output)

            now = self.clock.now()
            if deadline.expired(now):
                logger.warning("[start] Server did not become ready within %ss", timeout)
                output = await self.logs.read_all(node, startup_log)
                return ReadinessOutcome(
                    ReadinessState.TIMED_OUT, deadline.elapsed(now), output
                )

            logger.info(
                "[start] Server not ready yet (%.0fs elapsed), polling in %ss...",
                deadline.elapsed(now), interval,
            )
            await self.clock.sleep(interval)
