"""
Transport Gate

Architectural Intent:
- Decides whether the remote host is usable before any other remote call
- NOT_CONFIGURED and UNREACHABLE are operational states, not errors: callers
  treat them as "target already in the state this operation would produce"
- Checks reachability with a side-effect-free `echo ok`
"""

from __future__ import annotations
import logging
from enum import Enum, auto
from typing import Optional

from hearth.domain.ports.clock_port import ClockPort
from hearth.domain.ports.remote_executor_port import RemoteExecutorPort
from hearth.domain.value_objects.deadline import Deadline
from hearth.domain.value_objects.node import Node

logger = logging.getLogger(__name__)

REACHABILITY_COMMAND = "echo ok"


class TransportState(Enum):
    NOT_CONFIGURED = auto()
    UNREACHABLE = auto()
    REACHABLE = auto()


class TransportGate:
    def __init__(self, executor: RemoteExecutorPort, clock: ClockPort):
        self.executor = executor
        self.clock = clock

    async def check(self, node: Optional[Node]) -> TransportState:
        if node is None:
            return TransportState.NOT_CONFIGURED
        try:
            result = await self.executor.run(node, REACHABILITY_COMMAND)
        except (ConnectionError, TimeoutError, OSError) as e:
            logger.debug("Reachability check of %s raised: %s", node, e)
            return TransportState.UNREACHABLE
        if not result.ok:
            logger.debug("Reachability check of %s exited %d: %s", node, result.exit_code, result.stderr)
            return TransportState.UNREACHABLE
        return TransportState.REACHABLE

    async def wait_until_reachable(
        self, node: Optional[Node], timeout: float, interval: float
    ) -> bool:
        """Poll `echo ok` until the host answers or the timeout elapses."""
        if node is None:
            return False
        deadline = Deadline(self.clock.now(), timeout, interval)
        while True:
            if await self.check(node) == TransportState.REACHABLE:
                return True
            if deadline.expired(self.clock.now()):
                return False
            logger.info(
                "Waiting for SSH on %s (%.0fs elapsed)...",
                node.host, deadline.elapsed(self.clock.now()),
            )
            await self.clock.sleep(interval)
