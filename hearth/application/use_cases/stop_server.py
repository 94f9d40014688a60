"""
Stop Server Use Case

Architectural Intent:
- Gracefully stops the server and records the outcome
- Idempotent: stopping an already-stopped server (or a powered-off VM)
  succeeds with already_stopped=True
"""

import logging

from hearth.application.dtos.server_dtos import StopServerResult
from hearth.application.lifecycle.locks import ServerLocks
from hearth.application.lifecycle.shutdown_orchestrator import ShutdownOrchestrator
from hearth.domain.events.server_events import ServerStoppedEvent
from hearth.domain.ports.event_bus_port import EventBusPort
from hearth.domain.ports.result_sink_port import ResultSinkPort
from hearth.domain.value_objects.server_target import ServerTarget
from hearth.domain.value_objects.timings import LifecycleTimings

logger = logging.getLogger(__name__)


class StopServer:
    def __init__(
        self,
        orchestrator: ShutdownOrchestrator,
        results: ResultSinkPort,
        event_bus: EventBusPort,
        locks: ServerLocks,
        timings: LifecycleTimings,
    ):
        self.orchestrator = orchestrator
        self.results = results
        self.event_bus = event_bus
        self.locks = locks
        self.timings = timings

    async def execute(self, target: ServerTarget) -> StopServerResult:
        async with self.locks.for_target(target):
            report = await self.orchestrator.stop(
                target, self.timings.stop_timeout, self.timings.stop_interval
            )

        result = StopServerResult(
            success=True,
            already_stopped=report.already_stopped,
            timed_out=report.timed_out,
            ip=None if report.already_stopped else target.ssh_host,
        )
        logger.info(
            "[stop] Done (already_stopped=%s, timed_out=%s)",
            result.already_stopped, result.timed_out,
        )
        await self.results.write("server", target.server_name, result.to_record())
        await self.event_bus.publish([
            ServerStoppedEvent(
                aggregate_id=target.server_name,
                host=target.ssh_host,
                already_stopped=result.already_stopped,
                timed_out=result.timed_out,
            )
        ])
        return result
