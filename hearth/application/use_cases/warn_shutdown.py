"""
Warn Shutdown Use Case

Broadcasts the shutdown warning and pauses before the caller stops the
server. Advisory only: it never fails the overall flow.
"""

from hearth.application.dtos.server_dtos import ConsoleResult
from hearth.application.lifecycle.locks import ServerLocks
from hearth.application.lifecycle.shutdown_orchestrator import ShutdownOrchestrator
from hearth.domain.ports.result_sink_port import ResultSinkPort
from hearth.domain.value_objects.server_target import ServerTarget
from hearth.domain.value_objects.timings import LifecycleTimings


class WarnShutdown:
    def __init__(
        self,
        orchestrator: ShutdownOrchestrator,
        results: ResultSinkPort,
        locks: ServerLocks,
        timings: LifecycleTimings,
    ):
        self.orchestrator = orchestrator
        self.results = results
        self.locks = locks
        self.timings = timings

    async def execute(self, target: ServerTarget) -> ConsoleResult:
        async with self.locks.for_target(target):
            warned = await self.orchestrator.warn(
                target, count=self.timings.warn_count, pause=self.timings.warn_pause
            )
        result = ConsoleResult(success=True, skipped=not warned)
        await self.results.write("server", target.server_name, result.to_record())
        return result
