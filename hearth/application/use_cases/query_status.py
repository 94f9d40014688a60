"""
Query Status Use Case

Architectural Intent:
- Asks the live server for its player list and records a fresh status
- Never raises for absence or an unparseable answer; see StatusQueryProtocol
"""

from hearth.application.dtos.server_dtos import StatusResult
from hearth.application.lifecycle.locks import ServerLocks
from hearth.application.lifecycle.status_query import StatusQueryProtocol
from hearth.domain.events.server_events import StatusQueriedEvent
from hearth.domain.ports.event_bus_port import EventBusPort
from hearth.domain.ports.result_sink_port import ResultSinkPort
from hearth.domain.value_objects.server_target import ServerTarget
from hearth.domain.value_objects.timings import LifecycleTimings


class QueryStatus:
    def __init__(
        self,
        protocol: StatusQueryProtocol,
        results: ResultSinkPort,
        event_bus: EventBusPort,
        locks: ServerLocks,
        timings: LifecycleTimings,
    ):
        self.protocol = protocol
        self.results = results
        self.event_bus = event_bus
        self.locks = locks
        self.timings = timings

    async def execute(self, target: ServerTarget) -> StatusResult:
        async with self.locks.for_target(target):
            status = await self.protocol.query(
                target,
                settle=self.timings.settle,
                retry_window=self.timings.status_retry_window,
                retry_interval=self.timings.status_retry_interval,
            )

        result = StatusResult(status=status)
        await self.results.write("server", target.server_name, result.to_record())
        await self.event_bus.publish([
            StatusQueriedEvent(
                aggregate_id=target.server_name,
                running=status.running,
                online=status.online,
                max_players=status.max_players,
            )
        ])
        return result
