"""
Collect Metrics Use Case

Architectural Intent:
- Runs the status query and hands the result to the metrics sink
- The monitoring view has no "unknown": an unparseable answer counts as
  zero players online
- With no reachable host nothing is written remotely; only the result
  record is kept
"""

import logging

from hearth.application.dtos.server_dtos import MetricsResult
from hearth.application.lifecycle.locks import ServerLocks
from hearth.application.lifecycle.status_query import StatusQueryProtocol
from hearth.application.lifecycle.transport_gate import TransportGate, TransportState
from hearth.domain.ports.metrics_sink_port import MetricsSinkPort
from hearth.domain.ports.result_sink_port import ResultSinkPort
from hearth.domain.value_objects.server_status import MetricsSnapshot
from hearth.domain.value_objects.server_target import ServerTarget
from hearth.domain.value_objects.timings import LifecycleTimings

logger = logging.getLogger(__name__)


class CollectMetrics:
    def __init__(
        self,
        gate: TransportGate,
        protocol: StatusQueryProtocol,
        metrics: MetricsSinkPort,
        results: ResultSinkPort,
        locks: ServerLocks,
        timings: LifecycleTimings,
    ):
        self.gate = gate
        self.protocol = protocol
        self.metrics = metrics
        self.results = results
        self.locks = locks
        self.timings = timings

    async def execute(self, target: ServerTarget) -> MetricsResult:
        async with self.locks.for_target(target):
            node = target.node()
            state = await self.gate.check(node)
            if state != TransportState.REACHABLE:
                logger.info("[metrics] Host %s - server not running", state.name.lower())
                result = MetricsResult(
                    snapshot=MetricsSnapshot(running=False), published=False
                )
            else:
                status = await self.protocol.query_reachable(
                    node,
                    target,
                    settle=self.timings.settle,
                    retry_window=self.timings.status_retry_window,
                    retry_interval=self.timings.status_retry_interval,
                )
                snapshot = MetricsSnapshot.from_status(status)
                await self.metrics.publish(node, target.game, target.server_name, snapshot)
                logger.info(
                    "[metrics] %d/%s players: %s",
                    snapshot.online,
                    snapshot.max_players if snapshot.max_players is not None else "?",
                    ", ".join(snapshot.players) or "(none)",
                )
                result = MetricsResult(snapshot=snapshot, published=True)

        await self.results.write("metrics", target.server_name, result.to_record())
        return result
