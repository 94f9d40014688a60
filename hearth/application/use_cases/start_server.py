"""
Start Server Use Case

Architectural Intent:
- Starts the game server in a fresh tmux session and waits for readiness
- Order matters: kill any stale session, truncate the logs, create the
  session, then poll. A restart after a crash never attaches to a zombie
  session and never reads the previous run's ready marker.
- Unlike stop/status, an absent host is an error here: no server results

Failure Modes:
- TransportError: no host configured, or SSH never answered
- SessionCreateError: tmux rejected the session (propagated as-is)
- ServerStartError: process died early or never became ready; carries the
  captured start script output
"""

from __future__ import annotations
import logging

from hearth.application.dtos.server_dtos import StartServerResult
from hearth.application.lifecycle.locks import ServerLocks
from hearth.application.lifecycle.log_tail import LogTailReader
from hearth.application.lifecycle.readiness_poller import ReadinessPoller
from hearth.application.lifecycle.session_manager import SessionCreateError, SessionManager
from hearth.application.lifecycle.transport_gate import TransportGate
from hearth.domain.events.event_base import DomainEvent
from hearth.domain.events.server_events import ServerStartedEvent, ServerStartFailedEvent
from hearth.domain.ports.event_bus_port import EventBusPort
from hearth.domain.ports.result_sink_port import ResultSinkPort
from hearth.domain.value_objects.readiness import ReadinessState
from hearth.domain.value_objects.server_target import ServerTarget
from hearth.domain.value_objects.timings import LifecycleTimings

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """The remote host is not configured or not reachable."""


class ServerStartError(Exception):
    """The server process did not reach readiness."""

    def __init__(self, state: ReadinessState, message: str, output: str = ""):
        super().__init__(f"{message}. start script output:\n{output}" if output else message)
        self.state = state
        self.output = output


class StartServer:
    def __init__(
        self,
        gate: TransportGate,
        sessions: SessionManager,
        logs: LogTailReader,
        poller: ReadinessPoller,
        results: ResultSinkPort,
        event_bus: EventBusPort,
        locks: ServerLocks,
        timings: LifecycleTimings,
    ):
        self.gate = gate
        self.sessions = sessions
        self.logs = logs
        self.poller = poller
        self.results = results
        self.event_bus = event_bus
        self.locks = locks
        self.timings = timings

    async def execute(self, target: ServerTarget) -> StartServerResult:
        async with self.locks.for_target(target):
            try:
                return await self._start(target)
            except (TransportError, SessionCreateError, ServerStartError) as e:
                reason = str(e).splitlines()[0] if str(e) else type(e).__name__
                failed = StartServerResult(
                    success=False, ip=target.ssh_host, server_ready=False, error=reason
                )
                await self.results.write("server", target.server_name, failed.to_record())
                await self._publish(
                    ServerStartFailedEvent(
                        aggregate_id=target.server_name,
                        host=target.ssh_host,
                        session=target.tmux_session,
                        reason=reason,
                    )
                )
                raise

    async def _start(self, target: ServerTarget) -> StartServerResult:
        node = target.node()
        if node is None:
            raise TransportError("ssh_host is required - is the VM running?")

        logger.info("[start] Waiting for SSH on %s...", node.host)
        reachable = await self.gate.wait_until_reachable(
            node, self.timings.ssh_wait_timeout, self.timings.ssh_wait_interval
        )
        if not reachable:
            raise TransportError(
                f"SSH not reachable on {node.host} after {self.timings.ssh_wait_timeout:.0f}s"
            )

        session_id = target.session_id()
        logger.info("[start] Cleaning up stale tmux session...")
        await self.sessions.kill(node, session_id)

        await self.logs.reset(node, target.log_path)
        await self.logs.reset(node, target.start_log_path)

        logger.info(
            "[start] Starting server in tmux session '%s', output -> %s...",
            session_id, target.start_log_path,
        )
        await self.sessions.create(node, session_id, target.server_dir, target.start_command)

        outcome = await self.poller.wait(
            node,
            session_id,
            target.log_path,
            target.start_log_path,
            target.ready_marker,
            self.timings.ready_timeout,
            self.timings.ready_interval,
        )
        if outcome.state == ReadinessState.DEAD:
            raise ServerStartError(
                outcome.state, "Server process exited before becoming ready", outcome.output
            )
        if outcome.state == ReadinessState.TIMED_OUT:
            raise ServerStartError(
                outcome.state,
                f"Server did not become ready within {self.timings.ready_timeout:.0f}s",
                outcome.output,
            )

        result = StartServerResult(
            success=True,
            ip=node.host,
            server_ready=True,
            elapsed_seconds=outcome.elapsed,
        )
        await self.results.write("server", target.server_name, result.to_record())
        await self._publish(
            ServerStartedEvent(
                aggregate_id=target.server_name,
                host=node.host,
                session=str(session_id),
                elapsed_seconds=outcome.elapsed,
            )
        )
        return result

    async def _publish(self, event: DomainEvent) -> None:
        await self.event_bus.publish([event])
