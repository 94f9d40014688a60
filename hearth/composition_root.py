"""
Composition Root

Architectural Intent:
- Dependency injection composition root for the Hearth controller
- Single place where adapters, lifecycle components and use cases are wired
- No adapter instantiation should occur outside this module

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Executor, clock and result sink can be overridden (tests, embedding)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from hearth.application.lifecycle.locks import ServerLocks
from hearth.application.lifecycle.log_tail import LogTailReader
from hearth.application.lifecycle.readiness_poller import ReadinessPoller
from hearth.application.lifecycle.session_manager import SessionManager
from hearth.application.lifecycle.shutdown_orchestrator import (
    ProcessTracker,
    ShutdownOrchestrator,
)
from hearth.application.lifecycle.status_query import StatusQueryProtocol
from hearth.application.lifecycle.transport_gate import TransportGate
from hearth.application.use_cases.collect_metrics import CollectMetrics
from hearth.application.use_cases.console_commands import ConsoleCommands
from hearth.application.use_cases.query_status import QueryStatus
from hearth.application.use_cases.start_server import StartServer
from hearth.application.use_cases.stop_server import StopServer
from hearth.application.use_cases.warn_shutdown import WarnShutdown
from hearth.domain.ports.clock_port import ClockPort
from hearth.domain.ports.remote_executor_port import RemoteExecutorPort
from hearth.domain.ports.result_sink_port import ResultSinkPort
from hearth.infrastructure.adapters.fabric_executor import FabricExecutor
from hearth.infrastructure.adapters.system_clock import SystemClock
from hearth.infrastructure.config import HearthConfig
from hearth.infrastructure.event_bus import EventBus
from hearth.infrastructure.metrics.textfile_metrics_sink import TextfileMetricsSink
from hearth.infrastructure.repositories.in_memory_result_sink import InMemoryResultSink
from hearth.infrastructure.repositories.sqlite_result_sink import SQLiteResultSink


@dataclass
class HearthContainer:
    """DI container holding all wired dependencies."""

    config: HearthConfig
    executor: RemoteExecutorPort
    clock: ClockPort
    results: ResultSinkPort
    event_bus: EventBus
    gate: TransportGate
    sessions: SessionManager
    logs: LogTailReader
    start_server: StartServer
    stop_server: StopServer
    query_status: QueryStatus
    warn_shutdown: WarnShutdown
    console: ConsoleCommands
    collect_metrics: CollectMetrics


def _default_result_sink(config: HearthConfig) -> ResultSinkPort:
    if config.results.db_path:
        sink = SQLiteResultSink(config.results.db_path)
        sink.connect()
        return sink
    return InMemoryResultSink()


def create_container(
    config: Optional[HearthConfig] = None,
    executor: Optional[RemoteExecutorPort] = None,
    clock: Optional[ClockPort] = None,
    results: Optional[ResultSinkPort] = None,
) -> HearthContainer:
    """Create and wire all dependencies."""
    config = config or HearthConfig()
    timings = config.timing
    executor = executor or FabricExecutor(connect_timeout=timings.connect_timeout)
    clock = clock or SystemClock()
    results = results or _default_result_sink(config)
    event_bus = EventBus()
    locks = ServerLocks()

    gate = TransportGate(executor, clock)
    sessions = SessionManager(executor)
    logs = LogTailReader(executor, clock)
    poller = ReadinessPoller(sessions, logs, clock)
    protocol = StatusQueryProtocol(gate, sessions, logs)
    orchestrator = ShutdownOrchestrator(gate, sessions, ProcessTracker(executor), clock)
    metrics = TextfileMetricsSink(
        executor, config.metrics.textfile_dir, config.metrics.audit_log
    )

    return HearthContainer(
        config=config,
        executor=executor,
        clock=clock,
        results=results,
        event_bus=event_bus,
        gate=gate,
        sessions=sessions,
        logs=logs,
        start_server=StartServer(
            gate, sessions, logs, poller, results, event_bus, locks, timings
        ),
        stop_server=StopServer(orchestrator, results, event_bus, locks, timings),
        query_status=QueryStatus(protocol, results, event_bus, locks, timings),
        warn_shutdown=WarnShutdown(orchestrator, results, locks, timings),
        console=ConsoleCommands(gate, sessions, results, locks),
        collect_metrics=CollectMetrics(gate, protocol, metrics, results, locks, timings),
    )
