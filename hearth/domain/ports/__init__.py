"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the lifecycle controller needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from hearth.domain.ports.remote_executor_port import CommandResult, RemoteExecutorPort
from hearth.domain.ports.clock_port import ClockPort
from hearth.domain.ports.result_sink_port import ResultRecord, ResultSinkPort
from hearth.domain.ports.metrics_sink_port import MetricsSinkPort
from hearth.domain.ports.event_bus_port import EventBusPort

__all__ = [
    "CommandResult",
    "RemoteExecutorPort",
    "ClockPort",
    "ResultRecord",
    "ResultSinkPort",
    "MetricsSinkPort",
    "EventBusPort",
]
