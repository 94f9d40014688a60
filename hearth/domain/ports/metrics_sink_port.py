"""
Metrics Sink Port

Architectural Intent:
- Converts an already-computed MetricsSnapshot into a monitoring exposition
  and an audit line
- Knows nothing about sessions or logs
"""

from abc import ABC, abstractmethod

from hearth.domain.value_objects.node import Node
from hearth.domain.value_objects.server_status import MetricsSnapshot


class MetricsSinkPort(ABC):
    @abstractmethod
    async def publish(
        self, node: Node, game: str, server_name: str, snapshot: MetricsSnapshot
    ) -> None:
        pass
