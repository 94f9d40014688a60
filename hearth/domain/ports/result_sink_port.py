"""
Result Sink Port

Architectural Intent:
- Durable store for one structured result record per operation
- The controller only promises "one record per operation", no transactions
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any


@dataclass(frozen=True)
class ResultRecord:
    kind: str
    name: str
    data: dict[str, Any]
    recorded_at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())


class ResultSinkPort(ABC):
    @abstractmethod
    async def write(self, kind: str, name: str, data: dict[str, Any]) -> ResultRecord:
        """
        Records the result of an operation. kind is "server" or "metrics".
        """
        pass

    @abstractmethod
    async def latest(self, kind: str, name: str) -> ResultRecord | None:
        """
        Returns the most recent record for kind/name, or None.
        """
        pass
