"""
Server Operation DTOs

Architectural Intent:
- Result objects returned by the use cases at the application boundary
- to_record() gives the payload stored in the result sink, one per operation
- "Already in target state" outcomes are ordinary results, not exceptions
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any, Optional

from hearth.domain.value_objects.server_status import MetricsSnapshot, ServerStatus


def _now() -> str:
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True)
class StartServerResult:
    success: bool
    ip: str
    server_ready: bool
    elapsed_seconds: float = 0.0
    error: Optional[str] = None
    timestamp: str = field(default_factory=_now)

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "success": self.success,
            "ip": self.ip,
            "server_ready": self.server_ready,
            "timestamp": self.timestamp,
        }
        if self.error:
            record["error"] = self.error
        return record


@dataclass(frozen=True)
class StopServerResult:
    success: bool
    already_stopped: bool
    timed_out: bool = False
    ip: Optional[str] = None
    timestamp: str = field(default_factory=_now)

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "success": self.success,
            "already_stopped": self.already_stopped,
            "timed_out": self.timed_out,
            "timestamp": self.timestamp,
        }
        if self.ip:
            record["ip"] = self.ip
        return record


@dataclass(frozen=True)
class ConsoleResult:
    """Result of say/op/deop/warn: skipped when there was nothing to talk to."""
    success: bool
    skipped: bool
    timestamp: str = field(default_factory=_now)

    def to_record(self) -> dict[str, Any]:
        return {"success": self.success, "skipped": self.skipped}


@dataclass(frozen=True)
class StatusResult:
    status: ServerStatus
    timestamp: str = field(default_factory=_now)

    def to_record(self) -> dict[str, Any]:
        record = self.status.to_dict()
        if not self.status.running:
            record = {"server_running": False}
        record["timestamp"] = self.timestamp
        return record


@dataclass(frozen=True)
class MetricsResult:
    snapshot: MetricsSnapshot
    published: bool
    timestamp: str = field(default_factory=_now)

    def to_record(self) -> dict[str, Any]:
        record = self.snapshot.to_dict()
        record["timestamp"] = self.timestamp
        return record
