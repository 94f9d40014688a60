from __future__ import annotations
from typing import Any, Optional

from hearth.domain.ports.result_sink_port import ResultRecord, ResultSinkPort


class InMemoryResultSink(ResultSinkPort):
    """Keeps result records for the lifetime of the process."""

    def __init__(self) -> None:
        self.records: list[ResultRecord] = []

    async def write(self, kind: str, name: str, data: dict[str, Any]) -> ResultRecord:
        record = ResultRecord(kind=kind, name=name, data=dict(data))
        self.records.append(record)
        return record

    async def latest(self, kind: str, name: str) -> Optional[ResultRecord]:
        for record in reversed(self.records):
            if record.kind == kind and record.name == name:
                return record
        return None
