"""
SQLite Result Sink

Architectural Intent:
- Durable result records using SQLite (stdlib, zero external deps)
- One row per operation; payload stored as JSON
- Uses WAL mode so a status reader does not block the controller

Design Decisions:
- Single database file at configurable path
- Auto-creates the table on first use
- Timestamps stored as ISO 8601 strings
"""

from __future__ import annotations
import json
import logging
import sqlite3
from typing import Any, Optional

from hearth.domain.ports.result_sink_port import ResultRecord, ResultSinkPort

logger = logging.getLogger(__name__)


class SQLiteResultSink(ResultSinkPort):
    """Persistent result storage using SQLite."""

    def __init__(self, db_path: str = "hearth.db"):
        self._db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    def connect(self) -> None:
        """Open database connection and create tables."""
        self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.row_factory = sqlite3.Row
        self._create_tables()
        logger.info("SQLite result sink connected: %s", self._db_path)

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def _create_tables(self) -> None:
        assert self._conn is not None
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS results (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                kind TEXT NOT NULL,
                name TEXT NOT NULL,
                data TEXT NOT NULL,
                recorded_at TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_results_kind_name ON results(kind, name);
        """)

    def _ensure_connected(self) -> sqlite3.Connection:
        if self._conn is None:
            self.connect()
        assert self._conn is not None
        return self._conn

    async def write(self, kind: str, name: str, data: dict[str, Any]) -> ResultRecord:
        conn = self._ensure_connected()
        record = ResultRecord(kind=kind, name=name, data=dict(data))
        conn.execute(
            "INSERT INTO results (kind, name, data, recorded_at) VALUES (?, ?, ?, ?)",
            (kind, name, json.dumps(record.data), record.recorded_at),
        )
        conn.commit()
        return record

    async def latest(self, kind: str, name: str) -> Optional[ResultRecord]:
        conn = self._ensure_connected()
        row = conn.execute(
            "SELECT * FROM results WHERE kind = ? AND name = ? ORDER BY id DESC LIMIT 1",
            (kind, name),
        ).fetchone()
        if row is None:
            return None
        return ResultRecord(
            kind=row["kind"],
            name=row["name"],
            data=json.loads(row["data"]),
            recorded_at=row["recorded_at"],
        )
