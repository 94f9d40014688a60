"""
Textfile Metrics Sink

Architectural Intent:
- Publishes player metrics for node_exporter's textfile collector and an
  audit line for log shippers, both written on the game host itself
- The .prom file is written to a temp name and moved into place so the
  collector never reads a partial file
"""

from __future__ import annotations
import json
import time
from datetime import datetime, UTC
from typing import Optional

from hearth.application.lifecycle.shell import quote, quote_path
from hearth.domain.ports.metrics_sink_port import MetricsSinkPort
from hearth.domain.ports.remote_executor_port import RemoteExecutorPort
from hearth.domain.value_objects.node import Node
from hearth.domain.value_objects.server_status import MetricsSnapshot


def _escape_label(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def format_prometheus(
    game: str,
    server_name: str,
    snapshot: MetricsSnapshot,
    collected_at: Optional[int] = None,
) -> str:
    labels = f'game="{_escape_label(game)}",server="{_escape_label(server_name)}"'
    collected_at = int(time.time()) if collected_at is None else collected_at

    lines = [
        "# HELP game_server_running Whether the game server process is running",
        "# TYPE game_server_running gauge",
        f"game_server_running{{{labels}}} {1 if snapshot.running else 0}",
        "# HELP game_players_online Current number of players online",
        "# TYPE game_players_online gauge",
        f"game_players_online{{{labels}}} {snapshot.online}",
    ]
    if snapshot.max_players is not None:
        lines += [
            "# HELP game_players_max Maximum player slots",
            "# TYPE game_players_max gauge",
            f"game_players_max{{{labels}}} {snapshot.max_players}",
        ]
    lines += [
        "# HELP game_metrics_collected_at Unix timestamp of last successful collection",
        "# TYPE game_metrics_collected_at gauge",
        f"game_metrics_collected_at{{{labels}}} {collected_at}",
    ]
    return "\n".join(lines) + "\n"


def format_log_line(game: str, server_name: str, snapshot: MetricsSnapshot) -> str:
    return json.dumps({
        "ts": datetime.now(UTC).isoformat(),
        "game": game,
        "server": server_name,
        "running": snapshot.running,
        "online": snapshot.online,
        "max": snapshot.max_players,
        "players": list(snapshot.players),
    })


class TextfileMetricsSink(MetricsSinkPort):
    def __init__(
        self,
        executor: RemoteExecutorPort,
        textfile_dir: str = "/var/lib/node_exporter/textfile_collector",
        audit_log: str = "/var/log/game-players.log",
    ):
        self.executor = executor
        self.textfile_dir = textfile_dir
        self.audit_log = audit_log

    async def publish(
        self, node: Node, game: str, server_name: str, snapshot: MetricsSnapshot
    ) -> None:
        prom_file = f"{self.textfile_dir.rstrip('/')}/game_{game}.prom"
        content = format_prometheus(game, server_name, snapshot)
        await self.executor.run(
            node,
            f"mkdir -p {quote_path(self.textfile_dir)} && "
            f"cat > {quote_path(prom_file + '.tmp')} << 'PROMEOF'\n{content}PROMEOF\n"
            f"mv {quote_path(prom_file + '.tmp')} {quote_path(prom_file)}",
        )
        await self.executor.run(
            node,
            f"echo {quote(format_log_line(game, server_name, snapshot))} "
            f">> {quote_path(self.audit_log)}",
        )
