"""
Server Target Value Object

Architectural Intent:
- Explicit per-server configuration passed into every lifecycle operation
- Replaces ambient state (session name, log path, ssh user) so several
  controllers can drive distinct servers from one process
- Loaded as the "server" section of the application config
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from hearth.domain.value_objects.node import Node
from hearth.domain.value_objects.session_id import SessionId


@dataclass(frozen=True)
class ServerTarget:
    """Where the server lives and how to recognise it."""
    ssh_host: str = ""
    ssh_user: str = "root"
    ssh_port: int = 22
    tmux_session: str = "mons"
    server_dir: str = "~/mons"
    start_script: str = "./startserver.sh"
    log_path: str = "~/mons/logs/latest.log"
    server_name: str = "server"
    game: str = "minecraft"
    ready_marker: str = "]: Done ("
    process_pattern: str = "java.*neoforge"
    process_fallback: str = "java"

    def node(self) -> Optional[Node]:
        """The SSH node, or None when no usable host is configured."""
        return Node.from_host(self.ssh_host, user=self.ssh_user, port=self.ssh_port)

    def session_id(self) -> SessionId:
        return SessionId(self.tmux_session)

    @property
    def start_log_path(self) -> str:
        """Captured stdout/stderr of the start script."""
        return f"/tmp/mc-start-{self.tmux_session}.log"

    @property
    def start_command(self) -> str:
        return f"bash {self.start_script} 2>&1 | tee {self.start_log_path}"

    @property
    def lock_key(self) -> str:
        return f"{self.ssh_host}/{self.tmux_session}"
