"""
Fabric Executor

Architectural Intent:
- Infrastructure adapter implementing RemoteExecutorPort via Fabric/SSH
- One short-lived connection per command; the server keeps running inside
  tmux after the connection closes

Security:
- SSH connections use connect_timeout, allow_agent, look_for_keys
- Connection and auth failures are mapped to exit code 255 (ssh's own
  convention) so the transport gate can classify them without exceptions
"""

import asyncio
import logging

from fabric import Connection
from paramiko.ssh_exception import SSHException

from hearth.domain.ports.remote_executor_port import CommandResult, RemoteExecutorPort
from hearth.domain.value_objects.node import Node

logger = logging.getLogger(__name__)

SSH_FAILURE_EXIT_CODE = 255


class FabricExecutor(RemoteExecutorPort):
    """Adapter implementing RemoteExecutorPort via Fabric/SSH."""

    def __init__(self, connect_timeout: int = 10):
        self.connect_timeout = connect_timeout

    def _get_connection(self, node: Node) -> Connection:
        return Connection(
            host=node.host,
            user=node.user,
            port=node.port,
            connect_timeout=self.connect_timeout,
            connect_kwargs={
                "allow_agent": True,
                "look_for_keys": True,
            },
        )

    async def run(self, node: Node, command: str) -> CommandResult:
        def _run() -> CommandResult:
            try:
                with self._get_connection(node) as conn:
                    result = conn.run(command, hide=True, warn=True, in_stream=False)
                return CommandResult(
                    exit_code=result.exited,
                    stdout=result.stdout,
                    stderr=result.stderr,
                )
            except (SSHException, OSError, EOFError) as e:
                logger.debug("SSH to %s failed: %s", node, e)
                return CommandResult(exit_code=SSH_FAILURE_EXIT_CODE, stderr=str(e))

        return await asyncio.get_event_loop().run_in_executor(None, _run)
