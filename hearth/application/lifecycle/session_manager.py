"""
Session Manager

Architectural Intent:
- Ensures exactly one named tmux session hosts the server process
- Each operation is a single remote round trip built from tmux commands
- kill() is idempotent: a missing session is success
- create() fails fast only when the submission itself is rejected;
  creation does not imply readiness
"""

import logging

from hearth.application.lifecycle.shell import quote, quote_path
from hearth.domain.ports.remote_executor_port import RemoteExecutorPort
from hearth.domain.value_objects.node import Node
from hearth.domain.value_objects.session_id import SessionId

logger = logging.getLogger(__name__)


class SessionCreateError(Exception):
    """tmux refused to create the session."""

    def __init__(self, session_id: SessionId, stderr: str):
        super().__init__(f"Failed to start tmux session '{session_id}': {stderr.strip()}")
        self.session_id = session_id
        self.stderr = stderr


class SessionManager:
    def __init__(self, executor: RemoteExecutorPort):
        self.executor = executor

    async def exists(self, node: Node, session_id: SessionId) -> bool:
        result = await self.executor.run(
            node,
            f"tmux has-session -t {quote(str(session_id))} 2>/dev/null "
            "&& echo exists || echo missing",
        )
        return result.stdout.strip() == "exists"

    async def kill(self, node: Node, session_id: SessionId) -> None:
        await self.executor.run(
            node, f"tmux kill-session -t {quote(str(session_id))} 2>/dev/null || true"
        )

    async def create(
        self, node: Node, session_id: SessionId, working_dir: str, command: str
    ) -> None:
        result = await self.executor.run(
            node,
            f"tmux new-session -d -s {quote(str(session_id))} "
            f"-c {quote_path(working_dir)} {quote(command)}",
        )
        if not result.ok:
            raise SessionCreateError(session_id, result.stderr)
        logger.debug("Created tmux session '%s' on %s", session_id, node.host)

    async def send(self, node: Node, session_id: SessionId, line: str) -> bool:
        """Types a line into the session followed by Enter."""
        result = await self.executor.run(
            node, f"tmux send-keys -t {quote(str(session_id))} {quote(line)} Enter"
        )
        return result.ok
