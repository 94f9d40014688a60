"""
Remote Executor Port

Architectural Intent:
- Port interface for running a single shell command on a remote host
- The only primitive every lifecycle component is built on
- Implemented by adapters (Fabric/SSH, test doubles)

Contract:
- Synchronous from the caller's view: returns once the round trip completes
- Connection failures are reported as a non-zero exit code, not raised
- Read-only checks are safe to retry
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from hearth.domain.value_objects.node import Node


@dataclass(frozen=True)
class CommandResult:
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class RemoteExecutorPort(ABC):
    """
    Port interface for executing commands on a remote host.
    """

    @abstractmethod
    async def run(self, node: Node, command: str) -> CommandResult:
        """
        Runs a shell command on the node and returns its exit code and output.
        """
        pass
