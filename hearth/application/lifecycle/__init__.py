"""
Lifecycle Controller Package

Architectural Intent:
- The components that start, observe, query and stop a session-hosted
  server process over a command-and-log-tail channel
- Every component is built on the RemoteExecutorPort primitive
- Control flow: TransportGate -> SessionManager -> (LogTailReader,
  ReadinessPoller, StatusQueryProtocol, ShutdownOrchestrator)
"""

from hearth.application.lifecycle.transport_gate import TransportGate, TransportState
from hearth.application.lifecycle.session_manager import SessionManager, SessionCreateError
from hearth.application.lifecycle.log_tail import LogTailReader
from hearth.application.lifecycle.readiness_poller import ReadinessPoller
from hearth.application.lifecycle.status_query import StatusQueryProtocol
from hearth.application.lifecycle.shutdown_orchestrator import (
    ProcessTracker,
    ShutdownOrchestrator,
    ShutdownReport,
)
from hearth.application.lifecycle.locks import ServerLocks

__all__ = [
    "TransportGate",
    "TransportState",
    "SessionManager",
    "SessionCreateError",
    "LogTailReader",
    "ReadinessPoller",
    "StatusQueryProtocol",
    "ProcessTracker",
    "ShutdownOrchestrator",
    "ShutdownReport",
    "ServerLocks",
]
