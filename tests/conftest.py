"""Shared test doubles.

FakeRemoteHost interprets the handful of shell commands the controller
sends (tmux, wc, tail, grep, pgrep, kill -0, ...) against in-memory state.
FakeClock advances virtual time on sleep, so bounded waits run instantly
and deadlines can be asserted exactly.
"""

import re
import shlex
from typing import Callable, Optional

import pytest

from hearth.composition_root import create_container
from hearth.domain.ports.remote_executor_port import CommandResult, RemoteExecutorPort
from hearth.domain.value_objects.node import Node
from hearth.domain.value_objects.server_target import ServerTarget
from hearth.infrastructure.config import HearthConfig
from hearth.infrastructure.repositories.in_memory_result_sink import InMemoryResultSink

LIST_RESPONSE = (
    "[12:00:01] [Server thread/INFO]: "
    "There are 2 of a max of 20 players online: Alice, Bob"
)
READY_LINE = '[12:00:00] [Server thread/INFO]: Done (41.2s)! For help, type "help"'
# PID of the `$SHELL -c <command>` wrapper sshd spawns for every command
SHELL_WRAPPER_PID = 31337


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.current = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.current

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds

    def elapsed_since(self, start: float) -> float:
        return self.current - start


class FakeRemoteHost(RemoteExecutorPort):
    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.reachable = True
        self.sessions: set[str] = set()
        self.files: dict[str, list[str]] = {}
        self.pids: list[int] = []
        self.created: list[tuple[str, str, str]] = []
        self.keys: list[tuple[str, str]] = []
        self.commands: list[str] = []
        self.create_error = ""
        self.key_handlers: dict[str, Callable[["FakeRemoteHost", str], None]] = {}
        self.on_create: Optional[Callable[["FakeRemoteHost", str], None]] = None
        self._timers: list[tuple[float, Callable[["FakeRemoteHost"], None]]] = []

    # -- scenario helpers ----------------------------------------------------

    def after(self, seconds: float, action: Callable[["FakeRemoteHost"], None]) -> None:
        self._timers.append((self.clock.now() + seconds, action))

    def append(self, path: str, *lines: str) -> None:
        self.files.setdefault(path, []).extend(lines)

    def kill_pid(self, pid: int) -> None:
        if pid in self.pids:
            self.pids.remove(pid)

    def drop_session(self, name: str) -> None:
        self.sessions.discard(name)

    def sent_lines(self) -> list[str]:
        return [line for _, line in self.keys]

    def _fire_timers(self) -> None:
        now = self.clock.now()
        due = [t for t in self._timers if t[0] <= now]
        self._timers = [t for t in self._timers if t[0] > now]
        for _, action in sorted(due, key=lambda t: t[0]):
            action(self)

    # -- RemoteExecutorPort --------------------------------------------------

    async def run(self, node: Node, command: str) -> CommandResult:
        self._fire_timers()
        self.commands.append(command)
        if not self.reachable:
            return CommandResult(255, "", "ssh: connect to host: Connection refused")

        if command.startswith("mkdir ") or (
            command.startswith("echo ") and command != "echo ok"
        ):
            return CommandResult(0)

        tokens = shlex.split(command)
        name = tokens[0]

        if tokens == ["echo", "ok"]:
            return CommandResult(0, "ok\n")
        if name == "tmux":
            return self._tmux(tokens)
        if name == "truncate":
            self.files[tokens[3]] = []
            return CommandResult(0)
        if name == "wc":
            path = tokens[3]
            if path not in self.files:
                return CommandResult(1, "", f"sh: {path}: No such file or directory")
            return CommandResult(0, f"{len(self.files[path])}\n")
        if name == "tail":
            start = int(tokens[2].lstrip("+"))
            lines = self.files.get(tokens[3], [])[start - 1:]
            return CommandResult(0, "".join(f"{line}\n" for line in lines))
        if name == "cat":
            if tokens[1] not in self.files:
                return CommandResult(0, "(no output)\n")
            return CommandResult(0, "".join(f"{line}\n" for line in self.files[tokens[1]]))
        if name == "grep":
            marker, path = tokens[3], tokens[4]
            found = any(marker in line for line in self.files.get(path, []))
            return CommandResult(0, "READY\n" if found else "WAITING\n")
        if name == "pgrep":
            # like pgrep -f on a real host, a pattern also sees the wrapper
            # shell whose command line is the whole command text
            patterns = [tokens[i + 1] for i, t in enumerate(tokens) if t == "-f"]
            wrapper = [SHELL_WRAPPER_PID] if any(re.search(p, command) for p in patterns) else []
            pids = wrapper + self.pids
            if tokens[3] == ">":
                return CommandResult(0, "running\n" if pids else "stopped\n")
            return CommandResult(0 if pids else 1, "".join(f"{pid}\n" for pid in pids))
        if name == "kill":
            alive = int(tokens[2]) in self.pids
            return CommandResult(0, "running\n" if alive else "stopped\n")
        return CommandResult(0)

    def _tmux(self, tokens: list[str]) -> CommandResult:
        sub = tokens[1]
        if sub == "has-session":
            return CommandResult(0, "exists\n" if tokens[3] in self.sessions else "missing\n")
        if sub == "kill-session":
            self.sessions.discard(tokens[3])
            return CommandResult(0)
        if sub == "new-session":
            session, workdir, cmd = tokens[4], tokens[6], tokens[7]
            if self.create_error:
                return CommandResult(1, "", self.create_error)
            self.sessions.add(session)
            self.created.append((session, workdir, cmd))
            if self.on_create:
                self.on_create(self, session)
            return CommandResult(0)
        if sub == "send-keys":
            session, line = tokens[3], tokens[4]
            if session not in self.sessions:
                return CommandResult(1, "", f"can't find session: {session}")
            self.keys.append((session, line))
            handler = self.key_handlers.get(line.split()[0])
            if handler:
                handler(self, line)
            return CommandResult(0)
        return CommandResult(1, "", f"unknown tmux command {sub}")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def host(clock):
    return FakeRemoteHost(clock)


@pytest.fixture
def target():
    return ServerTarget(
        ssh_host="10.0.0.5",
        tmux_session="mons",
        server_dir="/srv/mons",
        start_script="./startserver.sh",
        log_path="/srv/mons/logs/latest.log",
        server_name="survival",
    )


@pytest.fixture
def unconfigured_target():
    return ServerTarget(ssh_host="", server_name="survival")


@pytest.fixture
def running_server(host, target):
    """A live server: session up, java PID 4242, answers list and stop."""
    host.sessions.add(target.tmux_session)
    host.pids.append(4242)
    host.append(target.log_path, READY_LINE)
    host.key_handlers["list"] = lambda h, line: h.append(target.log_path, LIST_RESPONSE)
    return host


@pytest.fixture
def results():
    return InMemoryResultSink()


@pytest.fixture
def container(host, clock, target, results):
    return create_container(
        HearthConfig(server=target), executor=host, clock=clock, results=results
    )
