"""Tests for TransportGate."""

import pytest
from unittest.mock import AsyncMock

from hearth.application.lifecycle.transport_gate import TransportGate, TransportState
from hearth.domain.ports.remote_executor_port import CommandResult
from hearth.domain.value_objects.node import Node

NODE = Node(host="10.0.0.5")


class TestCheck:
    @pytest.mark.asyncio
    async def test_no_node_is_not_configured(self, host, clock):
        gate = TransportGate(host, clock)
        assert await gate.check(None) == TransportState.NOT_CONFIGURED
        assert host.commands == []

    @pytest.mark.asyncio
    async def test_echo_success_is_reachable(self, host, clock):
        gate = TransportGate(host, clock)
        assert await gate.check(NODE) == TransportState.REACHABLE
        assert host.commands == ["echo ok"]

    @pytest.mark.asyncio
    async def test_echo_failure_is_unreachable(self, host, clock):
        host.reachable = False
        gate = TransportGate(host, clock)
        assert await gate.check(NODE) == TransportState.UNREACHABLE

    @pytest.mark.asyncio
    async def test_connection_error_is_unreachable(self, clock):
        executor = AsyncMock()
        executor.run = AsyncMock(side_effect=TimeoutError("timed out"))
        gate = TransportGate(executor, clock)
        assert await gate.check(NODE) == TransportState.UNREACHABLE

    @pytest.mark.asyncio
    async def test_non_zero_exit_is_unreachable(self, clock):
        executor = AsyncMock()
        executor.run = AsyncMock(return_value=CommandResult(255, "", "Permission denied"))
        gate = TransportGate(executor, clock)
        assert await gate.check(NODE) == TransportState.UNREACHABLE


class TestWaitUntilReachable:
    @pytest.mark.asyncio
    async def test_immediately_reachable(self, host, clock):
        gate = TransportGate(host, clock)
        assert await gate.wait_until_reachable(NODE, 60, 5) is True
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_becomes_reachable(self, host, clock):
        host.reachable = False
        host.after(10, lambda h: setattr(h, "reachable", True))
        gate = TransportGate(host, clock)
        assert await gate.wait_until_reachable(NODE, 60, 5) is True
        assert sum(clock.sleeps) == 10

    @pytest.mark.asyncio
    async def test_gives_up_at_timeout(self, host, clock):
        host.reachable = False
        start = clock.now()
        gate = TransportGate(host, clock)
        assert await gate.wait_until_reachable(NODE, 60, 5) is False
        assert clock.elapsed_since(start) == 60

    @pytest.mark.asyncio
    async def test_unconfigured(self, host, clock):
        gate = TransportGate(host, clock)
        assert await gate.wait_until_reachable(None, 60, 5) is False
