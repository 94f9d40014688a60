"""Tests for EventBus."""

import pytest

from hearth.domain.events.server_events import ServerStartedEvent, ServerStoppedEvent
from hearth.infrastructure.event_bus import EventBus


class TestEventBus:
    @pytest.mark.asyncio
    async def test_publish_to_subscribers_in_order(self):
        bus = EventBus()
        seen = []

        async def first(event):
            seen.append(("first", event.host))

        async def second(event):
            seen.append(("second", event.host))

        bus.subscribe(ServerStartedEvent, first)
        bus.subscribe(ServerStartedEvent, second)

        await bus.publish([ServerStartedEvent(host="10.0.0.5")])

        assert seen == [("first", "10.0.0.5"), ("second", "10.0.0.5")]

    @pytest.mark.asyncio
    async def test_only_matching_type(self):
        bus = EventBus()
        seen = []

        async def handler(event):
            seen.append(event)

        bus.subscribe(ServerStoppedEvent, handler)
        await bus.publish([ServerStartedEvent(), ServerStoppedEvent(already_stopped=True)])

        assert len(seen) == 1
        assert seen[0].already_stopped is True

    @pytest.mark.asyncio
    async def test_no_subscribers(self):
        await EventBus().publish([ServerStartedEvent()])

    @pytest.mark.asyncio
    async def test_handler_errors_propagate(self):
        bus = EventBus()

        async def broken(event):
            raise RuntimeError("handler failed")

        bus.subscribe(ServerStartedEvent, broken)
        with pytest.raises(RuntimeError, match="handler failed"):
            await bus.publish([ServerStartedEvent()])
