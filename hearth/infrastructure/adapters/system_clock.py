import asyncio
import time

from hearth.domain.ports.clock_port import ClockPort


class SystemClock(ClockPort):
    """Monotonic wall time and real asyncio sleeps."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
