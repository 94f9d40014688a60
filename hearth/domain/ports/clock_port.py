"""
Clock Port

Architectural Intent:
- Abstracts monotonic time and suspension so bounded waits can be driven
  by a virtual clock in tests
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    def now(self) -> float: ...

    async def sleep(self, seconds: float) -> None: ...
