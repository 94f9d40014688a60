"""
Log Tail Reader

Architectural Intent:
- Treats the server log as an append-only response channel
- A watermark is the log's line count, captured strictly before the command
  whose output is awaited; tail_since() returns only lines after it
- await_pattern() is the narrow "await pattern in new output" primitive:
  a matcher decides what counts as a response, this class decides how long
  to look for it
"""

from __future__ import annotations
import logging
from typing import Optional, TypeVar

from hearth.application.lifecycle.shell import quote, quote_path
from hearth.domain.ports.clock_port import ClockPort
from hearth.domain.ports.remote_executor_port import RemoteExecutorPort
from hearth.domain.services.output_matcher import OutputMatcher
from hearth.domain.value_objects.deadline import Deadline
from hearth.domain.value_objects.node import Node

logger = logging.getLogger(__name__)

T = TypeVar("T")

NO_OUTPUT = "(no output)"


class LogTailReader:
    def __init__(self, executor: RemoteExecutorPort, clock: ClockPort):
        self.executor = executor
        self.clock = clock

    async def reset(self, node: Node, path: str) -> None:
        """Truncate the log so stale lines from a previous run cannot match."""
        await self.executor.run(node, f"truncate -s 0 {quote_path(path)} 2>/dev/null || true")

    async def watermark(self, node: Node, path: str) -> int:
        result = await self.executor.run(node, f"wc -l < {quote_path(path)}")
        try:
            return int(result.stdout.strip())
        except ValueError:
            return 0

    async def tail_since(self, node: Node, path: str, watermark: int) -> str:
        if watermark < 0:
            raise ValueError(f"watermark must be >= 0, got {watermark}")
        result = await self.executor.run(
            node, f"tail -n +{watermark + 1} {quote_path(path)}"
        )
        return result.stdout

    async def read_all(self, node: Node, path: str) -> str:
        result = await self.executor.run(
            node, f"cat {quote_path(path)} 2>/dev/null || echo {quote(NO_OUTPUT)}"
        )
        return result.stdout

    async def contains(self, node: Node, path: str, marker: str) -> bool:
        result = await self.executor.run(
            node,
            f"grep -qF -- {quote(marker)} {quote_path(path)} 2>/dev/null "
            "&& echo READY || echo WAITING",
        )
        return result.stdout.strip() == "READY"

    async def await_pattern(
        self,
        node: Node,
        path: str,
        watermark: int,
        matcher: OutputMatcher[T],
        settle: float,
        retry_window: float = 0.0,
        retry_interval: float = 0.5,
    ) -> Optional[T]:
        """
        Wait `settle` seconds, then look for a match in output appended after
        `watermark`. With a retry_window, keep re-reading every retry_interval
        until a match appears or the window closes.
        """
        if settle > 0:
            await self.clock.sleep(settle)
        found = matcher.match(await self.tail_since(node, path, watermark))
        if found is not None or retry_window <= 0:
            return found

        deadline = Deadline(self.clock.now(), retry_window, min(retry_interval, retry_window))
        while not deadline.expired(self.clock.now()):
            await self.clock.sleep(deadline.interval)
            found = matcher.match(await self.tail_since(node, path, watermark))
            if found is not None:
                return found
        logger.debug("No match in new output of %s after %.1fs", path, retry_window)
        return None
