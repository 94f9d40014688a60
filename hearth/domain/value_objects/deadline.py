"""
Deadline Value Object

Governs every bounded wait: a start timestamp, a timeout and a poll interval.
Timestamps come from a monotonic clock supplied by the caller.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Deadline:
    started_at: float
    timeout: float
    interval: float

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")
        if self.interval > self.timeout:
            raise ValueError(
                f"interval ({self.interval}) must not exceed timeout ({self.timeout})"
            )

    def elapsed(self, now: float) -> float:
        return now - self.started_at

    def expired(self, now: float) -> bool:
        return self.elapsed(now) >= self.timeout
