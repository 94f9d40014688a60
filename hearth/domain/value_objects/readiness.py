from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto


class ReadinessState(Enum):
    WAITING = auto()
    READY = auto()
    DEAD = auto()
    TIMED_OUT = auto()


@dataclass(frozen=True)
class ReadinessOutcome:
    """
    Terminal result of a readiness wait. DEAD and TIMED_OUT carry the
    captured startup output for diagnosis.
    """
    state: ReadinessState
    elapsed: float
    output: str = ""

    def __post_init__(self) -> None:
        if self.state == ReadinessState.WAITING:
            raise ValueError("ReadinessOutcome must be terminal, not WAITING")

    @property
    def ready(self) -> bool:
        return self.state == ReadinessState.READY
