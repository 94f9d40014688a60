from dataclasses import dataclass

# tmux treats '.' and ':' as target separators
_FORBIDDEN = (".", ":")


@dataclass(frozen=True)
class SessionId:
    """
    Value Object naming the tmux session that hosts the server process.
    """
    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("Session ID cannot be empty")
        for ch in _FORBIDDEN:
            if ch in self.value:
                raise ValueError(f"Session ID cannot contain {ch!r}: {self.value!r}")

    def __str__(self):
        return self.value
