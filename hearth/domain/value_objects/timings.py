"""
Lifecycle Timings

Every bounded wait the controller performs, in seconds. Loaded as the
"timing" section of the application config.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class LifecycleTimings:
    ssh_wait_timeout: float = 60.0
    ssh_wait_interval: float = 5.0
    # modded servers can spend many minutes installing and booting
    ready_timeout: float = 900.0
    ready_interval: float = 5.0
    settle: float = 2.0
    status_retry_window: float = 0.0
    status_retry_interval: float = 0.5
    stop_timeout: float = 90.0
    stop_interval: float = 3.0
    warn_count: int = 3
    warn_pause: float = 30.0
    connect_timeout: int = 10

    def __post_init__(self) -> None:
        for name in ("ready_interval", "stop_interval", "ssh_wait_interval"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.ssh_wait_interval > self.ssh_wait_timeout:
            raise ValueError("ssh_wait_interval must not exceed ssh_wait_timeout")
        if self.ready_interval > self.ready_timeout:
            raise ValueError("ready_interval must not exceed ready_timeout")
        if self.stop_interval > self.stop_timeout:
            raise ValueError("stop_interval must not exceed stop_timeout")
        if self.warn_count < 0:
            raise ValueError("warn_count cannot be negative")
        for name in ("settle", "status_retry_window"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")
        if self.status_retry_window > 0 and self.status_retry_interval <= 0:
            raise ValueError("status_retry_interval must be positive")
