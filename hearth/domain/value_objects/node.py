"""
Node Value Object

Architectural Intent:
- Immutable value object representing the remote host that runs the game server
- Validates hostname format (DNS, IPv4, IPv6), port bounds, non-empty user
- from_host() turns an optional, possibly unset host string into a Node or None
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional

# RFC 1123 hostname: labels of alnum/hyphens, dot-separated
_HOSTNAME_RE = re.compile(
    r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.[A-Za-z0-9-]{1,63})*$"
)

_IPV4_RE = re.compile(
    r"^(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})$"
)

_IPV6_RE = re.compile(r"^[0-9a-fA-F:]+$")

# Placeholder values an unset upstream lookup tends to leave behind
_UNSET_HOSTS = {"", "null", "none", "undefined"}


def _is_valid_hostname(host: str) -> bool:
    """Validate hostname as DNS name, IPv4, or IPv6."""
    if not host:
        return False

    m = _IPV4_RE.match(host)
    if m:
        return all(0 <= int(g) <= 255 for g in m.groups())

    if _IPV6_RE.match(host) and ":" in host:
        return True

    if _HOSTNAME_RE.match(host) and len(host) <= 253:
        return True

    return False


@dataclass(frozen=True)
class Node:
    """
    Value Object representing a remote SSH host.
    """
    host: str
    user: str = "root"
    port: int = 22

    def __post_init__(self) -> None:
        if not self.user:
            raise ValueError("Node user cannot be empty")
        if not (1 <= self.port <= 65535):
            raise ValueError(f"Port must be 1-65535, got {self.port}")
        if not _is_valid_hostname(self.host):
            raise ValueError(f"Invalid hostname: {self.host!r}")

    def __str__(self) -> str:
        return f"{self.user}@{self.host}:{self.port}"

    @staticmethod
    def from_host(
        host: Optional[str], user: str = "root", port: int = 22
    ) -> Optional["Node"]:
        """
        Returns a Node for a configured host, or None when the host is unset
        or not a usable hostname.
        """
        if host is None:
            return None
        host = host.strip()
        if host.lower() in _UNSET_HOSTS:
            return None
        try:
            return Node(host=host, user=user, port=port)
        except ValueError:
            return None
