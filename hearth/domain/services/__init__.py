"""
Domain Services Package

Architectural Intent:
- Contains pure domain logic with no I/O
"""

from hearth.domain.services.output_matcher import (
    OutputMatcher,
    PlayerListMatcher,
    split_names,
)

__all__ = [
    "OutputMatcher",
    "PlayerListMatcher",
    "split_names",
]
