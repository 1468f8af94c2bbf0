"""Core domain entities representing music concepts."""

from .track import Artist, Track

__all__ = [
    "Artist",
    "Track",
]
