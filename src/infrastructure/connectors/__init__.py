"""Service connectors for external music metadata APIs."""

from src.infrastructure.connectors.base_connector import await_or_interrupt
from src.infrastructure.connectors.musicbrainz import MusicBrainzConnector

__all__ = [
    "MusicBrainzConnector",
    "await_or_interrupt",
]
