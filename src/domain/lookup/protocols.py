"""Protocols for the lookup collaborators.

These protocols define contracts for the search backend and the text cleaner
without depending on their implementations, so the lookup service can be
exercised with in-memory fakes.
"""

import asyncio
from typing import Protocol

from .types import CandidateRecording


class RecordingSearcher(Protocol):
    """Backend that runs a recording search query."""

    async def search_recordings(
        self,
        query: str,
        *,
        cancel: asyncio.Event | None = None,
    ) -> list[CandidateRecording]:
        """Run a search query.

        Args:
            query: Lucene-style MusicBrainz query string
            cancel: Optional event that aborts the wait when set

        Returns:
            Candidate recordings in the order the backend ranked them
        """
        ...


class TextCleaner(Protocol):
    """Normalizer applied to free-text search fields."""

    def clean_recording(self, title: str) -> str:
        """Clean a recording or release title."""
        ...

    def clean_artist(self, name: str) -> str:
        """Clean an artist name."""
        ...
