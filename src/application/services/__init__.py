"""Application services - lookup orchestration."""

from .musicbrainz_lookup import MusicBrainzLookupService

__all__ = ["MusicBrainzLookupService"]
