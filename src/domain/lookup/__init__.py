"""Recording lookup domain: search types, cleaning and release selection."""

from .cleaning import MetadataCleaner
from .protocols import RecordingSearcher, TextCleaner
from .query import build_recording_query
from .release_selection import (
    PREFERRED_COUNTRIES,
    release_sort_key,
    select_best_release,
)
from .types import (
    ArtistCredit,
    CandidateRecording,
    CandidateRelease,
    SearchParams,
    SearchResponse,
    cache_key,
)

__all__ = [
    "PREFERRED_COUNTRIES",
    "ArtistCredit",
    "CandidateRecording",
    "CandidateRelease",
    "MetadataCleaner",
    "RecordingSearcher",
    "SearchParams",
    "SearchResponse",
    "TextCleaner",
    "build_recording_query",
    "cache_key",
    "release_sort_key",
    "select_best_release",
]
