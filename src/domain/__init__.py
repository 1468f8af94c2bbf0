"""Domain layer - pure business logic for track metadata hydration."""

from . import entities, lookup

from .entities import Artist, Track
from .exceptions import (
    HydrationError,
    InvalidSearchParamsError,
    LookupInterruptedError,
    LookupTimeoutError,
    MissingReleaseError,
    NoResultsError,
    ResponseDecodeError,
    UpstreamError,
    UpstreamRequestError,
    UpstreamStatusError,
)
from .lookup import (
    CandidateRecording,
    CandidateRelease,
    SearchParams,
    cache_key,
    select_best_release,
)

__all__ = [
    # Modules
    "entities",
    "lookup",
    # Entities
    "Artist",
    "Track",
    # Lookup types
    "CandidateRecording",
    "CandidateRelease",
    "SearchParams",
    "cache_key",
    "select_best_release",
    # Errors
    "HydrationError",
    "InvalidSearchParamsError",
    "LookupInterruptedError",
    "LookupTimeoutError",
    "MissingReleaseError",
    "NoResultsError",
    "ResponseDecodeError",
    "UpstreamError",
    "UpstreamRequestError",
    "UpstreamStatusError",
]
