"""Application use cases - orchestrate business operations."""

from .hydrate_track import (
    HydrateTrackUseCase,
    HydrationBatchResult,
    HydrationFailure,
    merge_candidate,
    search_params_for,
)

__all__ = [
    "HydrateTrackUseCase",
    "HydrationBatchResult",
    "HydrationFailure",
    "merge_candidate",
    "search_params_for",
]
