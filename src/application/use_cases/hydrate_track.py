"""Track hydration use case.

Enriches a play record with authoritative MusicBrainz fields: recording MBID,
release MBID and title, ISRC, duration and the credited artists. Fields that
describe the play itself (play id, timestamps, progress, URLs) pass through
unchanged.

Only the first candidate returned by the search is considered. Its best
release is chosen with ``select_best_release``.
"""

import asyncio
import time

from attrs import define, field

from src.application.services.musicbrainz_lookup import MusicBrainzLookupService
from src.config import get_logger
from src.domain.entities import Artist, Track
from src.domain.exceptions import HydrationError, MissingReleaseError, NoResultsError
from src.domain.lookup import CandidateRecording, SearchParams, select_best_release

logger = get_logger(__name__)


def search_params_for(track: Track) -> SearchParams:
    """Build search parameters from a play record."""
    return SearchParams(
        track=track.title,
        artist=", ".join(track.artist_names),
        release=track.album or "",
    )


def merge_candidate(track: Track, candidate: CandidateRecording) -> Track:
    """Overwrite catalog fields of ``track`` with data from ``candidate``.

    Recordings without a ``length`` keep the duration reported by the play
    source: a known duration is more useful downstream than an unknown one,
    and MusicBrainz omits lengths for many recordings.

    Raises:
        MissingReleaseError: The candidate has no release to pick from
    """
    release = select_best_release(candidate.releases, candidate.title)
    if release is None:
        raise MissingReleaseError(candidate.id)

    isrc = candidate.isrcs[0] if candidate.isrcs else track.isrc
    artists = [
        Artist(name=credit.artist_name, id=credit.artist_id, mbid=credit.artist_id)
        for credit in candidate.artist_credits
    ]

    return track.with_catalog_metadata(
        recording_mbid=candidate.id,
        release_mbid=release.id,
        album=release.title,
        isrc=isrc,
        duration_ms=(
            candidate.length_ms if candidate.length_ms is not None else track.duration_ms
        ),
        artists=artists,
    )


@define(frozen=True, slots=True)
class HydrationFailure:
    """A track that could not be hydrated and why."""

    track: Track
    error: HydrationError


@define(frozen=True, slots=True)
class HydrationBatchResult:
    """Outcome of hydrating several tracks.

    ``hydrated`` keeps the input order of the tracks that succeeded.
    """

    hydrated: list[Track] = field(factory=list)
    failures: list[HydrationFailure] = field(factory=list)
    execution_time_ms: int = 0

    @property
    def track_count(self) -> int:
        """Number of tracks submitted."""
        return len(self.hydrated) + len(self.failures)


@define(slots=True)
class HydrateTrackUseCase:
    """Use case enriching play records with MusicBrainz metadata.

    Attributes:
        lookup: Cached MusicBrainz search
        concurrency: Maximum simultaneous hydrations in ``execute_many``
    """

    lookup: MusicBrainzLookupService
    concurrency: int = 5

    async def execute(
        self,
        track: Track,
        *,
        cancel: asyncio.Event | None = None,
    ) -> Track:
        """Hydrate a single track.

        Args:
            track: Play record to enrich
            cancel: Optional event; when set, pending lookups are abandoned

        Returns:
            A new track with catalog fields overwritten

        Raises:
            InvalidSearchParamsError: The track has no title, artist or album
            NoResultsError: MusicBrainz returned no recordings
            MissingReleaseError: The first recording has no releases
            LookupInterruptedError, UpstreamError: Propagated from the lookup
        """
        params = search_params_for(track)
        candidates = await self.lookup.search(params, cancel=cancel)
        if not candidates:
            raise NoResultsError(
                f"No MusicBrainz results for '{track.title}' by '{params.artist}'"
            )

        hydrated = merge_candidate(track, candidates[0])
        logger.debug(
            f"Hydrated '{track.title}'",
            recording_mbid=hydrated.recording_mbid,
            release_mbid=hydrated.release_mbid,
        )
        return hydrated

    async def execute_many(
        self,
        tracks: list[Track],
        *,
        cancel: asyncio.Event | None = None,
    ) -> HydrationBatchResult:
        """Hydrate several tracks concurrently.

        Hydration errors are collected per track; any other exception
        propagates and aborts the batch.
        """
        start_time = time.time()
        if not tracks:
            return HydrationBatchResult()

        semaphore = asyncio.Semaphore(self.concurrency)

        async def hydrate_one(track: Track) -> Track | HydrationFailure:
            async with semaphore:
                try:
                    return await self.execute(track, cancel=cancel)
                except HydrationError as e:
                    logger.warning(
                        f"Could not hydrate '{track.title}': {e}",
                        error_type=type(e).__name__,
                    )
                    return HydrationFailure(track=track, error=e)

        with logger.contextualize(operation="hydrate_tracks", track_count=len(tracks)):
            logger.info(f"Hydrating {len(tracks)} tracks")
            outcomes = await asyncio.gather(*(hydrate_one(t) for t in tracks))

        hydrated = [o for o in outcomes if isinstance(o, Track)]
        failures = [o for o in outcomes if isinstance(o, HydrationFailure)]
        execution_time_ms = int((time.time() - start_time) * 1000)

        logger.info(
            f"Hydrated {len(hydrated)}/{len(tracks)} tracks",
            failures=len(failures),
            execution_time_ms=execution_time_ms,
        )
        return HydrationBatchResult(
            hydrated=hydrated,
            failures=failures,
            execution_time_ms=execution_time_ms,
        )
