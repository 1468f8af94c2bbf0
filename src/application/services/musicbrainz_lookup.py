"""Cached MusicBrainz recording lookup.

Coordinates one search from loosely identified fields:
validate -> clean -> fingerprint -> cache -> rate-limited fetch -> cache write.

A cache hit never touches the rate limiter or the network. Only successful
fetches are cached; a failed fetch leaves any previous (possibly expired)
entry untouched, so the next call retries in full.

With ``single_flight`` enabled, concurrent misses for the same fingerprint
wait on the fetch already in progress instead of issuing their own.
"""

import asyncio

from attrs import define, field

from src.config import get_logger
from src.domain.exceptions import LookupInterruptedError
from src.domain.lookup import (
    CandidateRecording,
    RecordingSearcher,
    SearchParams,
    TextCleaner,
    build_recording_query,
    cache_key,
)
from src.infrastructure.cache import SearchCache
from src.infrastructure.connectors.base_connector import await_or_interrupt

logger = get_logger(__name__).bind(service="musicbrainz_lookup")


@define(slots=True)
class MusicBrainzLookupService:
    """Search MusicBrainz recordings through a TTL cache.

    Attributes:
        searcher: Backend executing the query (rate limited)
        cache: Search result cache owned by this service
        title_cleaner: Normalizer for track and release titles
        artist_cleaner: Normalizer for artist names
        single_flight: Share one fetch among concurrent identical misses
    """

    searcher: RecordingSearcher
    cache: SearchCache
    title_cleaner: TextCleaner
    artist_cleaner: TextCleaner
    single_flight: bool = True
    _in_flight: dict[str, asyncio.Future] = field(factory=dict, init=False, repr=False)

    def normalize(self, params: SearchParams) -> SearchParams:
        """Clean every free-text field."""
        return SearchParams(
            track=self.title_cleaner.clean_recording(params.track),
            artist=self.artist_cleaner.clean_artist(params.artist),
            release=self.title_cleaner.clean_recording(params.release),
        )

    async def search(
        self,
        params: SearchParams,
        *,
        cancel: asyncio.Event | None = None,
    ) -> list[CandidateRecording]:
        """Search recordings matching ``params``.

        Args:
            params: Raw search fields; at least one must be non-empty
            cancel: Optional event; when set, pending waits are abandoned

        Returns:
            Candidate recordings, a fresh list on every call

        Raises:
            InvalidSearchParamsError: No search field was provided, or every
                field was blank after cleaning
            LookupInterruptedError: ``cancel`` was set while waiting
            UpstreamError: The fetch failed (timeout, status, transport, decode)
        """
        params.validate()
        # Whitespace-only values clean down to nothing
        normalized = self.normalize(params).validate()
        key = cache_key(normalized)

        with logger.contextualize(cache_key=key):
            entry, found = self.cache.lookup(key)
            if entry is not None:
                logger.debug("Cache hit for MusicBrainz search")
                return list(entry.recordings)

            if found:
                logger.debug("Cache expired for MusicBrainz search")
            else:
                logger.debug("Cache miss for MusicBrainz search")

            if not self.single_flight:
                return list(await self._fetch_and_store(key, normalized, cancel))
            return list(await self._search_single_flight(key, normalized, cancel))

    async def _fetch_and_store(
        self,
        key: str,
        params: SearchParams,
        cancel: asyncio.Event | None,
    ) -> tuple[CandidateRecording, ...]:
        query = build_recording_query(params)
        recordings = await self.searcher.search_recordings(query, cancel=cancel)
        entry = self.cache.put(key, recordings)
        logger.info(
            "Cached MusicBrainz search result",
            recordings=len(entry.recordings),
            ttl=self.cache.ttl,
        )
        return entry.recordings

    async def _search_single_flight(
        self,
        key: str,
        params: SearchParams,
        cancel: asyncio.Event | None,
    ) -> tuple[CandidateRecording, ...]:
        while (in_flight := self._in_flight.get(key)) is not None:
            logger.debug("Joining in-flight MusicBrainz search")
            try:
                # shield: a follower giving up must not cancel the shared fetch
                return await await_or_interrupt(
                    asyncio.shield(in_flight), cancel, "in_flight"
                )
            except LookupInterruptedError:
                if cancel is not None and cancel.is_set():
                    raise
            # The fetching caller gave up; reuse its result if it got one
            entry = self.cache.get(key)
            if entry is not None:
                return entry.recordings

        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._in_flight[key] = future
        try:
            recordings = await self._fetch_and_store(key, params, cancel)
        except asyncio.CancelledError:
            future.set_exception(LookupInterruptedError("in_flight"))
            future.exception()  # Mark retrieved when nobody joined
            raise
        except Exception as e:
            future.set_exception(e)
            future.exception()
            raise
        else:
            future.set_result(recordings)
            return recordings
        finally:
            if self._in_flight.get(key) is future:
                del self._in_flight[key]
