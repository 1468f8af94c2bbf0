"""Pure domain types for MusicBrainz recording lookup.

These types mirror the subset of the MusicBrainz recording search response
the hydrator relies on. They are immutable so cached results can be shared
between callers without copying.
"""

from datetime import datetime
from typing import Any
from urllib.parse import quote_plus

from attrs import define, field

from src.domain.exceptions import InvalidSearchParamsError, ResponseDecodeError


def _to_tuple(value: Any) -> tuple:
    return tuple(value) if value is not None else ()


@define(frozen=True, slots=True)
class SearchParams:
    """Free-text search fields for a recording lookup."""

    track: str = ""
    artist: str = ""
    release: str = ""

    def is_empty(self) -> bool:
        """Check whether no search field was provided."""
        return not (self.track or self.artist or self.release)

    def validate(self) -> "SearchParams":
        """Ensure at least one field is set.

        Raises:
            InvalidSearchParamsError: If track, artist and release are all empty
        """
        if self.is_empty():
            raise InvalidSearchParamsError(
                "at least one search parameter (track, artist, release) must be provided"
            )
        return self


def cache_key(params: SearchParams) -> str:
    """Build the cache fingerprint for normalized search parameters.

    Each value is query-escaped so separator characters inside a value
    cannot be confused with field boundaries.
    """
    return (
        f"track={quote_plus(params.track)}"
        f"&artist={quote_plus(params.artist)}"
        f"&release={quote_plus(params.release)}"
    )


@define(frozen=True, slots=True)
class ArtistCredit:
    """One credited artist on a recording."""

    artist_id: str
    artist_name: str
    join_phrase: str = ""
    sort_name: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "ArtistCredit":
        """Create from an ``artist-credit`` entry of the search response."""
        artist = data.get("artist") or {}
        return cls(
            artist_id=str(artist.get("id", "")),
            artist_name=str(data.get("name") or artist.get("name", "")),
            join_phrase=str(data.get("joinphrase", "")),
            sort_name=str(artist.get("sort-name", "")),
        )


@define(frozen=True, slots=True)
class CandidateRelease:
    """A published edition of a recording.

    ``date`` is kept as the raw MusicBrainz string and may be empty or
    partial ("YYYY", "YYYY-MM" or "YYYY-MM-DD").
    """

    id: str
    title: str
    status: str = ""
    date: str = ""
    country: str = ""
    track_count: int = 0
    disambiguation: str = ""

    @property
    def has_valid_date(self) -> bool:
        """At least a four digit year is present."""
        return len(self.date) >= 4

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CandidateRelease":
        """Create from a ``releases`` entry of the search response."""
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            status=str(data.get("status") or ""),
            date=str(data.get("date") or ""),
            country=str(data.get("country") or ""),
            track_count=int(data.get("track-count") or 0),
            disambiguation=str(data.get("disambiguation") or ""),
        )


@define(frozen=True, slots=True)
class CandidateRecording:
    """One recording returned by the MusicBrainz search."""

    id: str
    title: str
    length_ms: int | None = None
    isrcs: tuple[str, ...] = field(default=(), converter=_to_tuple)
    artist_credits: tuple[ArtistCredit, ...] = field(default=(), converter=_to_tuple)
    releases: tuple[CandidateRelease, ...] = field(default=(), converter=_to_tuple)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CandidateRecording":
        """Create from a ``recordings`` entry of the search response."""
        length = data.get("length")
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            length_ms=int(length) if length is not None else None,
            isrcs=[str(isrc) for isrc in data.get("isrcs") or []],
            artist_credits=[
                ArtistCredit.from_json(credit)
                for credit in data.get("artist-credit") or []
            ],
            releases=[
                CandidateRelease.from_json(release)
                for release in data.get("releases") or []
            ],
        )


@define(frozen=True, slots=True)
class SearchResponse:
    """Decoded envelope of a recording search."""

    recordings: tuple[CandidateRecording, ...] = field(default=(), converter=_to_tuple)
    count: int = 0
    offset: int = 0
    created: datetime | None = None

    @classmethod
    def from_json(cls, payload: Any) -> "SearchResponse":
        """Decode a parsed JSON body.

        Raises:
            ResponseDecodeError: If the payload does not have the expected shape
        """
        if not isinstance(payload, dict):
            raise ResponseDecodeError(
                f"expected a JSON object, got {type(payload).__name__}"
            )

        # An explicit null means no matches
        recordings = payload.get("recordings")
        if recordings is None:
            recordings = []
        if not isinstance(recordings, list):
            raise ResponseDecodeError("'recordings' is not a list")

        try:
            created_raw = payload.get("created")
            created = (
                datetime.fromisoformat(created_raw.replace("Z", "+00:00"))
                if created_raw
                else None
            )
            return cls(
                recordings=[CandidateRecording.from_json(r) for r in recordings],
                count=int(payload.get("count", len(recordings))),
                offset=int(payload.get("offset", 0)),
                created=created,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ResponseDecodeError(f"malformed search response: {e}") from e
