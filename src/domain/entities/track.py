"""Track-related domain entities.

Pure track representations with zero external dependencies beyond attrs.
"""

from datetime import datetime

import attrs
from attrs import define, field, validators


@define(frozen=True, slots=True)
class Artist:
    """Artist credited on a track.

    ``id`` is the generic identifier used by the play pipeline, ``mbid`` the
    MusicBrainz artist ID. Hydrated artists carry the MBID in both.
    """

    name: str = field(validator=validators.instance_of(str))
    id: str | None = field(default=None)
    mbid: str | None = field(default=None)


@define(frozen=True, slots=True)
class Track:
    """Immutable record of a played track.

    Holds the loosely identified metadata reported by a play source plus the
    catalog identifiers filled in by hydration. Play fields (``play_id``,
    ``played_at``, ``progress_ms``, ``has_stamped``, ``url``,
    ``service_base_url``) never come from the catalog.
    """

    # Core metadata
    title: str = field(validator=validators.instance_of(str))
    artists: list[Artist] = field(
        factory=list,
        validator=validators.deep_iterable(
            member_validator=validators.instance_of(Artist),
        ),
    )
    album: str | None = field(default=None)
    duration_ms: int | None = field(default=None)
    isrc: str | None = field(default=None)

    # MusicBrainz identifiers
    recording_mbid: str | None = field(default=None)
    release_mbid: str | None = field(default=None)

    # Play context
    play_id: str | None = field(default=None)
    url: str | None = field(default=None)
    service_base_url: str | None = field(default=None)
    played_at: datetime | None = field(default=None)
    progress_ms: int | None = field(default=None)
    has_stamped: bool = field(default=False)

    @property
    def artist_names(self) -> list[str]:
        """Names of the credited artists, in credit order."""
        return [artist.name for artist in self.artists]

    @property
    def is_hydrated(self) -> bool:
        """Whether catalog identifiers have been filled in."""
        return bool(self.recording_mbid and self.release_mbid)

    def with_catalog_metadata(
        self,
        *,
        recording_mbid: str,
        release_mbid: str,
        album: str,
        isrc: str | None,
        duration_ms: int | None,
        artists: list[Artist],
    ) -> "Track":
        """Create a new track with catalog fields overwritten."""
        return attrs.evolve(
            self,
            recording_mbid=recording_mbid,
            release_mbid=release_mbid,
            album=album,
            isrc=isrc,
            duration_ms=duration_ms,
            artists=artists,
        )
