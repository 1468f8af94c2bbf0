"""Shared test fixtures - in-memory fakes for the lookup stack.

Nothing here touches the network: searches go through FakeSearcher and
HTTP-level tests use httpx.MockTransport in their own modules.
"""

import pytest

from src.application.services import MusicBrainzLookupService
from src.domain.entities import Artist, Track
from src.domain.lookup import MetadataCleaner
from src.infrastructure.cache import SearchCache
from tests.fixtures.builders import FakeSearcher, make_recording


@pytest.fixture
def recording():
    """A typical recording with one release and one ISRC."""
    return make_recording(isrcs=("GBAAA9800045",))


@pytest.fixture
def searcher(recording):
    """Fake searcher that answers with a single recording."""
    return FakeSearcher(results=[recording])


@pytest.fixture
def cleaner():
    """Latin diacritic cleaner used by the factories."""
    return MetadataCleaner(script="Latin")


@pytest.fixture
def lookup_service(searcher, cleaner):
    """Lookup service over the fake searcher with a one hour cache."""
    return MusicBrainzLookupService(
        searcher=searcher,
        cache=SearchCache(ttl=3600),
        title_cleaner=cleaner,
        artist_cleaner=cleaner,
    )


@pytest.fixture
def played_track():
    """Play record as reported by a scrobbler, before hydration."""
    return Track(
        title="Teardrop",
        artists=[Artist(name="Massive Attack")],
        album="Mezzanine",
        duration_ms=331_000,
        isrc="GBXXX0000001",
        play_id="play-42",
        url="https://example.org/play/42",
        service_base_url="https://example.org",
        progress_ms=120_000,
        has_stamped=True,
    )
