"""Factories wiring the lookup stack from settings.

Each call builds an independent stack: its own cache, connector and rate
limiter. Callers that want to share a cache across operations should keep
the returned service rather than calling the factory again.
"""

from src.application.services import MusicBrainzLookupService
from src.application.use_cases import HydrateTrackUseCase
from src.config import Settings, get_logger, settings as default_settings
from src.domain.lookup import MetadataCleaner
from src.infrastructure.cache import SearchCache
from src.infrastructure.connectors import MusicBrainzConnector

logger = get_logger(__name__)


def create_musicbrainz_connector(
    app_settings: Settings | None = None,
) -> MusicBrainzConnector:
    """Create a MusicBrainz connector from settings."""
    mb = (app_settings or default_settings).musicbrainz
    return MusicBrainzConnector(
        user_agent=mb.user_agent,
        base_url=mb.base_url,
        request_timeout=mb.request_timeout,
        rate_limit=mb.rate_limit,
        search_limit=mb.search_limit,
    )


def create_lookup_service(
    app_settings: Settings | None = None,
    connector: MusicBrainzConnector | None = None,
) -> MusicBrainzLookupService:
    """Create a cached lookup service.

    Args:
        app_settings: Settings to use (defaults to the application settings)
        connector: Existing connector to reuse; a new one is created otherwise
    """
    app_settings = app_settings or default_settings
    mb = app_settings.musicbrainz
    cleaner = MetadataCleaner(script="Latin")

    logger.debug(
        "Creating MusicBrainz lookup service",
        cache_ttl=mb.cache_ttl_seconds,
        single_flight=mb.single_flight,
    )
    return MusicBrainzLookupService(
        searcher=connector or create_musicbrainz_connector(app_settings),
        cache=SearchCache(ttl=mb.cache_ttl_seconds),
        title_cleaner=cleaner,
        artist_cleaner=cleaner,
        single_flight=mb.single_flight,
    )


def create_hydrate_use_case(
    app_settings: Settings | None = None,
    lookup: MusicBrainzLookupService | None = None,
) -> HydrateTrackUseCase:
    """Create the hydration use case with its lookup stack."""
    app_settings = app_settings or default_settings
    return HydrateTrackUseCase(
        lookup=lookup or create_lookup_service(app_settings),
        concurrency=app_settings.musicbrainz.hydrate_concurrency,
    )
