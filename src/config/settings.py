"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation.

The configuration is organized into logical groups:
- LoggingConfig: Logging levels, files, and debugging options
- MusicBrainzConfig: MusicBrainz search endpoint, rate limiting and caching
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("logs/hydrator.log")
    real_time_debug: bool = True


class MusicBrainzConfig(BaseModel):
    """MusicBrainz search configuration.

    The public web service allows one request per second per client and
    requires a meaningful User-Agent on every request.
    """

    base_url: str = "https://musicbrainz.org/ws/2"
    user_agent: str = "TrackHydrator/0.1.0 (Music Metadata Hydration)"
    request_timeout: float = Field(default=10.0, gt=0)
    rate_limit: float = Field(default=1.0, gt=0)  # Requests per second
    search_limit: int | None = Field(default=None, ge=1, le=100)

    # Search cache
    cache_ttl_seconds: float = Field(default=3600.0, gt=0)  # 1 hour
    single_flight: bool = True

    # Batch hydration
    hydrate_concurrency: int = Field(default=5, ge=1)


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Values can be given with flat naming (constructor keywords) or nested
    naming (environment variables):
    - Flat: console_log_level, musicbrainz_user_agent, musicbrainz_cache_ttl
    - Nested: LOGGING__CONSOLE_LEVEL, MUSICBRAINZ__USER_AGENT

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingConfig = LoggingConfig()
    musicbrainz: MusicBrainzConfig = MusicBrainzConfig()

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Transform flat keys to nested structure.

        Maps flat keys (musicbrainz_cache_ttl) to the nested structure
        expected by the models (musicbrainz.cache_ttl_seconds).
        """
        if not isinstance(data, dict):
            return data

        transformed: dict[str, dict[str, Any]] = {}

        log_mapping = {
            "console_log_level": "console_level",
            "file_log_level": "file_level",
            "log_file": "log_file",
            "log_real_time_debug": "real_time_debug",
        }
        for env_key, field_key in log_mapping.items():
            if env_key in data:
                transformed.setdefault("logging", {})[field_key] = data.pop(env_key)

        mb_mapping = {
            "musicbrainz_base_url": "base_url",
            "musicbrainz_user_agent": "user_agent",
            "musicbrainz_request_timeout": "request_timeout",
            "musicbrainz_rate_limit": "rate_limit",
            "musicbrainz_search_limit": "search_limit",
            "musicbrainz_cache_ttl": "cache_ttl_seconds",
            "musicbrainz_single_flight": "single_flight",
            "musicbrainz_hydrate_concurrency": "hydrate_concurrency",
        }
        for env_key, field_key in mb_mapping.items():
            if env_key in data:
                transformed.setdefault("musicbrainz", {})[field_key] = data.pop(
                    env_key
                )

        # Nested values given explicitly win over flat aliases
        for section, values in transformed.items():
            existing = data.get(section)
            if isinstance(existing, dict):
                data[section] = {**values, **existing}
            elif existing is None:
                data[section] = values

        return data


# Singleton instance for application use
settings = Settings()


# =============================================================================
# FLAT KEY ACCESS
# =============================================================================

_LEGACY_KEY_MAP = {
    # Logging settings
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "LOG_REAL_TIME_DEBUG": lambda: settings.logging.real_time_debug,
    # MusicBrainz settings
    "MUSICBRAINZ_BASE_URL": lambda: settings.musicbrainz.base_url,
    "MUSICBRAINZ_USER_AGENT": lambda: settings.musicbrainz.user_agent,
    "MUSICBRAINZ_REQUEST_TIMEOUT": lambda: settings.musicbrainz.request_timeout,
    "MUSICBRAINZ_RATE_LIMIT": lambda: settings.musicbrainz.rate_limit,
    "MUSICBRAINZ_SEARCH_LIMIT": lambda: settings.musicbrainz.search_limit,
    "MUSICBRAINZ_CACHE_TTL": lambda: settings.musicbrainz.cache_ttl_seconds,
    "MUSICBRAINZ_SINGLE_FLIGHT": lambda: settings.musicbrainz.single_flight,
    "MUSICBRAINZ_HYDRATE_CONCURRENCY": lambda: settings.musicbrainz.hydrate_concurrency,
}


def get_config(key: str, default=None):
    """Get configuration value by flat key with optional default.

    Args:
        key: Configuration key to retrieve
        default: Default value if key not found

    Returns:
        Configuration value or default

    Example:
        >>> ttl = get_config("MUSICBRAINZ_CACHE_TTL", 3600.0)
    """
    if key in _LEGACY_KEY_MAP:
        return _LEGACY_KEY_MAP[key]()

    return default
