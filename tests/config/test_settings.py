"""Tests for settings loading and flat key access."""

from pydantic import ValidationError
import pytest

from src.config import MusicBrainzConfig, Settings, get_config


class TestSettings:
    def test_defaults(self):
        mb = MusicBrainzConfig()

        assert mb.base_url == "https://musicbrainz.org/ws/2"
        assert mb.rate_limit == 1.0
        assert mb.request_timeout == 10.0
        assert mb.cache_ttl_seconds == 3600.0
        assert mb.single_flight is True

    def test_flat_keys_mapped_to_sections(self):
        settings = Settings(
            musicbrainz_cache_ttl=120,
            musicbrainz_user_agent="Tests/1.0",
            console_log_level="WARNING",
        )

        assert settings.musicbrainz.cache_ttl_seconds == 120
        assert settings.musicbrainz.user_agent == "Tests/1.0"
        assert settings.logging.console_level == "WARNING"

    def test_nested_values_win_over_flat_keys(self):
        settings = Settings(
            musicbrainz_rate_limit=5,
            musicbrainz={"rate_limit": 0.5},
        )

        assert settings.musicbrainz.rate_limit == 0.5

    def test_nested_environment_variables(self, monkeypatch):
        monkeypatch.setenv("MUSICBRAINZ__CACHE_TTL_SECONDS", "42")
        monkeypatch.setenv("MUSICBRAINZ__SINGLE_FLIGHT", "false")

        settings = Settings()

        assert settings.musicbrainz.cache_ttl_seconds == 42
        assert settings.musicbrainz.single_flight is False

    @pytest.mark.parametrize(
        "overrides",
        [
            {"rate_limit": 0},
            {"request_timeout": -1},
            {"cache_ttl_seconds": 0},
            {"search_limit": 101},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ValidationError):
            MusicBrainzConfig(**overrides)


class TestGetConfig:
    def test_known_key(self):
        assert get_config("MUSICBRAINZ_BASE_URL") == "https://musicbrainz.org/ws/2"

    def test_unknown_key_returns_default(self):
        assert get_config("NOT_A_SETTING", "fallback") == "fallback"
