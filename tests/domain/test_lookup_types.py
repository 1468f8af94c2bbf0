"""Tests for search parameters, cache fingerprints, queries and response decoding."""

import pytest

from src.domain.exceptions import InvalidSearchParamsError, ResponseDecodeError
from src.domain.lookup import (
    ArtistCredit,
    CandidateRecording,
    CandidateRelease,
    SearchParams,
    SearchResponse,
    build_recording_query,
    cache_key,
)
from tests.fixtures.builders import TEARDROP_JSON, search_payload


class TestSearchParams:
    """Validation of the free-text search fields."""

    def test_all_empty_is_invalid(self):
        with pytest.raises(InvalidSearchParamsError):
            SearchParams().validate()

    def test_invalid_params_error_is_value_error(self):
        with pytest.raises(ValueError):
            SearchParams(track="", artist="", release="").validate()

    @pytest.mark.parametrize(
        "params",
        [
            SearchParams(track="Teardrop"),
            SearchParams(artist="Massive Attack"),
            SearchParams(release="Mezzanine"),
        ],
    )
    def test_any_single_field_is_enough(self, params):
        assert params.validate() is params
        assert not params.is_empty()


class TestCacheKey:
    """Fingerprint derivation for the search cache."""

    def test_same_params_same_key(self):
        a = SearchParams(track="Teardrop", artist="Massive Attack")
        b = SearchParams(track="Teardrop", artist="Massive Attack")
        assert cache_key(a) == cache_key(b)

    def test_key_format(self):
        key = cache_key(SearchParams(track="Tear drop", artist="MA", release=""))
        assert key == "track=Tear+drop&artist=MA&release="

    def test_field_position_matters(self):
        assert cache_key(SearchParams(track="x")) != cache_key(SearchParams(artist="x"))

    def test_separators_inside_values_are_escaped(self):
        """A value containing '&artist=' cannot impersonate another field."""
        crafted = SearchParams(track="a&artist=b")
        honest = SearchParams(track="a", artist="b")
        assert cache_key(crafted) != cache_key(honest)

    def test_case_sensitive(self):
        assert cache_key(SearchParams(track="Teardrop")) != cache_key(
            SearchParams(track="teardrop")
        )


class TestBuildRecordingQuery:
    """Lucene query construction."""

    def test_all_fields(self):
        query = build_recording_query(
            SearchParams(track="Teardrop", artist="Massive Attack", release="Mezzanine")
        )
        assert (
            query
            == 'recording:"Teardrop" AND artist:"Massive Attack" AND release:"Mezzanine"'
        )

    def test_empty_fields_omitted(self):
        assert build_recording_query(SearchParams(artist="Björk")) == 'artist:"Björk"'

    def test_quotes_and_backslashes_escaped(self):
        query = build_recording_query(SearchParams(track='Say "Hi" \\o/'))
        assert query == 'recording:"Say \\"Hi\\" \\\\o/"'


class TestSearchResponseDecoding:
    """Decoding of the JSON recording search body."""

    def test_decodes_recording_fields(self):
        response = SearchResponse.from_json(search_payload(TEARDROP_JSON))

        assert response.count == 1
        assert response.created is not None
        assert response.created.year == 2024

        recording = response.recordings[0]
        assert recording == CandidateRecording(
            id="rec-teardrop",
            title="Teardrop",
            length_ms=330773,
            isrcs=("GBAAA9800045",),
            artist_credits=(
                ArtistCredit(
                    artist_id="artist-ma",
                    artist_name="Massive Attack",
                    join_phrase="",
                    sort_name="Massive Attack",
                ),
            ),
            releases=(
                CandidateRelease(
                    id="rel-single",
                    title="Teardrop",
                    status="Official",
                    date="1998-04-27",
                    country="GB",
                    track_count=4,
                ),
                CandidateRelease(
                    id="rel-album",
                    title="Mezzanine",
                    status="Official",
                    date="1998-04-20",
                    country="GB",
                    track_count=11,
                ),
            ),
        )

    def test_missing_optional_fields_default(self):
        response = SearchResponse.from_json({"recordings": [{"id": "r", "title": "T"}]})

        recording = response.recordings[0]
        assert recording.length_ms is None
        assert recording.isrcs == ()
        assert recording.artist_credits == ()
        assert recording.releases == ()

    def test_credited_name_preferred_over_artist_name(self):
        credit = ArtistCredit.from_json(
            {"name": "Björk Guðmundsdóttir", "artist": {"id": "x", "name": "Björk"}}
        )
        assert credit.artist_name == "Björk Guðmundsdóttir"
        assert credit.artist_id == "x"

    def test_release_without_date_or_country(self):
        release = CandidateRelease.from_json(
            {"id": "r", "title": "T", "date": None, "country": None}
        )
        assert release.date == ""
        assert release.country == ""
        assert not release.has_valid_date

    def test_empty_result(self):
        response = SearchResponse.from_json(search_payload())
        assert response.recordings == ()

    def test_null_recordings_is_empty_result(self):
        response = SearchResponse.from_json({"count": 0, "recordings": None})
        assert response.recordings == ()

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "not an object",
            {"recordings": {"id": "r"}},
            {"recordings": [{"title": "no id"}]},
            {"recordings": [{"id": "r", "length": "long"}]},
            {"recordings": [], "created": "yesterday"},
        ],
    )
    def test_malformed_payloads_raise_decode_error(self, payload):
        with pytest.raises(ResponseDecodeError):
            SearchResponse.from_json(payload)
