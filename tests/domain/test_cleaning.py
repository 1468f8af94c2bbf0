"""Tests for search term cleaning."""

import pytest

from src.domain.lookup import MetadataCleaner


@pytest.fixture
def cleaner():
    return MetadataCleaner(script="Latin")


class TestMetadataCleaner:
    """Diacritic stripping and whitespace normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Beyoncé", "Beyonce"),
            ("Sigur Rós", "Sigur Ros"),
            ("Motörhead", "Motorhead"),
            ("Café Tacvba", "Cafe Tacvba"),
            ("Ñu", "Nu"),
        ],
    )
    def test_strips_latin_diacritics(self, cleaner, raw, expected):
        assert cleaner.clean(raw) == expected

    def test_collapses_whitespace(self, cleaner):
        assert cleaner.clean("  Massive \t  Attack \n") == "Massive Attack"

    def test_other_scripts_untouched(self, cleaner):
        """Marks on non-Latin letters are part of the spelling."""
        assert cleaner.clean("Йолка") == "Йолка"
        assert cleaner.clean("ポルノグラフィティ") == "ポルノグラフィティ"

    def test_non_letters_preserved_in_order(self, cleaner):
        assert cleaner.clean("AC/DC - T.N.T. (Live)") == "AC/DC - T.N.T. (Live)"

    def test_idempotent(self, cleaner):
        once = cleaner.clean("  Beyoncé   & Björk ")
        assert cleaner.clean(once) == once

    def test_empty(self, cleaner):
        assert cleaner.clean("") == ""

    def test_recording_and_artist_share_rules(self, cleaner):
        assert cleaner.clean_recording("Déjà  Vu") == "Deja Vu"
        assert cleaner.clean_artist("Zoé") == "Zoe"

    def test_script_name_is_case_insensitive(self):
        assert MetadataCleaner(script="latin").script == "LATIN"
