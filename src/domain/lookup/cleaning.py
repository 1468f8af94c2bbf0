"""Text cleaning for search terms sent to MusicBrainz.

Play sources report names with inconsistent accents and spacing
("Beyoncé" vs "Beyonce", double spaces from scrobblers). Cleaning happens
before the query is built and before the cache key is derived, so both
spellings share one cache slot.
"""

import re
import unicodedata

from attrs import define, field

_WHITESPACE_RE = re.compile(r"\s+")


@define(frozen=True, slots=True)
class MetadataCleaner:
    """Strip diacritics from letters of one script and normalize spacing.

    Only combining marks that follow a base letter of the configured script
    are removed; other scripts and all non-mark characters pass through in
    their original order. Cleaning is idempotent.

    Attributes:
        script: Unicode script name prefix, as used in character names ("LATIN")
    """

    script: str = field(default="Latin", converter=lambda s: s.upper())

    def _is_script_letter(self, char: str) -> bool:
        return unicodedata.name(char, "").startswith(f"{self.script} ")

    def _strip_marks(self, text: str) -> str:
        decomposed = unicodedata.normalize("NFD", text)
        kept: list[str] = []
        base_in_script = False
        for char in decomposed:
            if unicodedata.combining(char):
                if base_in_script:
                    continue
            else:
                base_in_script = self._is_script_letter(char)
            kept.append(char)
        return unicodedata.normalize("NFC", "".join(kept))

    def clean(self, text: str) -> str:
        """Clean a free-text value."""
        if not text:
            return ""
        return _WHITESPACE_RE.sub(" ", self._strip_marks(text)).strip()

    def clean_recording(self, title: str) -> str:
        """Clean a recording or release title."""
        return self.clean(title)

    def clean_artist(self, name: str) -> str:
        """Clean an artist name (or a comma-joined list of names)."""
        return self.clean(name)
