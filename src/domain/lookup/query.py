"""MusicBrainz search query construction."""

from .types import SearchParams


def _quote_phrase(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_recording_query(params: SearchParams) -> str:
    """Build an AND query with one exact-phrase clause per present field.

    Quotes and backslashes inside values are escaped so a value cannot
    close its phrase early.

    Example:
        >>> build_recording_query(SearchParams(track="Teardrop", artist="Massive Attack"))
        'recording:"Teardrop" AND artist:"Massive Attack"'
    """
    clauses = []
    if params.track:
        clauses.append(f"recording:{_quote_phrase(params.track)}")
    if params.artist:
        clauses.append(f"artist:{_quote_phrase(params.artist)}")
    if params.release:
        clauses.append(f"release:{_quote_phrase(params.release)}")
    return " AND ".join(clauses)
