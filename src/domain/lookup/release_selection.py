"""Pure algorithm for picking the canonical release of a recording.

A recording usually appears on many releases (original album, singles,
regional editions, compilations). The hydrator needs exactly one, chosen
deterministically so repeated lookups of the same play agree.
"""

from collections.abc import Sequence

from src.config import get_logger

from .types import CandidateRelease

logger = get_logger(__name__).bind(service="release_selection")

# Worldwide and US releases are treated as the reference editions
PREFERRED_COUNTRIES = frozenset({"XW", "US"})


def release_sort_key(release: CandidateRelease) -> tuple[bool, str, str, str]:
    """Sort key: dated releases first, then date, title and id lexicographically.

    Dates are compared as strings, so "2020" < "2020-01" < "2020-02".
    """
    return (not release.has_valid_date, release.date, release.title, release.id)


def select_best_release(
    releases: Sequence[CandidateRelease],
    recording_title: str,
) -> CandidateRelease | None:
    """Select the best release for a recording.

    Policy, in order:
    1. No releases: None
    2. A single release: that release
    3. Otherwise, over the releases sorted with ``release_sort_key``:
       a. the first whose title differs from the recording title and whose
          country is worldwide or US
       b. the first whose title differs from the recording title
       c. the first release overall

    Args:
        releases: Releases attached to the recording
        recording_title: Title of the recording, used to skip self-titled singles

    Returns:
        The selected release or None if there were no releases
    """
    if not releases:
        return None
    if len(releases) == 1:
        return releases[0]

    ordered = sorted(releases, key=release_sort_key)

    for release in ordered:
        if release.country in PREFERRED_COUNTRIES and release.title != recording_title:
            return release

    for release in ordered:
        if release.title != recording_title:
            return release

    oldest = ordered[0]
    logger.debug(
        f"No release titled differently from '{recording_title}', picking oldest",
        release_id=oldest.id,
        release_title=oldest.title,
    )
    return oldest
