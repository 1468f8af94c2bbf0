"""In-memory TTL cache for MusicBrainz search results.

Entries are keyed by the fingerprint of the cleaned search parameters and
expire lazily: an entry past its ``expires_at`` is treated as absent on read
but stays in memory until it is replaced or ``purge_expired`` is called.
Nothing sweeps the store in the background, so it grows with the number of
distinct queries seen by the process.
"""

from collections.abc import Callable, Iterable
import threading
import time

from attrs import define, field

from src.config import get_logger
from src.domain.lookup import CandidateRecording

logger = get_logger(__name__).bind(service="search_cache")


@define(frozen=True, slots=True)
class CacheEntry:
    """Cached search result with its absolute expiry (monotonic seconds)."""

    recordings: tuple[CandidateRecording, ...]
    expires_at: float

    def is_live(self, now: float) -> bool:
        """Whether the entry can still be trusted at ``now``."""
        return now < self.expires_at


@define(slots=True)
class SearchCache:
    """Thread-safe fingerprint → search result store with per-entry TTL.

    Entries are immutable and replaced wholesale, so a reader sees either
    the previous entry or the new one, never a mix. Reads take no lock
    (a single ``dict.get`` is atomic), so readers never wait on each other;
    the lock serializes writers and purges.

    Attributes:
        ttl: Default time-to-live in seconds for new entries
        clock: Monotonic time source (injectable for tests)
    """

    ttl: float = field()
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    _entries: dict[str, CacheEntry] = field(factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(factory=threading.Lock, init=False, repr=False)

    @ttl.validator
    def _check_ttl(self, attribute, value: float) -> None:
        if value <= 0:
            raise ValueError(f"Cache TTL must be positive, got {value}")

    def get(self, key: str) -> CacheEntry | None:
        """Return the live entry for ``key``, or None if missing or expired.

        Entries hold an immutable tuple of immutable recordings, so the
        returned entry cannot be used to alter what other readers see.
        """
        return self.lookup(key)[0]

    def lookup(self, key: str) -> tuple[CacheEntry | None, bool]:
        """Return ``(entry, found)`` where ``found`` ignores expiry.

        Lets callers tell a cold miss from an expired entry.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None, False
        if not entry.is_live(self.clock()):
            return None, True
        return entry, True

    def put(
        self,
        key: str,
        recordings: Iterable[CandidateRecording],
        ttl: float | None = None,
    ) -> CacheEntry:
        """Store ``recordings`` under ``key``, replacing any previous entry."""
        ttl = self.ttl if ttl is None else ttl
        entry = CacheEntry(recordings=tuple(recordings), expires_at=self.clock() + ttl)
        with self._lock:
            self._entries[key] = entry
        return entry

    def purge_expired(self) -> int:
        """Drop expired entries. Returns the number removed."""
        now = self.clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if not e.is_live(now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug(f"Purged {len(expired)} expired search cache entries")
        return len(expired)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet purged."""
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None
