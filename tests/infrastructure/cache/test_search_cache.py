"""Tests for the in-memory search result cache."""

import threading
import time

import pytest

from src.infrastructure.cache import CacheEntry, SearchCache
from tests.fixtures.builders import make_recording


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return SearchCache(ttl=60, clock=clock)


class TestSearchCache:
    """Storage, expiry and purging."""

    def test_put_then_get(self, cache):
        recordings = [make_recording("r1"), make_recording("r2")]

        cache.put("k", recordings)
        entry = cache.get("k")

        assert entry is not None
        assert entry.recordings == tuple(recordings)
        assert "k" in cache

    def test_missing_key(self, cache):
        assert cache.get("absent") is None
        assert cache.lookup("absent") == (None, False)
        assert "absent" not in cache

    def test_entry_expires_after_ttl(self, cache, clock):
        cache.put("k", [make_recording()])

        clock.advance(59.9)
        assert cache.get("k") is not None

        clock.advance(0.1)
        assert cache.get("k") is None

    def test_lookup_reports_expired_entry_as_found(self, cache, clock):
        cache.put("k", [])
        clock.advance(61)

        assert cache.lookup("k") == (None, True)

    def test_empty_result_is_cached(self, cache):
        cache.put("k", [])
        entry = cache.get("k")
        assert entry is not None
        assert entry.recordings == ()

    def test_put_replaces_entry_and_refreshes_expiry(self, cache, clock):
        cache.put("k", [make_recording("old")])
        clock.advance(50)
        cache.put("k", [make_recording("new")])
        clock.advance(50)

        entry = cache.get("k")
        assert entry is not None
        assert entry.recordings[0].id == "new"

    def test_per_entry_ttl_override(self, cache, clock):
        cache.put("short", [], ttl=1)
        clock.advance(2)
        assert cache.get("short") is None

    def test_stored_entry_not_affected_by_caller_list(self, cache):
        recordings = [make_recording("r1")]
        cache.put("k", recordings)

        recordings.append(make_recording("r2"))

        assert len(cache.get("k").recordings) == 1

    def test_expired_entries_kept_until_purged(self, cache, clock):
        cache.put("a", [])
        cache.put("b", [])
        clock.advance(30)
        cache.put("c", [])
        clock.advance(31)

        assert len(cache) == 3
        assert cache.purge_expired() == 2
        assert len(cache) == 1
        assert "c" in cache

    def test_clear(self, cache):
        cache.put("a", [])
        cache.clear()
        assert len(cache) == 0

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_ttl_must_be_positive(self, ttl):
        with pytest.raises(ValueError):
            SearchCache(ttl=ttl)

    def test_reads_do_not_wait_on_writer_lock(self, cache):
        """A reader is served while another thread holds the write lock."""
        cache.put("k", [make_recording()])
        results = []

        with cache._lock:
            reader = threading.Thread(target=lambda: results.append(cache.get("k")))
            reader.start()
            reader.join(timeout=1)
            assert not reader.is_alive()

        assert results[0] is not None

    def test_real_clock_short_ttl(self):
        """A millisecond TTL expires with the default monotonic clock."""
        cache = SearchCache(ttl=0.001)
        cache.put("k", [make_recording()])

        time.sleep(0.005)

        assert cache.get("k") is None


class TestCacheEntry:
    def test_live_strictly_before_expiry(self):
        entry = CacheEntry(recordings=(), expires_at=10.0)
        assert entry.is_live(9.99)
        assert not entry.is_live(10.0)
