"""In-process caches for external lookups."""

from .search_cache import CacheEntry, SearchCache

__all__ = ["CacheEntry", "SearchCache"]
