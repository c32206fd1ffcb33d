"""
Query result cache

Entries are keyed by query identity, e.g. ("payments", "overdue", "2026-10-18").
A successful mutation invalidates every key under the prefixes it may have
changed; there is no time-based expiry. The cache holds at most `max_entries`
keys and drops the oldest first.
"""
from threading import Lock
from typing import Any, Callable, Dict, Hashable, Tuple

from config.settings import APP_CONFIG
from services.logger import logger

QueryKey = Tuple[Hashable, ...]


class QueryCache:
    """In-process cache of read results, invalidated on write"""

    def __init__(self, max_entries: int = APP_CONFIG["query_cache_max_entries"]):
        self._entries: Dict[QueryKey, Any] = {}
        self._lock = Lock()
        # bumped by every invalidation; loads that straddle one are not stored
        self._generation = 0
        self.max_entries = max_entries

    def get_or_load(self, key: QueryKey, loader: Callable[[], Any]) -> Any:
        """Return the cached value for key, running loader on a miss.

        Failed loads are not cached, nor are loads overtaken by an invalidation.
        """
        with self._lock:
            if key in self._entries:
                return self._entries[key]
            generation = self._generation

        value = loader()

        with self._lock:
            if generation != self._generation:
                logger.debug(f"cache store skipped for {key}: invalidated during load")
                return value
            self._entries[key] = value
            while len(self._entries) > self.max_entries:
                del self._entries[next(iter(self._entries))]
        return value

    def invalidate(self, *prefix: Hashable) -> int:
        """Drop every entry whose key starts with prefix. Returns the count dropped."""
        size = len(prefix)
        with self._lock:
            self._generation += 1
            stale = [key for key in self._entries if key[:size] == prefix]
            for key in stale:
                del self._entries[key]

        if stale:
            logger.debug(f"cache invalidated {prefix}: {len(stale)} entries")
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._generation += 1
            self._entries.clear()

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# shared by every service instance in the process
query_cache = QueryCache()
