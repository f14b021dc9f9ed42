"""Process-local suggestion cache."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from pantry_suggest.observability.logging import get_logger
from pantry_suggest.schemas.cache import CacheStats


if TYPE_CHECKING:
    from pantry_suggest.schemas.cache import CacheEntry


logger = get_logger(__name__)


class HitCounter:
    """Hit/miss bookkeeping shared by the cache stores."""

    def __init__(self) -> None:
        self.hits = 0
        self.misses = 0

    def record(self, *, hit: bool) -> None:
        if hit:
            self.hits += 1
        else:
            self.misses += 1

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0

    def to_stats(self, size: int) -> CacheStats:
        lookups = self.hits + self.misses
        return CacheStats(
            size=size,
            hits=self.hits,
            misses=self.misses,
            hit_rate=self.hits / lookups if lookups else 0.0,
        )


class InMemorySuggestionCache:
    """Dict-backed cache guarded by a lock.

    Stale entries are never served. Every write prunes the entries that are
    past the TTL relative to the new entry, so the mapping only grows with
    the keys written within one TTL.
    """

    def __init__(self, ttl_seconds: float) -> None:
        self._ttl_seconds = ttl_seconds
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._counter = HitCounter()

    async def get(self, key: str, *, now: float) -> CacheEntry | None:
        with self._lock:
            entry = self._entries.get(key)
            fresh = entry is not None and entry.is_fresh(now, self._ttl_seconds)
            if entry is not None and not fresh:
                del self._entries[key]
            self._counter.record(hit=fresh)
        if not fresh:
            return None
        logger.debug("Suggestion cache hit", key=key)
        return entry

    async def set(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            self._entries = {
                k: e
                for k, e in self._entries.items()
                if e.is_fresh(entry.created_at, self._ttl_seconds)
            }
            self._entries[key] = entry

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._counter.reset()
        logger.info("Suggestion cache cleared")

    async def stats(self) -> CacheStats:
        with self._lock:
            return self._counter.to_stats(len(self._entries))
