"""Redis-backed suggestion cache.

Entries are stored as orjson payloads with ``SETEX`` so Redis expires them
on its own. Redis failures are logged and treated as misses so a cache
outage never breaks suggestion generation.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from pantry_suggest.cache.keys import DEFAULT_KEY_PREFIX
from pantry_suggest.cache.memory import HitCounter
from pantry_suggest.observability.logging import get_logger
from pantry_suggest.schemas.cache import CacheEntry


if TYPE_CHECKING:
    from redis.asyncio import Redis

    from pantry_suggest.schemas.cache import CacheStats


logger = get_logger(__name__)


class RedisSuggestionCache:
    """Suggestion cache shared by every worker process."""

    def __init__(
        self,
        client: Redis[Any],
        ttl_seconds: int,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        """Initialize the cache.

        Args:
            client: Connected async Redis client.
            ttl_seconds: Lifetime of an entry.
            key_prefix: Prefix shared by every suggestion key.
        """
        self._client = client
        self._ttl_seconds = ttl_seconds
        self._key_prefix = key_prefix
        self._counter = HitCounter()
        self._counter_lock = threading.Lock()

    @classmethod
    def from_url(
        cls,
        url: str,
        ttl_seconds: int,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> RedisSuggestionCache:
        """Create a cache with its own connection pool."""
        pool = ConnectionPool.from_url(url, max_connections=20)
        logger.info("Initializing Redis suggestion cache", key_prefix=key_prefix)
        return cls(redis.Redis(connection_pool=pool), ttl_seconds, key_prefix)

    async def ping(self) -> None:
        """Check the connection, raising ``redis.RedisError`` when it is down."""
        await self._client.ping()

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()
        logger.info("Redis suggestion cache closed")

    def _record(self, *, hit: bool) -> None:
        with self._counter_lock:
            self._counter.record(hit=hit)

    async def get(self, key: str, *, now: float) -> CacheEntry | None:
        try:
            payload = await self._client.get(key)
        except redis.RedisError:
            logger.exception("Cache read error", key=key)
            self._record(hit=False)
            return None

        entry = None
        if payload:
            try:
                entry = CacheEntry.model_validate_json(payload)
            except ValueError:
                logger.warning("Discarding unreadable cache entry", key=key)

        fresh = entry is not None and entry.is_fresh(now, self._ttl_seconds)
        self._record(hit=fresh)
        return entry if fresh else None

    async def set(self, key: str, entry: CacheEntry) -> None:
        try:
            await self._client.setex(key, self._ttl_seconds, entry.model_dump_json())
            logger.debug("Cached suggestions", key=key)
        except redis.RedisError:
            logger.exception("Cache write error", key=key)

    async def _keys(self) -> list[Any]:
        return [key async for key in self._client.scan_iter(f"{self._key_prefix}:*")]

    async def clear(self) -> None:
        try:
            keys = await self._keys()
            if keys:
                await self._client.delete(*keys)
        except redis.RedisError:
            logger.exception("Cache clear error", key_prefix=self._key_prefix)
            return
        with self._counter_lock:
            self._counter.reset()
        logger.info("Suggestion cache cleared", removed=len(keys))

    async def stats(self) -> CacheStats:
        try:
            size = len(await self._keys())
        except redis.RedisError:
            logger.exception("Cache stats error", key_prefix=self._key_prefix)
            size = 0
        with self._counter_lock:
            return self._counter.to_stats(size)
