"""Suggestion cache store protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from pantry_suggest.schemas.cache import CacheEntry, CacheStats


@runtime_checkable
class SuggestionCacheProtocol(Protocol):
    """Key/value store for finished suggestion lists.

    ``get`` only returns entries younger than the store's TTL. Failures of a
    remote backend are logged and reported as a miss, never raised.
    """

    async def get(self, key: str, *, now: float) -> CacheEntry | None:
        """Return the fresh entry for ``key`` or None."""
        ...

    async def set(self, key: str, entry: CacheEntry) -> None:
        """Store ``entry`` under ``key``, replacing any previous value."""
        ...

    async def clear(self) -> None:
        """Drop every suggestion entry."""
        ...

    async def stats(self) -> CacheStats:
        """Return size and hit accounting."""
        ...
