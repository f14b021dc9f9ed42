"""Suggestion cache schemas."""

from __future__ import annotations

from pydantic import Field

from pantry_suggest.schemas.base import APIResponse
from pantry_suggest.schemas.recipe import QuickRecipeSuggestion


class CacheEntry(APIResponse):
    """Cached suggestion list and when it was written (epoch seconds)."""

    suggestions: list[QuickRecipeSuggestion]
    created_at: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        """Entries are only served while younger than the TTL."""
        return now - self.created_at < ttl_seconds


class CacheStats(APIResponse):
    """Cache size and hit accounting."""

    size: int = Field(..., ge=0)
    hits: int = Field(default=0, ge=0)
    misses: int = Field(default=0, ge=0)
    hit_rate: float = Field(default=0.0, ge=0, le=1)


class CacheClearResponse(APIResponse):
    """Response model for cache clear operation."""

    message: str = Field(..., examples=["Cache cleared successfully"])
