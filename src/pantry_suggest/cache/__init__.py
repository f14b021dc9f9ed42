"""Suggestion list caching."""

from pantry_suggest.cache.keys import make_cache_key, time_window
from pantry_suggest.cache.memory import InMemorySuggestionCache
from pantry_suggest.cache.protocol import SuggestionCacheProtocol
from pantry_suggest.cache.redis import RedisSuggestionCache


__all__ = [
    "InMemorySuggestionCache",
    "RedisSuggestionCache",
    "SuggestionCacheProtocol",
    "make_cache_key",
    "time_window",
]
