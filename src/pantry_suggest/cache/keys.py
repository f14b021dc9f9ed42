"""Time-bucketed cache key derivation.

The wall-clock time is divided into fixed windows and the window index is
part of the key, so a key changes by itself once per window and stale lists
are never looked up again. No background eviction is needed.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import orjson


if TYPE_CHECKING:
    from pantry_suggest.schemas.request import SuggestionRequest


DEFAULT_KEY_PREFIX = "quick_suggestions"


def time_window(now: float, window_seconds: int) -> int:
    """Return the index of the window containing ``now`` (epoch seconds)."""
    return math.floor(now / window_seconds)


def make_cache_key(
    request: SuggestionRequest,
    now: float,
    window_seconds: int,
    prefix: str = DEFAULT_KEY_PREFIX,
) -> str:
    """Build the cache key for ``request`` at time ``now``.

    The key covers the user, the request shape and the time window. Dietary
    tags are sorted so their order does not matter. ``force_refresh`` and
    ``prioritize_expiring`` are not part of the key.
    """
    shape = {
        "userId": request.user_id,
        "maxSuggestions": request.max_suggestions,
        "maxCookTime": request.max_cook_time,
        "difficulty": str(request.difficulty),
        "dietary": sorted(tag.lower() for tag in request.dietary_preferences),
        "window": time_window(now, window_seconds),
    }
    return f"{prefix}:{orjson.dumps(shape, option=orjson.OPT_SORT_KEYS).decode()}"
