"""Admin endpoints for cache management.

Provides:
- DELETE /admin/cache for clearing cached suggestion lists
- GET /admin/cache/stats for cache size and hit accounting
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from pantry_suggest.api.dependencies import get_suggestions_service
from pantry_suggest.observability.logging import get_logger
from pantry_suggest.schemas.cache import CacheClearResponse, CacheStats
from pantry_suggest.services.suggestions.service import (
    QuickSuggestionsService,  # noqa: TC001
)


logger = get_logger(__name__)

router = APIRouter(tags=["Admin"])


@router.delete(
    "/admin/cache",
    response_model=CacheClearResponse,
    summary="Clear cached suggestions",
    description=(
        "Removes every cached suggestion list, e.g. after a large pantry "
        "change. The next request for each user regenerates."
    ),
)
async def clear_cache_endpoint(
    service: Annotated[QuickSuggestionsService, Depends(get_suggestions_service)],
) -> CacheClearResponse:
    """Clear all cached suggestion lists."""
    logger.info("Cache clear requested")
    await service.clear_cache()
    return CacheClearResponse(message="Cache cleared successfully")


@router.get(
    "/admin/cache/stats",
    response_model=CacheStats,
    summary="Get suggestion cache statistics",
)
async def cache_stats_endpoint(
    service: Annotated[QuickSuggestionsService, Depends(get_suggestions_service)],
) -> CacheStats:
    """Return cache size and hit accounting."""
    return await service.get_cache_stats()
