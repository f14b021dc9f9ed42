"""Quick suggestion endpoints.

Provides:
- GET /suggestions for ranked pantry-first recipe suggestions
- POST /suggestions/used to record that a suggestion was cooked or saved
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from pantry_suggest.api.dependencies import get_suggestions_service
from pantry_suggest.observability.logging import get_logger
from pantry_suggest.schemas.analytics import (
    SuggestionUsedRequest,
    UsageAcceptedResponse,
)
from pantry_suggest.schemas.enums import DifficultyFilter
from pantry_suggest.schemas.recipe import SuggestionBatch
from pantry_suggest.schemas.request import SuggestionRequest
from pantry_suggest.services.suggestions.service import (
    QuickSuggestionsService,  # noqa: TC001
)


logger = get_logger(__name__)

router = APIRouter(tags=["Suggestions"])


@router.get(
    "/suggestions",
    response_model=SuggestionBatch,
    summary="Get quick recipe suggestions",
    description=(
        "Returns a small ranked set of recipes that mostly use ingredients "
        "already in the pantry, favoring items that expire soon. Falls back "
        "to deterministic suggestions when the generation provider fails."
    ),
    responses={
        503: {"description": "Pantry unavailable and no fallback possible"},
    },
)
async def get_suggestions(
    service: Annotated[QuickSuggestionsService, Depends(get_suggestions_service)],
    user_id: Annotated[str, Query(alias="userId", min_length=1)] = "anonymous",
    max_suggestions: Annotated[int, Query(alias="maxSuggestions", ge=1, le=10)] = 4,
    max_cook_time: Annotated[int, Query(alias="maxCookTime", gt=0)] = 45,
    difficulty: Annotated[DifficultyFilter, Query()] = DifficultyFilter.EITHER,
    prioritize_expiring: Annotated[bool, Query(alias="prioritizeExpiring")] = True,
    dietary_preferences: Annotated[
        list[str] | None, Query(alias="dietaryPreferences")
    ] = None,
    force_refresh: Annotated[bool, Query(alias="forceRefresh")] = False,
) -> SuggestionBatch:
    """Get quick suggestions for the caller's pantry.

    ``dietaryPreferences`` may be repeated or comma-separated.
    """
    tags = [t for value in dietary_preferences or [] for t in value.split(",")]
    request = SuggestionRequest(
        user_id=user_id,
        max_suggestions=max_suggestions,
        max_cook_time=max_cook_time,
        difficulty=difficulty,
        prioritize_expiring=prioritize_expiring,
        dietary_preferences=tags,
        force_refresh=force_refresh,
    )
    logger.info(
        "Quick suggestions requested",
        user_id=user_id,
        max_suggestions=max_suggestions,
        force_refresh=force_refresh,
    )
    return await service.suggest(request)


@router.post(
    "/suggestions/used",
    response_model=UsageAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Record a used suggestion",
    description=(
        "Records that the user cooked or saved a suggestion. Ignored for "
        "users who have never received generated suggestions."
    ),
)
async def record_suggestion_used(
    body: SuggestionUsedRequest,
    service: Annotated[QuickSuggestionsService, Depends(get_suggestions_service)],
) -> UsageAcceptedResponse:
    """Record a usage event (fire-and-forget)."""
    service.track_suggestion_used(body.user_id, body.suggestion)
    return UsageAcceptedResponse(message="Usage recorded")
