"""Suggestion analytics endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from pantry_suggest.api.dependencies import get_suggestions_service
from pantry_suggest.core.exceptions import NotFoundException
from pantry_suggest.schemas.analytics import SuccessRateResponse, UserAnalytics
from pantry_suggest.services.suggestions.service import (
    QuickSuggestionsService,  # noqa: TC001
)


router = APIRouter(tags=["Analytics"])


@router.get(
    "/analytics/{userId}",
    response_model=UserAnalytics,
    summary="Get suggestion analytics for a user",
    responses={404: {"description": "No suggestions generated for this user"}},
)
async def get_user_analytics(
    user_id: Annotated[str, Path(alias="userId", min_length=1)],
    service: Annotated[QuickSuggestionsService, Depends(get_suggestions_service)],
) -> UserAnalytics:
    """Return running totals for ``userId``."""
    analytics = service.get_user_analytics(user_id)
    if analytics is None:
        raise NotFoundException("Analytics", user_id)
    return analytics


@router.get(
    "/analytics/{userId}/success-rate",
    response_model=SuccessRateResponse,
    summary="Get suggestion success rate for a user",
)
async def get_success_rate(
    user_id: Annotated[str, Path(alias="userId", min_length=1)],
    service: Annotated[QuickSuggestionsService, Depends(get_suggestions_service)],
) -> SuccessRateResponse:
    """Return used / generated as a whole percentage (0 when unknown)."""
    return SuccessRateResponse(
        user_id=user_id,
        success_rate=service.get_success_rate(user_id),
    )
