"""Per-user suggestion analytics schema."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from pantry_suggest.schemas.base import APIRequest, APIResponse
from pantry_suggest.schemas.recipe import QuickRecipeSuggestion


class UserAnalytics(APIResponse):
    """Running usage totals for one user."""

    user_id: str
    suggestions_generated: int = Field(default=0, ge=0)
    suggestions_used: int = Field(default=0, ge=0)
    most_popular_cuisines: list[str] = Field(default_factory=list, max_length=5)
    average_match_percentage: int = Field(default=0, ge=0, le=100)
    last_used: datetime


class SuccessRateResponse(APIResponse):
    """Share of generated suggestions the user went on to use."""

    user_id: str
    success_rate: int = Field(..., ge=0, le=100, description="Whole percentage")


class SuggestionUsedRequest(APIRequest):
    """Body of a "suggestion used" event."""

    user_id: str = Field(default="anonymous", min_length=1)
    suggestion: QuickRecipeSuggestion


class UsageAcceptedResponse(APIResponse):
    """Acknowledgement for a recorded usage event."""

    message: str = Field(..., examples=["Usage recorded"])
