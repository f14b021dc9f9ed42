"""Suggestion request schema."""

from __future__ import annotations

from pydantic import ConfigDict, Field, field_validator

from pantry_suggest.schemas.base import APIRequest
from pantry_suggest.schemas.enums import DifficultyFilter


class SuggestionRequest(APIRequest):
    """Immutable parameters of one suggestion call."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(default="anonymous", min_length=1)
    max_suggestions: int = Field(default=4, ge=1, le=10)
    max_cook_time: int = Field(default=45, gt=0, description="Minutes")
    difficulty: DifficultyFilter = Field(default=DifficultyFilter.EITHER)
    prioritize_expiring: bool = Field(default=True)
    dietary_preferences: tuple[str, ...] = Field(default=())
    force_refresh: bool = Field(default=False)

    @field_validator("dietary_preferences", mode="before")
    @classmethod
    def _normalize_tags(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            return tuple(str(tag).strip() for tag in value if str(tag).strip())
        return value
