"""Pydantic schemas for the suggestion engine."""

from pantry_suggest.schemas.analytics import (
    SuccessRateResponse,
    SuggestionUsedRequest,
    UsageAcceptedResponse,
    UserAnalytics,
)
from pantry_suggest.schemas.base import APIRequest, APIResponse, DownstreamResponse
from pantry_suggest.schemas.cache import CacheClearResponse, CacheEntry, CacheStats
from pantry_suggest.schemas.enums import (
    DifficultyFilter,
    HealthStatus,
    IngredientCategory,
    RecipeDifficulty,
    SuggestionSource,
)
from pantry_suggest.schemas.health import HealthResponse
from pantry_suggest.schemas.pantry import PantryItem, PrioritizedItem
from pantry_suggest.schemas.recipe import (
    CandidateIngredient,
    NutritionEstimate,
    QuickRecipeSuggestion,
    RecipeCandidate,
    SuggestionBatch,
    SuggestionIngredient,
)
from pantry_suggest.schemas.request import SuggestionRequest


__all__ = [
    "APIRequest",
    "APIResponse",
    "CacheClearResponse",
    "CacheEntry",
    "CacheStats",
    "CandidateIngredient",
    "DifficultyFilter",
    "DownstreamResponse",
    "HealthResponse",
    "HealthStatus",
    "IngredientCategory",
    "NutritionEstimate",
    "PantryItem",
    "PrioritizedItem",
    "QuickRecipeSuggestion",
    "RecipeCandidate",
    "RecipeDifficulty",
    "SuccessRateResponse",
    "SuggestionBatch",
    "SuggestionIngredient",
    "SuggestionRequest",
    "SuggestionSource",
    "SuggestionUsedRequest",
    "UsageAcceptedResponse",
    "UserAnalytics",
]
