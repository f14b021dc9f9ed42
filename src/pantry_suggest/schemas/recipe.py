"""Recipe candidate and suggestion schemas."""

from __future__ import annotations

from pydantic import Field

from pantry_suggest.schemas.base import APIResponse
from pantry_suggest.schemas.enums import RecipeDifficulty, SuggestionSource


class NutritionEstimate(APIResponse):
    """Rough per-serving nutrition."""

    calories: int = Field(..., ge=0)
    protein_g: float = Field(..., ge=0)
    carbs_g: float = Field(..., ge=0)
    fat_g: float = Field(..., ge=0)


class CandidateIngredient(APIResponse):
    """Ingredient requirement of a recipe."""

    name: str = Field(..., min_length=1)
    amount: str = Field(default="1 serving")


class SuggestionIngredient(CandidateIngredient):
    """Ingredient requirement annotated with pantry availability."""

    available: bool = Field(..., description="Whether the pantry has it")


class RecipeCandidate(APIResponse):
    """Unscored recipe from the provider or the fallback synthesizer."""

    name: str = Field(default="Suggested Recipe")
    cuisine: str = Field(default="International")
    cook_time: str = Field(default="30 minutes")
    difficulty: RecipeDifficulty = Field(default=RecipeDifficulty.EASY)
    servings: int = Field(default=4, ge=1)
    ingredients: list[CandidateIngredient] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    nutrition: NutritionEstimate | None = None
    confidence: float = Field(default=0.8, ge=0, le=1)


class QuickRecipeSuggestion(APIResponse):
    """Scored, ranked recipe ready for presentation."""

    id: str = Field(..., description="Unique suggestion identifier")
    name: str
    cuisine: str
    cook_time: str
    difficulty: RecipeDifficulty
    servings: int = Field(..., ge=1)
    ingredients: list[SuggestionIngredient]
    instructions: list[str]
    nutrition: NutritionEstimate | None = None
    matching_ingredients: list[str] = Field(
        ...,
        description="Recipe ingredients found in the pantry",
    )
    missing_ingredients: list[str] = Field(
        ...,
        description="Non-staple ingredients the user would need to buy",
    )
    priority: int = Field(..., description="Higher is a better pantry fit")
    confidence: float = Field(..., ge=0, le=1)


class SuggestionBatch(APIResponse):
    """A complete suggestion list plus how it was produced."""

    suggestions: list[QuickRecipeSuggestion]
    source: SuggestionSource
    message: str | None = Field(
        default=None,
        description="User-visible notice, e.g. when the pantry is too small",
    )
    error: str | None = Field(
        default=None,
        description="Machine-readable error code for degraded results",
    )
