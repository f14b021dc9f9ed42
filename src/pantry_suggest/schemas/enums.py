"""Enumeration types shared across the suggestion schemas."""

from __future__ import annotations

from enum import StrEnum


class IngredientCategory(StrEnum):
    """Pantry item categories."""

    PROTEIN = "protein"
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    GRAINS = "grains"
    DAIRY = "dairy"
    SPICES = "spices"
    HERBS = "herbs"
    OILS = "oils"
    PANTRY = "pantry"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: object) -> IngredientCategory:
        """Map loose category text onto a member, defaulting to OTHER."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower().replace("_", "-")
        if text in ("pantry-staples", "pantry-staple", "staples"):
            return cls.PANTRY
        try:
            return cls(text)
        except ValueError:
            return cls.OTHER


class RecipeDifficulty(StrEnum):
    """Difficulty attached to a recipe."""

    EASY = "Easy"
    MEDIUM = "Medium"


class DifficultyFilter(StrEnum):
    """Difficulty constraint on a suggestion request."""

    EASY = "easy"
    MEDIUM = "medium"
    EITHER = "either"


class SuggestionSource(StrEnum):
    """Which path produced a suggestion list."""

    CACHE = "cache"
    AI = "ai"
    FALLBACK = "fallback"
    STATIC = "static"


class HealthStatus(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
