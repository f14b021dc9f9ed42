"""Ingredient matching and suggestion ranking."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from pantry_suggest.schemas.recipe import QuickRecipeSuggestion, SuggestionIngredient
from pantry_suggest.services.suggestions.constants import (
    COMMON_STAPLES,
    EXPIRING_MATCH_WEIGHT,
    MATCH_WEIGHT,
    MAX_MISSING_INGREDIENTS,
    MAX_RESULTS,
    MIN_PANTRY_MATCHES,
    MISSING_PENALTY,
)


if TYPE_CHECKING:
    from collections.abc import Sequence

    from pantry_suggest.schemas.pantry import PrioritizedItem
    from pantry_suggest.schemas.recipe import RecipeCandidate


DEFAULT_INSTRUCTIONS = ("Prepare ingredients", "Follow cooking method", "Enjoy!")


def names_match(ingredient: str, pantry_name: str) -> bool:
    """Case-insensitive containment in either direction."""
    a, b = ingredient.lower(), pantry_name.lower()
    return a in b or b in a


def is_staple(ingredient: str) -> bool:
    """Whether the ingredient is a common staple assumed to be on hand."""
    lowered = ingredient.lower()
    return any(staple in lowered for staple in COMMON_STAPLES)


def score_candidate(
    candidate: RecipeCandidate,
    items: Sequence[PrioritizedItem],
    *,
    max_missing: int = MAX_MISSING_INGREDIENTS,
) -> QuickRecipeSuggestion:
    """Match a candidate's ingredients against the pantry and compute priority.

    Priority is 10 per matching ingredient, plus 20 per expiring pantry item
    the recipe uses, minus 15 per missing ingredient beyond ``max_missing``.
    Staples never count as missing.
    """
    pantry_names = [item.name for item in items]
    matching: list[str] = []
    missing: list[str] = []
    ingredients: list[SuggestionIngredient] = []

    for ingredient in candidate.ingredients:
        available = any(names_match(ingredient.name, p) for p in pantry_names)
        if available:
            matching.append(ingredient.name)
        elif not is_staple(ingredient.name):
            missing.append(ingredient.name)
        ingredients.append(
            SuggestionIngredient(
                name=ingredient.name,
                amount=ingredient.amount,
                available=available,
            )
        )

    expiring_used = sum(
        1
        for item in items
        if item.is_expiring and any(names_match(m, item.name) for m in matching)
    )
    priority = len(matching) * MATCH_WEIGHT + expiring_used * EXPIRING_MATCH_WEIGHT
    if len(missing) > max_missing:
        priority -= (len(missing) - max_missing) * MISSING_PENALTY

    return QuickRecipeSuggestion(
        id=str(uuid.uuid4()),
        name=candidate.name,
        cuisine=candidate.cuisine,
        cook_time=candidate.cook_time,
        difficulty=candidate.difficulty,
        servings=candidate.servings,
        ingredients=ingredients,
        instructions=candidate.instructions or list(DEFAULT_INSTRUCTIONS),
        nutrition=candidate.nutrition,
        matching_ingredients=matching,
        missing_ingredients=missing,
        priority=priority,
        confidence=candidate.confidence,
    )


def score_candidates(
    candidates: Sequence[RecipeCandidate],
    items: Sequence[PrioritizedItem],
    *,
    limit: int = MAX_RESULTS,
    min_matches: int = MIN_PANTRY_MATCHES,
    max_missing: int = MAX_MISSING_INGREDIENTS,
) -> list[QuickRecipeSuggestion]:
    """Score, filter and rank candidates.

    Args:
        candidates: Unscored candidates from the parser or synthesizer.
        items: Prioritized pantry items.
        limit: Maximum number of suggestions returned (never more than 4).
        min_matches: Candidates with fewer matching ingredients are dropped.
        max_missing: Missing ingredients tolerated before the penalty applies.

    Returns:
        Suggestions sorted by priority, highest first.
    """
    scored = [score_candidate(c, items, max_missing=max_missing) for c in candidates]
    kept = [s for s in scored if len(s.matching_ingredients) >= min_matches]
    kept.sort(key=lambda s: s.priority, reverse=True)
    return kept[: min(limit, MAX_RESULTS)]
