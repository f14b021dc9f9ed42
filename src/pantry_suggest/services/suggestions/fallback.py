"""Deterministic recipe synthesis.

Used whenever generation or parsing fails. Candidates are built from fixed
templates filled in with the user's highest-priority pantry items, so this
path never fails and never performs I/O. ``static_fallback_suggestions``
is the last resort when there is no usable pantry at all.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pantry_suggest.schemas.enums import IngredientCategory, RecipeDifficulty
from pantry_suggest.schemas.recipe import (
    CandidateIngredient,
    NutritionEstimate,
    QuickRecipeSuggestion,
    RecipeCandidate,
    SuggestionIngredient,
)
from pantry_suggest.services.suggestions.constants import MAX_TEMPLATE_PANTRY_ITEMS


if TYPE_CHECKING:
    from collections.abc import Sequence

    from pantry_suggest.schemas.pantry import PrioritizedItem


PLACEHOLDER_NAME = "Pantry"


@dataclass(frozen=True)
class RecipeTemplate:
    """A recipe shape whose featured slots are filled from the pantry.

    ``name`` and ``instructions`` are ``str.format`` templates; ``{0}``,
    ``{1}`` refer to the items chosen for ``categories`` in order.
    """

    name: str
    categories: tuple[IngredientCategory, ...]
    cuisine: str
    cook_time: str
    difficulty: RecipeDifficulty
    amount: str
    staples: tuple[tuple[str, str], ...]
    instructions: tuple[str, ...]
    nutrition: NutritionEstimate
    confidence: float


TEMPLATES: tuple[RecipeTemplate, ...] = (
    RecipeTemplate(
        name="{0} and {1} Stir Fry",
        categories=(IngredientCategory.PROTEIN, IngredientCategory.VEGETABLES),
        cuisine="Asian",
        cook_time="15 minutes",
        difficulty=RecipeDifficulty.EASY,
        amount="1 portion",
        staples=(("Oil", "2 tbsp"), ("Garlic", "2 cloves")),
        instructions=(
            "Heat oil in a large pan or wok over high heat",
            "Add the {0} and cook until browned",
            "Add the {1} and remaining ingredients and stir fry for 5 minutes",
            "Season to taste and serve hot",
        ),
        nutrition=NutritionEstimate(calories=420, protein_g=28, carbs_g=30, fat_g=18),
        confidence=0.8,
    ),
    RecipeTemplate(
        name="{0} Protein Bowl with {1}",
        categories=(IngredientCategory.PROTEIN, IngredientCategory.GRAINS),
        cuisine="International",
        cook_time="20 minutes",
        difficulty=RecipeDifficulty.EASY,
        amount="1 serving",
        staples=(("Salt", "to taste"), ("Pepper", "to taste")),
        instructions=(
            "Cook the {1} until tender",
            "Season the {0} and cook through",
            "Prepare the remaining ingredients",
            "Assemble everything in bowls and serve",
        ),
        nutrition=NutritionEstimate(calories=520, protein_g=32, carbs_g=55, fat_g=16),
        confidence=0.75,
    ),
    RecipeTemplate(
        name="Hearty {0} Vegetable Soup",
        categories=(IngredientCategory.VEGETABLES,),
        cuisine="Homestyle",
        cook_time="30 minutes",
        difficulty=RecipeDifficulty.EASY,
        amount="1 cup",
        staples=(("Onion", "1"), ("Water", "4 cups"), ("Salt", "to taste")),
        instructions=(
            "Chop the {0} and remaining ingredients into bite-sized pieces",
            "Soften the onion in a large pot",
            "Add everything with the water and simmer for 20 minutes",
            "Season to taste and serve",
        ),
        nutrition=NutritionEstimate(calories=220, protein_g=8, carbs_g=30, fat_g=6),
        confidence=0.7,
    ),
    RecipeTemplate(
        name="Quick {1} Pasta with {0}",
        categories=(IngredientCategory.GRAINS, IngredientCategory.VEGETABLES),
        cuisine="Italian",
        cook_time="20 minutes",
        difficulty=RecipeDifficulty.EASY,
        amount="1 serving",
        staples=(("Olive Oil", "2 tbsp"), ("Garlic", "2 cloves")),
        instructions=(
            "Cook the {0} until tender",
            "Warm olive oil with garlic in a pan",
            "Add the {1} and remaining ingredients and cook for 5 minutes",
            "Toss with the {0}, season and serve",
        ),
        nutrition=NutritionEstimate(calories=480, protein_g=16, carbs_g=70, fat_g=14),
        confidence=0.65,
    ),
)


def _feature(
    items: Sequence[PrioritizedItem],
    categories: tuple[IngredientCategory, ...],
) -> list[PrioritizedItem]:
    """Pick the best item per category.

    When a category is missing, the highest-priority item not already
    featured takes its place.
    """
    featured: list[PrioritizedItem] = []
    for category in categories:
        pick = next(
            (i for i in items if i.category == category and i not in featured),
            None,
        )
        if pick is None:
            pick = next((i for i in items if i not in featured), None)
        if pick is not None:
            featured.append(pick)
    return featured


def build_candidate(
    template: RecipeTemplate,
    items: Sequence[PrioritizedItem],
) -> RecipeCandidate:
    """Fill ``template`` with ``items`` (best first)."""
    featured = _feature(items, template.categories)
    names = [item.name for item in featured]
    names += [PLACEHOLDER_NAME] * (len(template.categories) - len(names))

    pantry_items = featured + [i for i in items if i not in featured]
    ingredients = [
        CandidateIngredient(name=item.name, amount=template.amount)
        for item in pantry_items[:MAX_TEMPLATE_PANTRY_ITEMS]
    ]
    ingredients += [
        CandidateIngredient(name=name, amount=amount)
        for name, amount in template.staples
    ]

    return RecipeCandidate(
        name=template.name.format(*names),
        cuisine=template.cuisine,
        cook_time=template.cook_time,
        difficulty=template.difficulty,
        servings=4,
        ingredients=ingredients,
        instructions=[step.format(*names) for step in template.instructions],
        nutrition=template.nutrition,
        confidence=template.confidence,
    )


def synthesize_candidates(
    items: Sequence[PrioritizedItem],
    count: int,
) -> list[RecipeCandidate]:
    """Build up to ``count`` candidates (at most one per template).

    Args:
        items: Prioritized pantry items, best first.
        count: Number of candidates wanted.

    Returns:
        ``min(count, len(TEMPLATES))`` candidates in template order.
    """
    return [build_candidate(t, items) for t in TEMPLATES[: max(count, 0)]]


# =============================================================================
# Static fallback
# =============================================================================


def _static(
    name: str,
    cuisine: str,
    cook_time: str,
    ingredients: list[tuple[str, str, bool]],
    instructions: list[str],
    nutrition: NutritionEstimate,
    priority: int,
    confidence: float,
    servings: int = 4,
) -> QuickRecipeSuggestion:
    return QuickRecipeSuggestion(
        id=str(uuid.uuid4()),
        name=name,
        cuisine=cuisine,
        cook_time=cook_time,
        difficulty=RecipeDifficulty.EASY,
        servings=servings,
        ingredients=[
            SuggestionIngredient(name=n, amount=a, available=available)
            for n, a, available in ingredients
        ],
        instructions=instructions,
        nutrition=nutrition,
        matching_ingredients=[n for n, _, available in ingredients if available],
        missing_ingredients=[n for n, _, available in ingredients if not available],
        priority=priority,
        confidence=confidence,
    )


def static_fallback_suggestions(count: int = 3) -> list[QuickRecipeSuggestion]:
    """Generic pantry-agnostic suggestions with fixed availability flags."""
    suggestions = [
        _static(
            name="Simple Pasta with Available Ingredients",
            cuisine="Italian",
            cook_time="20 minutes",
            ingredients=[
                ("Pasta", "8 oz", True),
                ("Olive Oil", "2 tbsp", True),
                ("Garlic", "2 cloves", True),
            ],
            instructions=[
                "Boil pasta according to package directions",
                "Heat olive oil and sauté garlic",
                "Combine pasta with oil and garlic",
                "Season with salt and pepper",
            ],
            nutrition=NutritionEstimate(calories=450, protein_g=14, carbs_g=75, fat_g=12),
            priority=70,
            confidence=0.7,
        ),
        _static(
            name="Simple Scrambled Eggs",
            cuisine="American",
            cook_time="10 minutes",
            ingredients=[
                ("Eggs", "4 large", True),
                ("Butter", "1 tbsp", True),
                ("Salt", "to taste", True),
            ],
            instructions=[
                "Whisk the eggs with a pinch of salt",
                "Melt butter in a pan over low heat",
                "Add the eggs and stir gently until just set",
                "Serve immediately",
            ],
            nutrition=NutritionEstimate(calories=320, protein_g=24, carbs_g=2, fat_g=24),
            priority=60,
            confidence=0.7,
            servings=2,
        ),
        _static(
            name="Pantry Fried Rice",
            cuisine="Asian",
            cook_time="20 minutes",
            ingredients=[
                ("Cooked Rice", "3 cups", True),
                ("Eggs", "2", True),
                ("Oil", "2 tbsp", True),
                ("Soy Sauce", "2 tbsp", False),
            ],
            instructions=[
                "Heat oil in a large pan",
                "Scramble the eggs and set aside",
                "Fry the rice until lightly crisp",
                "Return the eggs, add soy sauce and toss",
            ],
            nutrition=NutritionEstimate(calories=410, protein_g=12, carbs_g=62, fat_g=12),
            priority=50,
            confidence=0.65,
        ),
    ]
    return suggestions[: max(count, 1)]
