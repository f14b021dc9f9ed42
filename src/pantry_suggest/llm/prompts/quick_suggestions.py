"""Quick recipe suggestion prompt.

Turns a prioritized pantry snapshot and the caller's constraints into a
single natural-language request. The output depends only on its inputs so
the same pantry and request always produce the same prompt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pantry_suggest.schemas.enums import DifficultyFilter

from .base import BasePrompt


if TYPE_CHECKING:
    from collections.abc import Sequence

    from pantry_suggest.schemas.pantry import PrioritizedItem
    from pantry_suggest.schemas.request import SuggestionRequest


DIETARY_CONSTRAINTS: dict[str, str] = {
    "vegetarian": "No meat or fish",
    "vegan": "No animal products (dairy, eggs, honey, etc.)",
    "gluten-free": "No wheat, barley, rye, or gluten-containing ingredients",
    "dairy-free": "No milk, cheese, butter, or dairy products",
    "keto": "Low-carb (under 20g carbs), high-fat",
    "paleo": "No grains, legumes, dairy, or processed foods",
}


def dietary_constraint(tag: str) -> str:
    """Translate a short dietary tag into an explicit constraint phrase.

    Unknown tags are passed through unchanged.
    """
    return DIETARY_CONSTRAINTS.get(tag.strip().lower(), tag)


def _difficulty_line(difficulty: str) -> str:
    if difficulty == DifficultyFilter.EITHER:
        return "Easy or Medium only"
    return f"{difficulty.capitalize()} only"


def _inventory_entry(item: PrioritizedItem) -> str:
    return f"{item.name} ({item.quantity or '1'} {item.unit or 'unit'})"


class QuickSuggestionsPrompt(BasePrompt):
    """Prompt asking for pantry-first recipe suggestions as a JSON array.

    Example output:
        [
            {
                "name": "Tomato Chicken Rice Bowl",
                "cuisine": "Mediterranean",
                "cookTime": "25 minutes",
                "difficulty": "Easy",
                "servings": 2,
                "ingredients": [
                    {"name": "chicken", "amount": "300 g", "pantryItem": true}
                ],
                "instructions": ["Cook rice", "Sear chicken", "Add tomato"],
                "confidence": 0.9
            }
        ]
    """

    system_prompt: ClassVar[str | None] = (
        "You are a practical home cook who plans meals around what is already "
        "in the pantry. Answer with a JSON array only, no commentary."
    )

    temperature: ClassVar[float] = 0.7
    max_tokens: ClassVar[int | None] = 2048

    def format(self, **kwargs: Any) -> str:
        """Format the prompt.

        Args:
            **kwargs: Must contain 'items' (prioritized pantry items, best
                first) and 'request'. May contain 'min_pantry_matches' and
                'max_missing_ingredients'.

        Returns:
            Formatted prompt string.

        Raises:
            ValueError: If 'items' or 'request' is missing.
        """
        items: Sequence[PrioritizedItem] | None = kwargs.get("items")
        request: SuggestionRequest | None = kwargs.get("request")
        if items is None or request is None:
            msg = "Missing required 'items' or 'request' argument"
            raise ValueError(msg)

        min_matches = kwargs.get("min_pantry_matches", 3)
        max_missing = kwargs.get("max_missing_ingredients", 2)

        expiring = ", ".join(item.name for item in items if item.is_expiring)
        abundant = ", ".join(item.name for item in items if item.is_abundant)
        inventory = ", ".join(_inventory_entry(item) for item in items)

        requirements = [
            f"Use AT LEAST {min_matches} available pantry ingredients per recipe",
            f"Allow maximum {max_missing} common missing ingredients "
            "(like salt, oil, etc.)",
            f"Cook time: Maximum {request.max_cook_time} minutes",
            f"Difficulty: {_difficulty_line(request.difficulty)}",
        ]
        if request.prioritize_expiring and expiring:
            requirements.append(f"Prioritize expiring ingredients: {expiring}")
        requirements.append("Include variety: Different cuisines and cooking methods")
        if request.dietary_preferences:
            phrases = ", ".join(
                dietary_constraint(tag) for tag in request.dietary_preferences
            )
            requirements.append(f"DIETARY REQUIREMENTS: {phrases}")
        requirements_str = "\n".join(f"- {line}" for line in requirements)

        return f"""Generate {request.max_suggestions} quick recipe suggestions using available pantry ingredients.

PANTRY INVENTORY:
Priority ingredients (expiring soon): {expiring or "None"}
Abundant ingredients: {abundant or "None"}
All available: {inventory}

REQUIREMENTS:
{requirements_str}

FORMAT (JSON array):
[{{
  "name": "Recipe Name",
  "cuisine": "Cuisine Type",
  "cookTime": "X minutes",
  "difficulty": "Easy|Medium",
  "servings": 4,
  "ingredients": [{{"name": "ingredient", "amount": "1 cup", "pantryItem": true}}],
  "instructions": ["Step 1", "Step 2"],
  "confidence": 0.9
}}]

Focus on practical, delicious recipes that maximize use of available ingredients."""
