"""LLM prompt templates."""

from pantry_suggest.llm.prompts.base import BasePrompt, RenderedPrompt
from pantry_suggest.llm.prompts.quick_suggestions import (
    DIETARY_CONSTRAINTS,
    QuickSuggestionsPrompt,
    dietary_constraint,
)


__all__ = [
    "DIETARY_CONSTRAINTS",
    "BasePrompt",
    "QuickSuggestionsPrompt",
    "RenderedPrompt",
    "dietary_constraint",
]
