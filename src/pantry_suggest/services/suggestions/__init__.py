"""Quick recipe suggestion engine."""

from pantry_suggest.services.suggestions.analytics import AnalyticsTracker
from pantry_suggest.services.suggestions.exceptions import (
    InsufficientPantryError,
    PantryUnavailableError,
    ParseError,
    SuggestionsError,
)
from pantry_suggest.services.suggestions.fallback import (
    static_fallback_suggestions,
    synthesize_candidates,
)
from pantry_suggest.services.suggestions.orchestrator import (
    GenerationOrchestrator,
    GenerationOutcome,
)
from pantry_suggest.services.suggestions.parser import parse_recipe_candidates
from pantry_suggest.services.suggestions.prioritizer import prioritize_pantry
from pantry_suggest.services.suggestions.scorer import score_candidates
from pantry_suggest.services.suggestions.service import QuickSuggestionsService


__all__ = [
    "AnalyticsTracker",
    "GenerationOrchestrator",
    "GenerationOutcome",
    "InsufficientPantryError",
    "PantryUnavailableError",
    "ParseError",
    "QuickSuggestionsService",
    "SuggestionsError",
    "parse_recipe_candidates",
    "prioritize_pantry",
    "score_candidates",
    "static_fallback_suggestions",
    "synthesize_candidates",
]
