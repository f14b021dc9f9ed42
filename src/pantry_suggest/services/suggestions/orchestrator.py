"""Generation orchestration.

Calls the generation provider once and parses its output. Any failure
(exception, timeout, unparseable output) falls back to the deterministic
synthesizer; callers never see a provider error. There are no retries.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pantry_suggest.llm.prompts.quick_suggestions import QuickSuggestionsPrompt
from pantry_suggest.observability.logging import get_logger
from pantry_suggest.schemas.enums import SuggestionSource
from pantry_suggest.services.suggestions.constants import (
    FALLBACK_PANTRY_SLICE,
    MAX_MISSING_INGREDIENTS,
    MIN_PANTRY_MATCHES,
)
from pantry_suggest.services.suggestions.fallback import synthesize_candidates
from pantry_suggest.services.suggestions.parser import parse_recipe_candidates


if TYPE_CHECKING:
    from collections.abc import Sequence

    from pantry_suggest.llm.client.protocol import GenerationProviderProtocol
    from pantry_suggest.llm.prompts.base import RenderedPrompt
    from pantry_suggest.schemas.pantry import PrioritizedItem
    from pantry_suggest.schemas.recipe import RecipeCandidate
    from pantry_suggest.schemas.request import SuggestionRequest


logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationOutcome:
    """Candidates plus the path that produced them."""

    candidates: list[RecipeCandidate]
    source: SuggestionSource


class GenerationOrchestrator:
    """Single-shot generation with a synthesized fallback."""

    def __init__(
        self,
        provider: GenerationProviderProtocol | None,
        *,
        timeout: float | None = None,
        fallback_slice: int = FALLBACK_PANTRY_SLICE,
        min_pantry_matches: int = MIN_PANTRY_MATCHES,
        max_missing_ingredients: int = MAX_MISSING_INGREDIENTS,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            provider: Generation provider, or None to always synthesize.
            timeout: Seconds allowed for the provider call (None = unbounded).
            fallback_slice: How many top pantry items the fallback uses.
            min_pantry_matches: Pantry ingredients each recipe should use.
            max_missing_ingredients: Missing ingredients a recipe may need.
        """
        self._provider = provider
        self._timeout = timeout
        self._fallback_slice = fallback_slice
        self._min_pantry_matches = min_pantry_matches
        self._max_missing_ingredients = max_missing_ingredients
        self._prompt = QuickSuggestionsPrompt()

    def build_prompt(
        self,
        items: Sequence[PrioritizedItem],
        request: SuggestionRequest,
    ) -> RenderedPrompt:
        """Render the generation prompt for ``items`` and ``request``."""
        return self._prompt.render(
            items=items,
            request=request,
            min_pantry_matches=self._min_pantry_matches,
            max_missing_ingredients=self._max_missing_ingredients,
        )

    def fallback(
        self,
        items: Sequence[PrioritizedItem],
        request: SuggestionRequest,
    ) -> list[RecipeCandidate]:
        """Synthesize candidates from the highest-priority items."""
        return synthesize_candidates(
            items[: self._fallback_slice],
            request.max_suggestions,
        )

    async def generate(
        self,
        items: Sequence[PrioritizedItem],
        request: SuggestionRequest,
    ) -> GenerationOutcome:
        """Produce candidates from the provider, or from the fallback.

        Cancellation of the calling task is propagated. Every other failure,
        including a cancellation raised by the provider itself, falls back.
        """
        if self._provider is None:
            logger.debug("No generation provider configured, synthesizing")
            return GenerationOutcome(
                self.fallback(items, request), SuggestionSource.FALLBACK
            )

        prompt = self.build_prompt(items, request)
        try:
            async with asyncio.timeout(self._timeout):
                raw = await self._provider.generate_content(
                    prompt.text,
                    system=prompt.system,
                    options=prompt.options,
                )
            candidates = parse_recipe_candidates(raw)
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            logger.warning("Generation provider cancelled, using fallback recipes")
        except TimeoutError:
            logger.warning(
                "Generation provider timed out, using fallback recipes",
                timeout=self._timeout,
            )
        except Exception as e:
            logger.warning(
                "Generation failed, using fallback recipes",
                error_type=type(e).__name__,
                error=str(e),
            )
        else:
            logger.info("Generated recipe candidates", count=len(candidates))
            return GenerationOutcome(candidates, SuggestionSource.AI)

        return GenerationOutcome(self.fallback(items, request), SuggestionSource.FALLBACK)
