"""Quick suggestions service.

Provides methods for:
- Pantry-first recipe suggestions with a generated or synthesized fallback
- Time-windowed caching of finished suggestion lists
- Per-user usage analytics
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pantry_suggest.cache.keys import DEFAULT_KEY_PREFIX, make_cache_key
from pantry_suggest.cache.memory import InMemorySuggestionCache
from pantry_suggest.core.config.settings import SuggestionSettings
from pantry_suggest.observability.logging import get_logger, logging_context
from pantry_suggest.schemas.cache import CacheEntry
from pantry_suggest.schemas.enums import SuggestionSource
from pantry_suggest.schemas.recipe import SuggestionBatch
from pantry_suggest.schemas.request import SuggestionRequest
from pantry_suggest.services.suggestions.analytics import AnalyticsTracker
from pantry_suggest.services.suggestions.constants import (
    INSUFFICIENT_PANTRY_MESSAGE,
    PANTRY_UNAVAILABLE_ERROR,
)
from pantry_suggest.services.suggestions.exceptions import (
    InsufficientPantryError,
    PantryUnavailableError,
)
from pantry_suggest.services.suggestions.fallback import (
    static_fallback_suggestions,
    synthesize_candidates,
)
from pantry_suggest.services.suggestions.orchestrator import GenerationOrchestrator
from pantry_suggest.services.suggestions.prioritizer import prioritize_pantry
from pantry_suggest.services.suggestions.scorer import score_candidates


if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pantry_suggest.cache.protocol import SuggestionCacheProtocol
    from pantry_suggest.inventory.protocol import InventoryReaderProtocol
    from pantry_suggest.llm.client.protocol import GenerationProviderProtocol
    from pantry_suggest.schemas.analytics import UserAnalytics
    from pantry_suggest.schemas.cache import CacheStats
    from pantry_suggest.schemas.pantry import PrioritizedItem
    from pantry_suggest.schemas.recipe import QuickRecipeSuggestion, RecipeCandidate


logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class QuickSuggestionsService:
    """Suggestion engine holding its collaborators and stores.

    Orchestrates:
    1. Pantry load and prioritization
    2. Cache lookup (skipped on forced refresh)
    3. Generation via the provider, or the deterministic fallback
    4. Ingredient matching and ranking
    5. Cache write and analytics update

    One instance is built per process and shared by reference. The cache
    and analytics stores are safe under overlapping requests; concurrent
    misses on the same key both regenerate and the last write wins.
    """

    def __init__(
        self,
        inventory: InventoryReaderProtocol,
        provider: GenerationProviderProtocol | None = None,
        *,
        settings: SuggestionSettings | None = None,
        cache: SuggestionCacheProtocol | None = None,
        analytics: AnalyticsTracker | None = None,
        clock: Callable[[], datetime] | None = None,
        cache_key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        """Initialize the service.

        Args:
            inventory: Reader for the current pantry snapshot.
            provider: Generation provider, or None to always synthesize.
            settings: Engine tuning, defaults to ``SuggestionSettings()``.
            cache: Suggestion store, defaults to an in-memory cache.
            analytics: Analytics store, defaults to a fresh tracker.
            clock: Returns the current time, defaults to UTC now.
            cache_key_prefix: Prefix for every cache key.
        """
        self._settings = settings or SuggestionSettings()
        self._inventory = inventory
        self._clock = clock or _utc_now
        self._cache = cache or InMemorySuggestionCache(
            ttl_seconds=self._settings.cache_ttl_seconds
        )
        self._analytics = analytics or AnalyticsTracker(clock=self._clock)
        self._cache_key_prefix = cache_key_prefix
        self._orchestrator = GenerationOrchestrator(
            provider,
            timeout=self._settings.generation_timeout,
            fallback_slice=self._settings.fallback_pantry_slice,
            min_pantry_matches=self._settings.min_pantry_matches,
            max_missing_ingredients=self._settings.max_missing_ingredients,
        )

    # =========================================================================
    # Suggestions
    # =========================================================================

    async def get_quick_suggestions(
        self,
        request: SuggestionRequest | None = None,
    ) -> list[QuickRecipeSuggestion]:
        """Return ranked suggestions for ``request``.

        Always returns a list, possibly the static fallback set.

        Raises:
            PantryUnavailableError: If the pantry cannot be loaded and no
                fallback list can be produced.
        """
        batch = await self.suggest(request or SuggestionRequest())
        return batch.suggestions

    async def suggest(self, request: SuggestionRequest) -> SuggestionBatch:
        """Return ranked suggestions plus how they were produced.

        Raises:
            PantryUnavailableError: If the pantry cannot be loaded and no
                fallback list can be produced.
        """
        with logging_context(user_id=request.user_id):
            now = self._clock()
            try:
                raw_items = await self._inventory.get_all_ingredients()
            except Exception as e:
                logger.warning(
                    "Pantry load failed, returning static suggestions",
                    error=str(e),
                )
                return self._static_batch(request, cause=e)

            items = prioritize_pantry(
                raw_items,
                now,
                prioritize_expiring=request.prioritize_expiring,
            )

            key = make_cache_key(
                request,
                now.timestamp(),
                self._settings.cache_window_seconds,
                prefix=self._cache_key_prefix,
            )
            if not request.force_refresh:
                entry = await self._cache.get(key, now=now.timestamp())
                if entry is not None:
                    logger.debug("Returning cached suggestions")
                    return SuggestionBatch(
                        suggestions=entry.suggestions,
                        source=SuggestionSource.CACHE,
                    )

            try:
                self._require_pantry(items, request)
            except InsufficientPantryError as e:
                logger.info(str(e), item_count=e.item_count)
                return self._insufficient_batch(items, request)

            outcome = await self._orchestrator.generate(items, request)
            source = outcome.source
            suggestions = self._score(outcome.candidates, items, request)

            if not suggestions and source == SuggestionSource.AI:
                logger.info("No generated recipe fits the pantry, synthesizing")
                source = SuggestionSource.FALLBACK
                suggestions = self._score(
                    self._orchestrator.fallback(items, request), items, request
                )

            if not suggestions:
                source = SuggestionSource.STATIC
                suggestions = static_fallback_suggestions(self._limit(request))
            else:
                await self._cache.set(
                    key,
                    CacheEntry(suggestions=suggestions, created_at=now.timestamp()),
                )

            self._analytics.record_generation(request.user_id, suggestions)
            logger.info(
                "Generated quick suggestions",
                count=len(suggestions),
                source=str(source),
            )
            return SuggestionBatch(suggestions=suggestions, source=source)

    def _limit(self, request: SuggestionRequest) -> int:
        return min(request.max_suggestions, self._settings.max_results)

    def _score(
        self,
        candidates: Sequence[RecipeCandidate],
        items: Sequence[PrioritizedItem],
        request: SuggestionRequest,
    ) -> list[QuickRecipeSuggestion]:
        return score_candidates(
            candidates,
            items,
            limit=self._limit(request),
            min_matches=self._settings.min_pantry_matches,
            max_missing=self._settings.max_missing_ingredients,
        )

    def _require_pantry(
        self,
        items: Sequence[PrioritizedItem],
        request: SuggestionRequest,
    ) -> None:
        if len(items) < self._settings.min_pantry_items:
            raise InsufficientPantryError(
                INSUFFICIENT_PANTRY_MESSAGE,
                user_id=request.user_id,
                item_count=len(items),
            )

    def _insufficient_batch(
        self,
        items: Sequence[PrioritizedItem],
        request: SuggestionRequest,
    ) -> SuggestionBatch:
        suggestions = self._score(
            synthesize_candidates(items, request.max_suggestions), items, request
        )
        source = SuggestionSource.FALLBACK
        if not suggestions:
            source = SuggestionSource.STATIC
            suggestions = static_fallback_suggestions(self._limit(request))
        return SuggestionBatch(
            suggestions=suggestions,
            source=source,
            message=INSUFFICIENT_PANTRY_MESSAGE,
        )

    def _static_batch(
        self,
        request: SuggestionRequest,
        cause: Exception,
    ) -> SuggestionBatch:
        try:
            suggestions = static_fallback_suggestions(self._limit(request))
        except Exception as e:
            msg = "Pantry unavailable and no fallback suggestions could be built"
            raise PantryUnavailableError(
                msg, user_id=request.user_id, cause=cause
            ) from e
        return SuggestionBatch(
            suggestions=suggestions,
            source=SuggestionSource.STATIC,
            error=PANTRY_UNAVAILABLE_ERROR,
        )

    # =========================================================================
    # Analytics
    # =========================================================================

    def track_suggestion_used(
        self,
        user_id: str,
        suggestion: QuickRecipeSuggestion,
    ) -> None:
        """Record that the user cooked or saved ``suggestion``."""
        self._analytics.record_used(user_id, suggestion)

    def get_user_analytics(self, user_id: str) -> UserAnalytics | None:
        """Return the user's analytics snapshot, or None if never generated."""
        return self._analytics.get(user_id)

    def get_success_rate(self, user_id: str) -> int:
        """Return used / generated as a whole percentage."""
        return self._analytics.success_rate(user_id)

    # =========================================================================
    # Cache administration
    # =========================================================================

    async def clear_cache(self) -> None:
        """Drop every cached suggestion list."""
        await self._cache.clear()

    async def get_cache_stats(self) -> CacheStats:
        """Return cache size and hit accounting."""
        return await self._cache.stats()
