"""Per-user suggestion analytics.

Counters only ever grow. The last-used time and the running match average
are the only values that can move in both directions.
"""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pantry_suggest.observability.logging import get_logger
from pantry_suggest.schemas.analytics import UserAnalytics


if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pantry_suggest.schemas.recipe import QuickRecipeSuggestion


logger = get_logger(__name__)

MAX_TRACKED_CUISINES = 5


def match_percentage(suggestion: QuickRecipeSuggestion) -> float:
    """Share of a suggestion's ingredients found in the pantry, 0-100."""
    if not suggestion.ingredients:
        return 0.0
    return len(suggestion.matching_ingredients) / len(suggestion.ingredients) * 100


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass
class _UserTotals:
    user_id: str
    last_used: datetime
    generated: int = 0
    used: int = 0
    match_total: float = 0.0
    cuisines: list[str] = field(default_factory=list)

    def snapshot(self) -> UserAnalytics:
        average = self.match_total / self.generated if self.generated else 0.0
        return UserAnalytics(
            user_id=self.user_id,
            suggestions_generated=self.generated,
            suggestions_used=self.used,
            most_popular_cuisines=list(self.cuisines),
            average_match_percentage=min(_round_half_up(average), 100),
            last_used=self.last_used,
        )


class AnalyticsTracker:
    """Thread-safe in-memory analytics store."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(UTC))
        self._totals: dict[str, _UserTotals] = {}
        self._lock = threading.Lock()

    def record_generation(
        self,
        user_id: str,
        suggestions: Sequence[QuickRecipeSuggestion],
    ) -> None:
        """Add a generated batch to the user's totals.

        The match average is weighted by suggestion count across batches.
        Empty batches are ignored.
        """
        if not suggestions:
            return

        with self._lock:
            totals = self._totals.get(user_id)
            if totals is None:
                totals = _UserTotals(user_id=user_id, last_used=self._clock())
                self._totals[user_id] = totals

            totals.generated += len(suggestions)
            totals.match_total += sum(match_percentage(s) for s in suggestions)
            totals.last_used = self._clock()
            for suggestion in suggestions:
                if (
                    suggestion.cuisine not in totals.cuisines
                    and len(totals.cuisines) < MAX_TRACKED_CUISINES
                ):
                    totals.cuisines.append(suggestion.cuisine)

            logger.debug(
                "Analytics updated",
                user_id=user_id,
                generated=totals.generated,
                used=totals.used,
            )

    def record_used(self, user_id: str, suggestion: QuickRecipeSuggestion) -> None:
        """Count one used suggestion. No-op for users with no generations."""
        with self._lock:
            totals = self._totals.get(user_id)
            if totals is None:
                logger.debug(
                    "Ignoring usage for user without analytics",
                    user_id=user_id,
                    suggestion_id=suggestion.id,
                )
                return
            totals.used += 1

    def get(self, user_id: str) -> UserAnalytics | None:
        """Return a snapshot of the user's analytics, or None."""
        with self._lock:
            totals = self._totals.get(user_id)
            return totals.snapshot() if totals is not None else None

    def success_rate(self, user_id: str) -> int:
        """Used / generated as a whole percentage, capped at 100."""
        with self._lock:
            totals = self._totals.get(user_id)
            if totals is None or totals.generated == 0:
                return 0
            return min(_round_half_up(totals.used / totals.generated * 100), 100)
