"""Unit tests for per-user suggestion analytics.

Tests cover:
- Generation and usage counters
- Running match average
- Cuisine tracking cap
- Success rate bounds and monotonicity
"""

from __future__ import annotations

import uuid
from datetime import timedelta

import pytest

from pantry_suggest.schemas.recipe import QuickRecipeSuggestion, SuggestionIngredient
from pantry_suggest.services.suggestions.analytics import (
    MAX_TRACKED_CUISINES,
    AnalyticsTracker,
    match_percentage,
)
from tests.fixtures.pantry import NOW


pytestmark = pytest.mark.unit


def _suggestion(
    cuisine: str = "Italian",
    matching: int = 3,
    total: int = 4,
) -> QuickRecipeSuggestion:
    names = [f"ingredient {n}" for n in range(total)]
    return QuickRecipeSuggestion(
        id=str(uuid.uuid4()),
        name="Recipe",
        cuisine=cuisine,
        cook_time="20 minutes",
        difficulty="Easy",
        servings=2,
        ingredients=[
            SuggestionIngredient(name=name, available=n < matching)
            for n, name in enumerate(names)
        ],
        instructions=["Cook"],
        matching_ingredients=names[:matching],
        missing_ingredients=names[matching:],
        priority=30,
        confidence=0.8,
    )


class FakeClock:
    """Clock that advances one minute per call."""

    def __init__(self) -> None:
        self.now = NOW

    def __call__(self):
        self.now += timedelta(minutes=1)
        return self.now


class TestMatchPercentage:
    """Tests for match_percentage."""

    def test_share_of_ingredients(self) -> None:
        """Should return the matching share as a percentage."""
        assert match_percentage(_suggestion(matching=3, total=4)) == 75.0

    def test_no_ingredients(self) -> None:
        """Should return 0 for a recipe without ingredients."""
        assert match_percentage(_suggestion(matching=0, total=0)) == 0.0


class TestRecordGeneration:
    """Tests for AnalyticsTracker.record_generation."""

    def test_unknown_user(self) -> None:
        """Should return None for users never seen."""
        assert AnalyticsTracker().get("nobody") is None

    def test_counts_batch(self) -> None:
        """Should add the batch size to the generated count."""
        tracker = AnalyticsTracker()

        tracker.record_generation("u1", [_suggestion(), _suggestion()])
        tracker.record_generation("u1", [_suggestion()])

        analytics = tracker.get("u1")
        assert analytics is not None
        assert analytics.suggestions_generated == 3
        assert analytics.suggestions_used == 0

    def test_weighted_match_average(self) -> None:
        """Should average match percentages across all suggestions."""
        tracker = AnalyticsTracker()

        tracker.record_generation("u1", [_suggestion(matching=4, total=4)])
        tracker.record_generation(
            "u1",
            [_suggestion(matching=2, total=4), _suggestion(matching=2, total=4)],
        )

        analytics = tracker.get("u1")
        assert analytics is not None
        # (100 + 50 + 50) / 3 = 66.67
        assert analytics.average_match_percentage == 67

    def test_cuisines_unique_and_capped(self) -> None:
        """Should keep the first five distinct cuisines in order."""
        tracker = AnalyticsTracker()
        cuisines = ["Thai", "Thai", "Italian", "Mexican", "Indian", "French", "Greek"]

        tracker.record_generation("u1", [_suggestion(cuisine=c) for c in cuisines])

        analytics = tracker.get("u1")
        assert analytics is not None
        assert analytics.most_popular_cuisines == [
            "Thai",
            "Italian",
            "Mexican",
            "Indian",
            "French",
        ]
        assert len(analytics.most_popular_cuisines) == MAX_TRACKED_CUISINES

    def test_updates_last_used(self) -> None:
        """Should move last_used forward on each generation."""
        clock = FakeClock()
        tracker = AnalyticsTracker(clock=clock)

        tracker.record_generation("u1", [_suggestion()])
        first = tracker.get("u1")
        tracker.record_generation("u1", [_suggestion()])
        second = tracker.get("u1")

        assert first is not None
        assert second is not None
        assert second.last_used > first.last_used

    def test_empty_batch_ignored(self) -> None:
        """Should not create a record for an empty batch."""
        tracker = AnalyticsTracker()

        tracker.record_generation("u1", [])

        assert tracker.get("u1") is None

    def test_users_are_independent(self) -> None:
        """Should keep separate totals per user."""
        tracker = AnalyticsTracker()

        tracker.record_generation("u1", [_suggestion()])
        tracker.record_generation("u2", [_suggestion(), _suggestion()])

        assert tracker.get("u1").suggestions_generated == 1
        assert tracker.get("u2").suggestions_generated == 2

    def test_snapshot_is_a_copy(self) -> None:
        """Should not let callers mutate stored totals."""
        tracker = AnalyticsTracker()
        tracker.record_generation("u1", [_suggestion(cuisine="Thai")])

        snapshot = tracker.get("u1")
        snapshot.most_popular_cuisines.append("Hacked")

        assert tracker.get("u1").most_popular_cuisines == ["Thai"]


class TestRecordUsed:
    """Tests for AnalyticsTracker.record_used and success_rate."""

    def test_noop_without_generation(self) -> None:
        """Should ignore usage for users with no generations."""
        tracker = AnalyticsTracker()

        tracker.record_used("ghost", _suggestion())

        assert tracker.get("ghost") is None
        assert tracker.success_rate("ghost") == 0

    def test_success_rate(self) -> None:
        """Should report used / generated as a whole percentage."""
        tracker = AnalyticsTracker()
        tracker.record_generation("u1", [_suggestion() for _ in range(3)])

        tracker.record_used("u1", _suggestion())

        assert tracker.success_rate("u1") == 33

    def test_success_rate_rounds_half_up(self) -> None:
        """Should round 12.5 up to 13."""
        tracker = AnalyticsTracker()
        tracker.record_generation("u1", [_suggestion() for _ in range(8)])

        tracker.record_used("u1", _suggestion())

        assert tracker.success_rate("u1") == 13

    def test_success_rate_monotonic_and_capped(self) -> None:
        """Should never decrease and never exceed 100."""
        tracker = AnalyticsTracker()
        tracker.record_generation("u1", [_suggestion(), _suggestion()])

        rates = []
        for _ in range(5):
            tracker.record_used("u1", _suggestion())
            rates.append(tracker.success_rate("u1"))

        assert rates == sorted(rates)
        assert rates[-1] == 100
        assert tracker.get("u1").suggestions_used == 5
