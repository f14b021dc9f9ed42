"""Unit tests for pantry prioritization.

Tests cover:
- Individual priority bonuses
- Expiry and quantity derivation
- Invalid entry filtering
- Deterministic, stable ordering
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from pantry_suggest.schemas.pantry import PantryItem
from pantry_suggest.services.suggestions.prioritizer import (
    days_between,
    parse_quantity,
    prioritize_pantry,
    score_item,
)
from tests.fixtures.pantry import (
    NOW,
    make_item,
    tomato_chicken_rice,
    well_stocked_pantry,
)


pytestmark = pytest.mark.unit


def _score(**kwargs: Any) -> int:
    item = PantryItem.model_validate(make_item("Thing", **kwargs))
    return score_item(item, NOW).priority


class TestDaysBetween:
    """Tests for days_between helper."""

    def test_whole_days(self) -> None:
        """Should count whole days."""
        assert days_between(NOW, NOW + timedelta(days=3)) == 3

    def test_rounds_partial_days_up(self) -> None:
        """Should round a partial day up."""
        assert days_between(NOW, NOW + timedelta(hours=30)) == 2

    def test_past_dates_are_negative(self) -> None:
        """Should be negative for dates in the past."""
        assert days_between(NOW, NOW - timedelta(days=2)) == -2

    def test_naive_datetimes_treated_as_utc(self) -> None:
        """Should compare naive datetimes as UTC."""
        naive = datetime(2024, 6, 3, 12, 0)
        assert days_between(NOW, naive) == 2


class TestParseQuantity:
    """Tests for parse_quantity helper."""

    @pytest.mark.parametrize(
        ("quantity", "expected"),
        [
            ("3", 3.0),
            ("2.5 cups", 2.5),
            (" 12 large", 12.0),
            (".5", 0.5),
        ],
    )
    def test_reads_leading_number(self, quantity: str, expected: float) -> None:
        """Should read the leading number."""
        assert parse_quantity(quantity) == expected

    def test_missing_quantity_is_one(self) -> None:
        """Should treat a missing quantity as one unit."""
        assert parse_quantity(None) == 1.0
        assert parse_quantity("  ") == 1.0

    def test_non_numeric_is_none(self) -> None:
        """Should return None for text without a number."""
        assert parse_quantity("a handful") is None


class TestScoreItem:
    """Tests for individual priority bonuses."""

    def test_base_priority(self) -> None:
        """Should start from the base priority."""
        assert _score() == 50

    def test_expiring_bonus(self) -> None:
        """Should add 40 when expiring within 3 days."""
        assert _score(expires_in_days=3) == 90

    def test_soon_expiring_bonus(self) -> None:
        """Should add 20 when expiring within 7 days."""
        assert _score(expires_in_days=6) == 70

    def test_far_expiry_has_no_bonus(self) -> None:
        """Should add nothing for items expiring later."""
        assert _score(expires_in_days=30) == 50

    def test_expiring_without_flag_gets_soon_bonus(self) -> None:
        """Should fall back to the 7-day bonus when expiring priority is off."""
        item = PantryItem.model_validate(make_item("Milk", expires_in_days=1))

        result = score_item(item, NOW, prioritize_expiring=False)

        assert result.priority == 70
        assert result.is_expiring is True

    def test_abundant_bonus(self) -> None:
        """Should add 15 when quantity is above 2."""
        assert _score(quantity="3") == 65
        assert _score(quantity="2") == 50

    def test_protein_bonus(self) -> None:
        """Should add 25 for protein."""
        assert _score(category="protein") == 75

    def test_recent_purchase_bonus(self) -> None:
        """Should add 10 when bought within 2 days."""
        assert _score(purchased_days_ago=1) == 60
        assert _score(purchased_days_ago=5) == 50

    def test_underused_bonus(self) -> None:
        """Should add 10 when usage frequency is below 2."""
        assert _score(usage_frequency=1) == 60
        assert _score(usage_frequency=2) == 50

    def test_bonuses_accumulate(self) -> None:
        """Should sum every applicable bonus."""
        priority = _score(
            category="protein",
            quantity="5",
            expires_in_days=2,
            purchased_days_ago=0,
            usage_frequency=0,
        )
        assert priority == 50 + 40 + 15 + 25 + 10 + 10

    def test_derived_fields(self) -> None:
        """Should populate the derived urgency fields."""
        item = PantryItem.model_validate(
            make_item("Yogurt", quantity="4", expires_in_days=2)
        )

        result = score_item(item, NOW)

        assert result.days_until_expiry == 2
        assert result.is_expiring is True
        assert result.is_abundant is True
        assert result.name == "Yogurt"

    def test_undated_item(self) -> None:
        """Should leave days_until_expiry empty when there is no expiry."""
        item = PantryItem.model_validate(make_item("Flour"))

        result = score_item(item, NOW)

        assert result.days_until_expiry is None
        assert result.is_expiring is False

    def test_non_numeric_quantity_not_abundant(self) -> None:
        """Should not mark unparseable quantities as abundant."""
        item = PantryItem.model_validate(make_item("Basil", quantity="some"))

        assert score_item(item, NOW).is_abundant is False


class TestPrioritizePantry:
    """Tests for prioritize_pantry."""

    def test_sorted_descending(self) -> None:
        """Should sort items by priority, highest first."""
        result = prioritize_pantry(well_stocked_pantry(), NOW)

        priorities = [item.priority for item in result]
        assert priorities == sorted(priorities, reverse=True)

    def test_expiring_tomato_ranks_first(self) -> None:
        """Should rank the expiring tomato above abundant chicken."""
        result = prioritize_pantry(tomato_chicken_rice(), NOW)

        assert [item.name for item in result] == ["Tomato", "Chicken", "Rice"]
        assert result[0].is_expiring is True
        assert result[1].is_abundant is True

    def test_deterministic(self) -> None:
        """Should produce an identical ordering on repeated runs."""
        pantry = well_stocked_pantry()

        first = prioritize_pantry(pantry, NOW)
        second = prioritize_pantry(pantry, NOW)

        assert [i.id for i in first] == [i.id for i in second]

    def test_ties_keep_input_order(self) -> None:
        """Should keep inventory order for equal priorities."""
        pantry = [make_item(name) for name in ("Zucchini", "Apple", "Mango")]

        result = prioritize_pantry(pantry, NOW)

        assert [item.name for item in result] == ["Zucchini", "Apple", "Mango"]

    def test_filters_invalid_entries(self) -> None:
        """Should silently drop entries that are not pantry items."""
        pantry = [
            make_item("Onion"),
            "not an item",
            None,
            42,
            {"id": "x"},
            {"id": "y", "name": ""},
        ]

        result = prioritize_pantry(pantry, NOW)

        assert [item.name for item in result] == ["Onion"]

    def test_accepts_pantry_item_instances(self) -> None:
        """Should accept already-validated PantryItem objects."""
        item = PantryItem(id="1", name="Leek", category="vegetables")

        result = prioritize_pantry([item], NOW)

        assert result[0].name == "Leek"

    def test_empty_pantry(self) -> None:
        """Should return an empty list for an empty pantry."""
        assert prioritize_pantry([], NOW) == []

    def test_unknown_category_becomes_other(self) -> None:
        """Should map unknown categories onto 'other'."""
        result = prioritize_pantry([make_item("Tofu", category="soy")], NOW)

        assert result[0].category == "other"

    def test_uses_given_clock(self) -> None:
        """Should measure expiry against the supplied time."""
        later = NOW + timedelta(days=10)
        pantry = [make_item("Cream", expires_in_days=12)]

        assert prioritize_pantry(pantry, NOW)[0].priority == 50
        assert prioritize_pantry(pantry, later)[0].priority == 90

    def test_timezone_aware_input(self) -> None:
        """Should handle expiry dates given with an offset."""
        pantry = [
            {
                "id": "1",
                "name": "Fish",
                "category": "protein",
                "expiryDate": datetime(2024, 6, 2, 12, 0, tzinfo=UTC).isoformat(),
            }
        ]

        result = prioritize_pantry(pantry, NOW)

        assert result[0].days_until_expiry == 1
        assert result[0].priority == 50 + 40 + 25
