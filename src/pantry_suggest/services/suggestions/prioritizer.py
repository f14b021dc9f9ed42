"""Pantry prioritization.

Scores every inventory item by how urgently it should be cooked and returns
them best first. Pure: the current time is passed in.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from pantry_suggest.observability.logging import get_logger
from pantry_suggest.schemas.enums import IngredientCategory
from pantry_suggest.schemas.pantry import PantryItem, PrioritizedItem
from pantry_suggest.services.suggestions.constants import (
    ABUNDANT_BONUS,
    ABUNDANT_QUANTITY,
    BASE_PRIORITY,
    EXPIRING_BONUS,
    EXPIRING_WITHIN_DAYS,
    PROTEIN_BONUS,
    RECENT_PURCHASE_BONUS,
    RECENT_PURCHASE_WITHIN_DAYS,
    SOON_EXPIRING_BONUS,
    SOON_EXPIRING_WITHIN_DAYS,
    UNDERUSED_BELOW,
    UNDERUSED_BONUS,
)


if TYPE_CHECKING:
    from collections.abc import Iterable


logger = get_logger(__name__)

_SECONDS_PER_DAY = 24 * 60 * 60
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def days_between(start: datetime, end: datetime) -> int:
    """Whole days from ``start`` to ``end``, rounding partial days up."""
    seconds = (_as_utc(end) - _as_utc(start)).total_seconds()
    return math.ceil(seconds / _SECONDS_PER_DAY)


def parse_quantity(quantity: str | None) -> float | None:
    """Read the leading number of a free-text quantity.

    A missing quantity counts as one unit. Text without a leading number
    yields None.
    """
    if quantity is None or not quantity.strip():
        return 1.0
    match = _LEADING_NUMBER.match(quantity)
    return float(match.group(1)) if match else None


def _coerce_item(raw: Any) -> PantryItem | None:
    if isinstance(raw, PantryItem):
        return raw
    if not isinstance(raw, Mapping):
        return None
    try:
        return PantryItem.model_validate(raw)
    except ValidationError:
        return None


def score_item(
    item: PantryItem,
    now: datetime,
    *,
    prioritize_expiring: bool = True,
) -> PrioritizedItem:
    """Compute the priority and urgency flags for a single item."""
    days_until_expiry = (
        days_between(now, item.expiry_date) if item.expiry_date is not None else None
    )
    is_expiring = (
        days_until_expiry is not None and days_until_expiry <= EXPIRING_WITHIN_DAYS
    )
    quantity = parse_quantity(item.quantity)
    is_abundant = quantity is not None and quantity > ABUNDANT_QUANTITY

    priority = BASE_PRIORITY
    if is_expiring and prioritize_expiring:
        priority += EXPIRING_BONUS
    elif (
        days_until_expiry is not None
        and days_until_expiry <= SOON_EXPIRING_WITHIN_DAYS
    ):
        priority += SOON_EXPIRING_BONUS

    if is_abundant:
        priority += ABUNDANT_BONUS

    if item.category == IngredientCategory.PROTEIN:
        priority += PROTEIN_BONUS

    if (
        item.purchase_date is not None
        and days_between(item.purchase_date, now) <= RECENT_PURCHASE_WITHIN_DAYS
    ):
        priority += RECENT_PURCHASE_BONUS

    if item.usage_frequency is not None and item.usage_frequency < UNDERUSED_BELOW:
        priority += UNDERUSED_BONUS

    return PrioritizedItem(
        **item.model_dump(),
        priority=priority,
        days_until_expiry=days_until_expiry,
        is_expiring=is_expiring,
        is_abundant=is_abundant,
    )


def prioritize_pantry(
    items: Iterable[Any],
    now: datetime,
    *,
    prioritize_expiring: bool = True,
) -> list[PrioritizedItem]:
    """Score ``items`` and sort them by priority, highest first.

    Entries that are not pantry items (or mappings that fail validation)
    are dropped silently. Ties keep their input order.

    Args:
        items: Raw inventory snapshot.
        now: Reference time for expiry and purchase recency.
        prioritize_expiring: Whether items expiring within 3 days get the
            large expiring bonus.

    Returns:
        Prioritized items, best first.
    """
    scored: list[PrioritizedItem] = []
    skipped = 0
    for raw in items:
        item = _coerce_item(raw)
        if item is None:
            skipped += 1
            continue
        scored.append(score_item(item, now, prioritize_expiring=prioritize_expiring))

    if skipped:
        logger.debug("Skipped invalid pantry entries", count=skipped)

    # sorted() is stable, so equal priorities keep inventory order
    return sorted(scored, key=lambda entry: entry.priority, reverse=True)
