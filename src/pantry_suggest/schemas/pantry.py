"""Pantry inventory schemas.

``PantryItem`` mirrors what the inventory store hands us; ``PrioritizedItem``
adds the urgency fields derived on every prioritization pass.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from pantry_suggest.schemas.base import DownstreamResponse
from pantry_suggest.schemas.enums import IngredientCategory


class PantryItem(DownstreamResponse):
    """A single on-hand ingredient as stored by the inventory."""

    id: str = Field(..., description="Inventory identifier")
    name: str = Field(..., min_length=1, description="Ingredient name")
    category: IngredientCategory = Field(
        default=IngredientCategory.OTHER,
        description="Ingredient category",
    )
    quantity: str | None = Field(
        default=None,
        description="Free-text magnitude, e.g. '2' or '1.5'",
    )
    unit: str | None = Field(default=None, description="Unit for quantity")
    expiry_date: datetime | None = Field(default=None, description="Expiry date")
    purchase_date: datetime | None = Field(
        default=None,
        description="Date the item was bought",
    )
    usage_frequency: int | None = Field(
        default=None,
        ge=0,
        description="How often the item has been cooked with",
    )

    @field_validator("id", "quantity", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: object) -> IngredientCategory:
        return IngredientCategory.coerce(value)


class PrioritizedItem(PantryItem):
    """Pantry item annotated with its urgency score."""

    priority: int = Field(..., description="Higher means use sooner")
    days_until_expiry: int | None = Field(
        default=None,
        description="Whole days until expiry, None when undated",
    )
    is_expiring: bool = Field(default=False, description="Expires within 3 days")
    is_abundant: bool = Field(default=False, description="Quantity above 2 units")
