"""Inventory reader protocol."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class InventoryReaderProtocol(Protocol):
    """Read-only view of the user's current pantry.

    Readers return raw records (``PantryItem`` instances or plain mappings).
    The prioritizer validates them and silently drops malformed entries.
    """

    async def get_all_ingredients(self) -> list[Any]:
        """Return every current inventory item. May be empty."""
        ...
