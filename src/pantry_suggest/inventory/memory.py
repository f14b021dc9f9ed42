"""Fixed in-memory inventory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Iterable


class StaticInventory:
    """Inventory backed by a list supplied at construction."""

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items = list(items)

    async def get_all_ingredients(self) -> list[Any]:
        return list(self._items)
