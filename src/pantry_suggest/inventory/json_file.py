"""Inventory snapshot read from a JSON file.

The file holds either a list of items or an object with an ``items`` list,
using the inventory store's camelCase field names.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import orjson

from pantry_suggest.observability.logging import get_logger


logger = get_logger(__name__)


class InventoryFileError(Exception):
    """Raised when the inventory file cannot be read or decoded."""


class JsonFileInventory:
    """Re-reads the snapshot file on every call so edits show up immediately."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def get_all_ingredients(self) -> list[Any]:
        try:
            data = orjson.loads(await asyncio.to_thread(self.path.read_bytes))
        except (OSError, orjson.JSONDecodeError) as e:
            logger.warning("Failed to read inventory file", path=str(self.path))
            msg = f"Cannot read inventory file {self.path}: {e}"
            raise InventoryFileError(msg) from e

        if isinstance(data, dict):
            data = data.get("items", [])
        if not isinstance(data, list):
            msg = f"Inventory file {self.path} does not contain a list"
            raise InventoryFileError(msg)

        logger.debug("Loaded inventory file", path=str(self.path), count=len(data))
        return data
