"""Inventory readers consumed by the suggestion engine."""

from pantry_suggest.inventory.json_file import InventoryFileError, JsonFileInventory
from pantry_suggest.inventory.memory import StaticInventory
from pantry_suggest.inventory.protocol import InventoryReaderProtocol


__all__ = [
    "InventoryFileError",
    "InventoryReaderProtocol",
    "JsonFileInventory",
    "StaticInventory",
]
