"""Shared test fixtures for the pantry suggestion service tests.

This module provides fixtures used across test modules: settings loaded
from the test environment, a populated pantry reader and a wired service.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from pantry_suggest.core.config import Settings, get_settings
from pantry_suggest.core.config.yaml_source import CONFIG_DIR_ENV
from pantry_suggest.inventory.memory import StaticInventory
from pantry_suggest.services.suggestions.service import QuickSuggestionsService
from tests.fixtures.pantry import NOW, well_stocked_pantry


@pytest.fixture
def test_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[Settings]:
    """Settings for the test environment (LLM disabled, memory cache)."""
    monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)
    monkeypatch.setenv("APP_ENV", "test")
    get_settings.cache_clear()
    yield Settings()
    get_settings.cache_clear()


@pytest.fixture
def pantry_inventory() -> StaticInventory:
    """Reader over a well-stocked pantry."""
    return StaticInventory(well_stocked_pantry())


@pytest.fixture
def suggestions_service(
    pantry_inventory: StaticInventory,
    test_settings: Settings,
) -> QuickSuggestionsService:
    """Service without a generation provider and with a fixed clock."""
    return QuickSuggestionsService(
        pantry_inventory,
        None,
        settings=test_settings.suggestions,
        clock=lambda: NOW,
    )
