"""Unit tests for analytics endpoints."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from pantry_suggest.api.v1.endpoints.analytics import (
    get_success_rate,
    get_user_analytics,
)
from pantry_suggest.core.exceptions import NotFoundException
from pantry_suggest.schemas.analytics import UserAnalytics
from tests.fixtures.pantry import NOW


pytestmark = pytest.mark.unit


@pytest.fixture
def mock_service() -> MagicMock:
    """Service double with analytics for user 'u1' only."""
    service = MagicMock()
    analytics = UserAnalytics(
        user_id="u1",
        suggestions_generated=4,
        suggestions_used=1,
        most_popular_cuisines=["Asian"],
        average_match_percentage=75,
        last_used=NOW,
    )
    service.get_user_analytics.side_effect = lambda uid: (
        analytics if uid == "u1" else None
    )
    service.get_success_rate.side_effect = lambda uid: 25 if uid == "u1" else 0
    return service


class TestGetUserAnalytics:
    """Tests for GET /analytics/{userId}."""

    async def test_returns_snapshot(self, mock_service) -> None:
        """Should return the user's analytics."""
        result = await get_user_analytics("u1", mock_service)

        assert result.suggestions_generated == 4
        assert result.most_popular_cuisines == ["Asian"]

    async def test_unknown_user_not_found(self, mock_service) -> None:
        """Should raise NotFoundException for users without analytics."""
        with pytest.raises(NotFoundException) as exc_info:
            await get_user_analytics("ghost", mock_service)

        assert exc_info.value.status_code == 404
        assert "ghost" in exc_info.value.message

    async def test_serializes_camel_case(self, mock_service) -> None:
        """Should serialize with camelCase field names."""
        result = await get_user_analytics("u1", mock_service)

        payload = result.model_dump(mode="json")
        assert payload["averageMatchPercentage"] == 75
        assert payload["lastUsed"].startswith("2024-06-01T12:00:00")


class TestGetSuccessRate:
    """Tests for GET /analytics/{userId}/success-rate."""

    async def test_known_user(self, mock_service) -> None:
        """Should return the user's success rate."""
        result = await get_success_rate("u1", mock_service)

        assert result.user_id == "u1"
        assert result.success_rate == 25

    async def test_unknown_user_zero(self, mock_service) -> None:
        """Should return zero for users without analytics."""
        result = await get_success_rate("ghost", mock_service)

        assert result.success_rate == 0
