"""Unit tests for the quick suggestion endpoints.

Tests cover:
- Query parameter mapping onto SuggestionRequest
- Response shape (camelCase aliases)
- Usage recording
- Validation and service availability errors
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from pantry_suggest.factory import create_app
from pantry_suggest.schemas.enums import SuggestionSource
from pantry_suggest.schemas.recipe import SuggestionBatch
from pantry_suggest.services.suggestions.exceptions import PantryUnavailableError


pytestmark = pytest.mark.unit


@pytest.fixture
def mock_service() -> MagicMock:
    """Service double returning an empty static batch."""
    service = MagicMock()
    service.suggest = AsyncMock(
        return_value=SuggestionBatch(suggestions=[], source=SuggestionSource.STATIC)
    )
    return service


@pytest.fixture
def prefix(test_settings) -> str:
    """Mount point of the v1 API."""
    return test_settings.api.v1_prefix


@pytest.fixture
def client(test_settings, mock_service) -> TestClient:
    """Client for an app whose service is the mock (lifespan not run)."""
    app = create_app(test_settings)
    app.state.suggestions_service = mock_service
    return TestClient(app)


@pytest.fixture
def live_client(test_settings, suggestions_service) -> TestClient:
    """Client for an app backed by a real service without a provider."""
    app = create_app(test_settings)
    app.state.suggestions_service = suggestions_service
    return TestClient(app)


class TestGetSuggestions:
    """Tests for GET /suggestions."""

    def test_defaults(self, client, mock_service, prefix) -> None:
        """Should build a default request when no parameters are given."""
        response = client.get(f"{prefix}/suggestions")

        assert response.status_code == 200
        request = mock_service.suggest.await_args.args[0]
        assert request.user_id == "anonymous"
        assert request.max_suggestions == 4
        assert request.max_cook_time == 45
        assert request.difficulty == "either"
        assert request.prioritize_expiring is True
        assert request.force_refresh is False

    def test_maps_query_parameters(self, client, mock_service, prefix) -> None:
        """Should map camelCase query parameters onto the request."""
        client.get(
            f"{prefix}/suggestions",
            params={
                "userId": "u1",
                "maxSuggestions": 2,
                "maxCookTime": 20,
                "difficulty": "easy",
                "prioritizeExpiring": "false",
                "forceRefresh": "true",
            },
        )

        request = mock_service.suggest.await_args.args[0]
        assert request.user_id == "u1"
        assert request.max_suggestions == 2
        assert request.max_cook_time == 20
        assert request.difficulty == "easy"
        assert request.prioritize_expiring is False
        assert request.force_refresh is True

    def test_dietary_preferences_split(self, client, mock_service, prefix) -> None:
        """Should accept repeated and comma-separated dietary tags."""
        client.get(
            f"{prefix}/suggestions?dietaryPreferences=vegan,gluten-free"
            "&dietaryPreferences=nut-free"
        )

        request = mock_service.suggest.await_args.args[0]
        assert request.dietary_preferences == ("vegan", "gluten-free", "nut-free")

    @pytest.mark.parametrize(
        "params",
        [
            {"maxSuggestions": 0},
            {"maxSuggestions": 11},
            {"maxCookTime": 0},
            {"difficulty": "hard"},
        ],
    )
    def test_rejects_invalid_parameters(self, client, prefix, params) -> None:
        """Should return a structured 422 for invalid parameters."""
        response = client.get(f"{prefix}/suggestions", params=params)

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_pantry_unavailable(self, client, mock_service, prefix) -> None:
        """Should map PantryUnavailableError to 503."""
        mock_service.suggest.side_effect = PantryUnavailableError("down", "u1")

        response = client.get(f"{prefix}/suggestions")

        assert response.status_code == 503
        assert response.json()["error"] == "PANTRY_UNAVAILABLE"

    def test_service_not_initialized(self, test_settings, prefix) -> None:
        """Should return 503 when startup did not build the service."""
        client = TestClient(create_app(test_settings))

        response = client.get(f"{prefix}/suggestions")

        assert response.status_code == 503

    def test_fallback_suggestions_shape(self, live_client, prefix) -> None:
        """Should serialize synthesized suggestions with camelCase fields."""
        response = live_client.get(f"{prefix}/suggestions", params={"userId": "u1"})

        body = response.json()
        assert response.status_code == 200
        assert body["source"] == "fallback"
        assert 1 <= len(body["suggestions"]) <= 4
        first = body["suggestions"][0]
        assert {"matchingIngredients", "missingIngredients", "cookTime"} <= set(first)
        assert len(first["matchingIngredients"]) >= 3


class TestRecordSuggestionUsed:
    """Tests for POST /suggestions/used."""

    def test_records_usage(self, live_client, prefix) -> None:
        """Should accept the event and count it for the user."""
        suggestions = live_client.get(
            f"{prefix}/suggestions", params={"userId": "u1"}
        ).json()["suggestions"]

        response = live_client.post(
            f"{prefix}/suggestions/used",
            json={"userId": "u1", "suggestion": suggestions[0]},
        )
        analytics = live_client.get(f"{prefix}/analytics/u1").json()

        assert response.status_code == 202
        assert response.json() == {"message": "Usage recorded"}
        assert analytics["suggestionsUsed"] == 1
        assert analytics["suggestionsGenerated"] == len(suggestions)

    def test_unknown_user_accepted(self, client, mock_service, prefix) -> None:
        """Should accept events for users without analytics."""
        suggestion = {
            "id": "s1",
            "name": "Toast",
            "cuisine": "American",
            "cookTime": "5 minutes",
            "difficulty": "Easy",
            "servings": 1,
            "ingredients": [{"name": "Bread", "amount": "2", "available": True}],
            "instructions": ["Toast"],
            "matchingIngredients": ["Bread"],
            "missingIngredients": [],
            "priority": 10,
            "confidence": 0.5,
        }

        response = client.post(
            f"{prefix}/suggestions/used",
            json={"userId": "ghost", "suggestion": suggestion},
        )

        assert response.status_code == 202
        user_id, used = mock_service.track_suggestion_used.call_args.args
        assert user_id == "ghost"
        assert used.name == "Toast"

    def test_rejects_missing_suggestion(self, client, prefix) -> None:
        """Should reject a body without a suggestion."""
        response = client.post(f"{prefix}/suggestions/used", json={"userId": "u1"})

        assert response.status_code == 422
