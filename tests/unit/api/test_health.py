"""Unit tests for the health endpoint."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from pantry_suggest.factory import create_app


pytestmark = pytest.mark.unit


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_healthy_when_service_ready(self, test_settings) -> None:
        """Should report healthy once the service is on app state."""
        app = create_app(test_settings)
        app.state.suggestions_service = MagicMock()

        response = TestClient(app).get(f"{test_settings.api.v1_prefix}/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "version": test_settings.app.version,
            "llmProvider": None,
            "cacheBackend": "memory",
        }

    def test_degraded_without_service(self, test_settings) -> None:
        """Should report degraded when startup did not build the service."""
        app = create_app(test_settings)

        response = TestClient(app).get(f"{test_settings.api.v1_prefix}/health")

        assert response.json()["status"] == "degraded"

    def test_reports_llm_provider(self, test_settings) -> None:
        """Should name the provider when generation is enabled."""
        settings = test_settings.model_copy(
            update={
                "llm": test_settings.llm.model_copy(
                    update={"enabled": True, "provider": "groq"}
                )
            }
        )
        app = create_app(settings)
        app.state.suggestions_service = MagicMock()

        response = TestClient(app).get(f"{settings.api.v1_prefix}/health")

        assert response.json()["llmProvider"] == "groq"
