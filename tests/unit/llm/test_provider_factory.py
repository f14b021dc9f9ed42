"""Unit tests for generation provider selection."""

from __future__ import annotations

import pytest

from pantry_suggest.core.config import LLMProvider, Settings
from pantry_suggest.llm.client.factory import create_generation_provider
from pantry_suggest.llm.client.groq import GroqClient
from pantry_suggest.llm.client.ollama import OllamaClient
from pantry_suggest.llm.client.protocol import ManagedProviderProtocol


pytestmark = pytest.mark.unit


def _settings(**llm: object) -> Settings:
    settings = Settings()
    return settings.model_copy(
        update={"llm": settings.llm.model_copy(update=llm)}
    )


class TestCreateGenerationProvider:
    """Tests for create_generation_provider."""

    def test_disabled_returns_none(self) -> None:
        """Should return None when generation is disabled."""
        assert create_generation_provider(_settings(enabled=False)) is None

    def test_ollama(self) -> None:
        """Should build an Ollama client from settings."""
        settings = _settings(enabled=True, provider=LLMProvider.OLLAMA)

        provider = create_generation_provider(settings)

        assert isinstance(provider, OllamaClient)
        assert provider.model == settings.llm.ollama.model
        assert isinstance(provider, ManagedProviderProtocol)

    def test_groq_without_key_returns_none(self) -> None:
        """Should return None when Groq is selected without a key."""
        settings = _settings(enabled=True, provider=LLMProvider.GROQ)
        settings = settings.model_copy(update={"GROQ_API_KEY": ""})

        assert create_generation_provider(settings) is None

    def test_groq_with_key(self) -> None:
        """Should build a Groq client when a key is configured."""
        settings = _settings(enabled=True, provider=LLMProvider.GROQ)
        settings = settings.model_copy(update={"GROQ_API_KEY": "gsk-test"})

        provider = create_generation_provider(settings)

        assert isinstance(provider, GroqClient)
        assert provider.api_key == "gsk-test"
