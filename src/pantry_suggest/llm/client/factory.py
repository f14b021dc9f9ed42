"""Build the configured generation provider."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pantry_suggest.core.config import LLMProvider
from pantry_suggest.llm.client.groq import GroqClient
from pantry_suggest.llm.client.ollama import OllamaClient
from pantry_suggest.observability.logging import get_logger


if TYPE_CHECKING:
    from pantry_suggest.core.config import Settings
    from pantry_suggest.llm.client.protocol import ManagedProviderProtocol


logger = get_logger(__name__)


def create_generation_provider(settings: Settings) -> ManagedProviderProtocol | None:
    """Return the provider selected by ``settings.llm.provider``.

    Returns None when generation is disabled or the selected provider is
    missing credentials. The engine then always uses the fallback synthesizer.
    """
    if not settings.llm.enabled:
        logger.info("LLM generation disabled - using fallback synthesizer only")
        return None

    if settings.llm.provider == LLMProvider.GROQ:
        if not settings.GROQ_API_KEY:
            logger.warning(
                "Groq provider selected but GROQ_API_KEY not set - "
                "using fallback synthesizer only"
            )
            return None
        return GroqClient(
            api_key=settings.GROQ_API_KEY,
            model=settings.llm.groq.model,
            base_url=settings.llm.groq.url,
            timeout=settings.llm.groq.timeout,
            requests_per_minute=settings.llm.groq.requests_per_minute,
        )

    return OllamaClient(
        base_url=settings.llm.ollama.url,
        model=settings.llm.ollama.model,
        timeout=settings.llm.ollama.timeout,
    )
