"""LLM integration module.

Provides HTTP clients for the generation providers (Ollama, Groq) and the
prompt used to request quick recipe suggestions.
"""

from pantry_suggest.llm.client.groq import GroqClient
from pantry_suggest.llm.client.ollama import OllamaClient
from pantry_suggest.llm.exceptions import (
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from pantry_suggest.llm.models import LLMCompletionResult
from pantry_suggest.llm.prompts.base import BasePrompt


__all__ = [
    "BasePrompt",
    "GroqClient",
    "LLMCompletionResult",
    "LLMConfigurationError",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMTimeoutError",
    "LLMUnavailableError",
    "OllamaClient",
]
