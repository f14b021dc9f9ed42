"""Generation provider clients."""

from pantry_suggest.llm.client.factory import create_generation_provider
from pantry_suggest.llm.client.groq import GroqClient
from pantry_suggest.llm.client.http import HTTPGenerationClient
from pantry_suggest.llm.client.ollama import OllamaClient
from pantry_suggest.llm.client.protocol import (
    GenerationProviderProtocol,
    ManagedProviderProtocol,
    RawOutput,
)


__all__ = [
    "GenerationProviderProtocol",
    "GroqClient",
    "HTTPGenerationClient",
    "ManagedProviderProtocol",
    "OllamaClient",
    "RawOutput",
    "create_generation_provider",
]
