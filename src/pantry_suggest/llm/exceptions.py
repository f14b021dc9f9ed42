"""Generation provider exceptions.

Provider clients translate transport failures into these types. The
suggestion orchestrator treats every one of them as a reason to fall back
to the deterministic synthesizer.
"""

from __future__ import annotations


class LLMError(Exception):
    """Base exception for generation provider errors."""


class LLMUnavailableError(LLMError):
    """Raised when the provider cannot be reached."""


class LLMTimeoutError(LLMUnavailableError):
    """Raised when a provider request exceeds its timeout."""


class LLMResponseError(LLMError):
    """Raised when the provider answers with an HTTP 4xx/5xx."""


class LLMRateLimitError(LLMError):
    """Raised when the provider rate limits the request."""


class LLMConfigurationError(LLMError):
    """Raised when a provider client is misconfigured."""
