"""Client for Groq cloud inference.

Groq exposes an OpenAI-compatible chat API. Requests are paced by a local
rate limiter so the free tier is not exceeded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from aiolimiter import AsyncLimiter

from pantry_suggest.llm.client.http import HTTPGenerationClient
from pantry_suggest.llm.exceptions import LLMConfigurationError
from pantry_suggest.llm.models import (
    ChatMessage,
    GroqChatRequest,
    GroqChatResponse,
    LLMCompletionResult,
)


if TYPE_CHECKING:
    import httpx


DEFAULT_TEMPERATURE = 0.1


class GroqClient(HTTPGenerationClient):
    """Chat-completions client with bearer authentication."""

    provider_name = "Groq"
    max_connections = 10
    DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"

    def __init__(
        self,
        api_key: str,
        model: str = "llama-3.1-8b-instant",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        requests_per_minute: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Groq client.

        Raises:
            LLMConfigurationError: If no API key is given.
        """
        if not api_key:
            msg = "Groq API key is required"
            raise LLMConfigurationError(msg)

        super().__init__(base_url, model, timeout, http_client)
        self.api_key = api_key
        # One request every 60/rpm seconds, no initial burst
        self._rate_limiter = AsyncLimiter(1, 60.0 / requests_per_minute)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _throttle(self) -> None:
        await self._rate_limiter.acquire()

    def _rate_limit_message(self, response: httpx.Response) -> str:
        retry_after = response.headers.get("retry-after", "60")
        return f"Groq rate limit exceeded, retry after {retry_after}s"

    def _build_body(
        self,
        prompt: str,
        model: str,
        system: str | None,
        options: dict[str, Any] | None,
    ) -> GroqChatRequest:
        # Ollama-style option names keep prompts provider-neutral
        options = options or {}
        messages = [ChatMessage(role="user", content=prompt)]
        if system:
            messages.insert(0, ChatMessage(role="system", content=system))
        return GroqChatRequest(
            model=model,
            messages=messages,
            temperature=options.get("temperature", DEFAULT_TEMPERATURE),
            max_tokens=options.get("num_predict"),
        )

    def _to_result(self, payload: Any) -> LLMCompletionResult:
        response = GroqChatResponse.model_validate(payload)
        usage = response.usage
        return LLMCompletionResult(
            raw_response=response.choices[0].message.content,
            model=response.model,
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
        )
