"""Client for a local or remote Ollama instance."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pantry_suggest.llm.client.http import HTTPGenerationClient
from pantry_suggest.llm.models import (
    LLMCompletionResult,
    OllamaGenerateRequest,
    OllamaGenerateResponse,
)


if TYPE_CHECKING:
    import httpx


class OllamaClient(HTTPGenerationClient):
    """Non-streaming ``/api/generate`` client."""

    provider_name = "Ollama"

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Ollama client.

        Args:
            base_url: Base URL of Ollama service (e.g., http://localhost:11434).
            model: Default model name (e.g., mistral:7b).
            timeout: HTTP request timeout in seconds.
            http_client: Optional pre-built client, mainly for tests.
        """
        super().__init__(base_url, model, timeout, http_client)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/generate"

    def _build_body(
        self,
        prompt: str,
        model: str,
        system: str | None,
        options: dict[str, Any] | None,
    ) -> OllamaGenerateRequest:
        return OllamaGenerateRequest(
            model=model,
            prompt=prompt,
            stream=False,
            options=options,
            system=system,
        )

    def _to_result(self, payload: Any) -> LLMCompletionResult:
        response = OllamaGenerateResponse.model_validate(payload)
        return LLMCompletionResult(
            raw_response=response.response,
            model=response.model,
            prompt_tokens=response.prompt_eval_count,
            completion_tokens=response.eval_count,
        )
