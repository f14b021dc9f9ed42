"""Shared transport for HTTP generation providers.

Subclasses describe their endpoint, request body and response shape. This
module owns the pooled ``httpx.AsyncClient`` and maps transport failures
onto :mod:`pantry_suggest.llm.exceptions`. Calls are single-shot; the
caller decides how to degrade.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

import httpx

from pantry_suggest.llm.exceptions import (
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from pantry_suggest.observability.logging import get_logger


if TYPE_CHECKING:
    from pydantic import BaseModel

    from pantry_suggest.llm.models import LLMCompletionResult


logger = get_logger(__name__)


class HTTPGenerationClient(ABC):
    """Base class for providers reached with one JSON POST per prompt.

    Attributes:
        base_url: Provider base URL without a trailing slash.
        model: Default model to use for generation.
        timeout: HTTP request timeout in seconds.
    """

    provider_name: ClassVar[str]
    max_connections: ClassVar[int] = 20

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: float,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._http_client = http_client

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """URL every generation request is posted to."""

    @abstractmethod
    def _build_body(
        self,
        prompt: str,
        model: str,
        system: str | None,
        options: dict[str, Any] | None,
    ) -> BaseModel: ...

    @abstractmethod
    def _to_result(self, payload: Any) -> LLMCompletionResult: ...

    def _headers(self) -> dict[str, str]:
        return {}

    async def _throttle(self) -> None:
        """Wait until the provider may be called again."""

    def _rate_limit_message(self, response: httpx.Response) -> str:  # noqa: ARG002
        return f"{self.provider_name} rate limit exceeded"

    async def initialize(self) -> None:
        """Create the pooled HTTP client if it does not exist yet."""
        if self._http_client is not None:
            return

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers=self._headers(),
            limits=httpx.Limits(
                max_keepalive_connections=self.max_connections // 2,
                max_connections=self.max_connections,
            ),
        )
        logger.info(
            "Generation client initialized",
            provider=self.provider_name,
            model=self.model,
            timeout=self.timeout,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("Generation client shutdown", provider=self.provider_name)

    async def _send(self, body: BaseModel) -> Any:
        if self._http_client is None:
            await self.initialize()
        assert self._http_client is not None

        await self._throttle()
        name = self.provider_name
        try:
            response = await self._http_client.post(
                self.endpoint,
                json=body.model_dump(exclude_none=True),
            )
            if response.status_code == 429:
                raise LLMRateLimitError(self._rate_limit_message(response))
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            logger.warning("Provider request timeout", provider=name)
            msg = f"{name} timeout after {self.timeout}s"
            raise LLMTimeoutError(msg) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(
                "Provider request failed",
                provider=name,
                status_code=status_code,
                url=self.endpoint,
            )
            msg = f"{name} returned {status_code}"
            raise LLMResponseError(msg) from e
        except httpx.RequestError as e:
            logger.warning("Provider connection error", provider=name, error=str(e))
            msg = f"Cannot connect to {name}: {e}"
            raise LLMUnavailableError(msg) from e
        except ValueError as e:
            msg = f"{name} returned a body that is not JSON"
            raise LLMResponseError(msg) from e

    async def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        system: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Generate a completion.

        Args:
            prompt: Input prompt text.
            model: Model override (defaults to the client's model).
            system: Optional system prompt.
            options: Ollama-style options (``temperature``, ``num_predict``).

        Raises:
            LLMUnavailableError: If the provider cannot be reached.
            LLMTimeoutError: If the request times out.
            LLMResponseError: On an error status or an unexpected body.
            LLMRateLimitError: On HTTP 429.
        """
        body = self._build_body(prompt, model or self.model, system, options)
        payload = await self._send(body)
        try:
            return self._to_result(payload)
        except ValueError as e:
            msg = f"{self.provider_name} response did not match its schema"
            raise LLMResponseError(msg) from e

    async def generate_content(
        self,
        prompt: str,
        *,
        system: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> str:
        """Return only the generated text for ``prompt``."""
        result = await self.generate(prompt, system=system, options=options)
        logger.debug(
            "Completion received",
            provider=self.provider_name,
            model=result.model,
            completion_tokens=result.completion_tokens,
        )
        return result.raw_response
