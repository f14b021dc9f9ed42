"""Generation provider protocol.

The suggestion engine only needs "prompt in, raw output out". Any object
with ``generate_content`` can stand in for a provider, which keeps tests and
alternative backends free of HTTP concerns.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


RawOutput = str | list[Any] | dict[str, Any]


@runtime_checkable
class GenerationProviderProtocol(Protocol):
    """Interface consumed by the generation orchestrator."""

    async def generate_content(
        self,
        prompt: str,
        *,
        system: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> RawOutput:
        """Return the provider's raw output for ``prompt``.

        Raises:
            Any exception. Callers must treat every failure uniformly.
        """
        ...


@runtime_checkable
class ManagedProviderProtocol(GenerationProviderProtocol, Protocol):
    """Provider that owns connection resources."""

    async def initialize(self) -> None:
        """Open connection pools."""
        ...

    async def shutdown(self) -> None:
        """Release connection pools."""
        ...
