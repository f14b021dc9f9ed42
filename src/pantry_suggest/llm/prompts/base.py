"""Base class for LLM prompts.

A prompt class bundles the template with the settings it is meant to run
under (system prompt, temperature, token limit) so callers never pair a
template with the wrong options.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass(frozen=True, slots=True)
class RenderedPrompt:
    """Everything a provider call needs for one prompt."""

    text: str
    system: str | None = None
    options: dict[str, Any] = field(default_factory=dict)


class BasePrompt(ABC):
    """Base class for all LLM prompts.

    Example:
        ```python
        class LeftoversPrompt(BasePrompt):
            system_prompt = "You plan meals from leftovers."

            def format(self, **kwargs: Any) -> str:
                return f"Use up: {', '.join(kwargs['names'])}"
        ```
    """

    system_prompt: ClassVar[str | None] = None

    temperature: ClassVar[float] = 0.1
    """Low values favor deterministic output."""

    max_tokens: ClassVar[int | None] = None
    """None leaves the limit to the model."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Render the user prompt text.

        Raises:
            ValueError: If required variables are missing.
        """
        ...

    def get_options(self) -> dict[str, Any]:
        """Sampling options in Ollama's vocabulary."""
        options: dict[str, Any] = {"temperature": self.temperature}
        if self.max_tokens is not None:
            options["num_predict"] = self.max_tokens
        return options

    def render(self, **kwargs: Any) -> RenderedPrompt:
        """Format the prompt and attach its system prompt and options."""
        return RenderedPrompt(
            text=self.format(**kwargs),
            system=self.system_prompt,
            options=self.get_options(),
        )
