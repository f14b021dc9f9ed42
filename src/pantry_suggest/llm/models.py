"""Provider wire models.

Bodies exchanged with Ollama (``/api/generate``) and Groq
(``/chat/completions``), plus the provider-neutral completion result the
clients hand back.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class LLMCompletionResult(BaseModel):
    """Generated text plus token accounting when the provider reports it."""

    model_config = ConfigDict(frozen=True)

    raw_response: str
    model: str
    prompt_tokens: int | None = None
    completion_tokens: int | None = None


# =============================================================================
# Ollama
# =============================================================================


class OllamaGenerateRequest(BaseModel):
    """Single-shot generation request."""

    model: str = Field(..., examples=["mistral:7b"])
    prompt: str
    stream: bool = False
    options: dict[str, Any] | None = Field(
        default=None,
        description="Sampling options such as temperature and num_predict",
    )
    system: str | None = None


class OllamaGenerateResponse(BaseModel):
    """Completed (non-streamed) generation."""

    model: str
    response: str
    done: bool = True
    prompt_eval_count: int | None = None
    eval_count: int | None = None


# =============================================================================
# Groq (OpenAI-compatible chat format)
# =============================================================================


class ChatMessage(BaseModel):
    """One turn of a chat conversation."""

    role: Literal["system", "user", "assistant"]
    content: str


class GroqChatRequest(BaseModel):
    """Chat completion request."""

    model: str = Field(..., examples=["llama-3.1-8b-instant"])
    messages: list[ChatMessage]
    temperature: float = 0.1
    max_tokens: int | None = None
    stream: bool = False


class GroqUsage(BaseModel):
    """Token usage block."""

    prompt_tokens: int
    completion_tokens: int


class GroqChoice(BaseModel):
    """One candidate completion."""

    index: int
    message: ChatMessage
    finish_reason: str | None = None


class GroqChatResponse(BaseModel):
    """Chat completion response; only the first choice is used."""

    id: str
    model: str
    choices: list[GroqChoice] = Field(..., min_length=1)
    usage: GroqUsage | None = None
