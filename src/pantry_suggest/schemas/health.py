"""Health check schemas."""

from __future__ import annotations

from pydantic import Field

from pantry_suggest.schemas.base import APIResponse
from pantry_suggest.schemas.enums import HealthStatus


class HealthResponse(APIResponse):
    """Liveness plus the configured collaborators."""

    status: HealthStatus = Field(..., description="Overall health status")
    version: str
    llm_provider: str | None = Field(
        default=None,
        description="Configured generation provider, None when disabled",
    )
    cache_backend: str
