"""Health check endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pantry_suggest.api.dependencies import get_app_settings
from pantry_suggest.core.config import Settings  # noqa: TC001
from pantry_suggest.schemas.enums import HealthStatus
from pantry_suggest.schemas.health import HealthResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Reports whether the suggestion service is up and how it is wired.",
)
async def health_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Check if the service is alive.

    The service is degraded when the suggestion engine failed to start.
    """
    service = getattr(request.app.state, "suggestions_service", None)
    return HealthResponse(
        status=HealthStatus.HEALTHY if service is not None else HealthStatus.DEGRADED,
        version=settings.app.version,
        llm_provider=str(settings.llm.provider) if settings.llm.enabled else None,
        cache_backend=str(settings.suggestions.cache_backend),
    )
