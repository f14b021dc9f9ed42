"""FastAPI dependencies for service access.

Services are built during application startup and stored in app.state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

from pantry_suggest.core.config import Settings, get_settings


if TYPE_CHECKING:
    from pantry_suggest.services.suggestions.service import QuickSuggestionsService


async def get_suggestions_service(request: Request) -> QuickSuggestionsService:
    """Get the suggestion service from app state.

    Raises:
        HTTPException: 503 if the service is not initialized.
    """
    service: QuickSuggestionsService | None = getattr(
        request.app.state, "suggestions_service", None
    )
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Suggestion service not available",
        )
    return service


async def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()
