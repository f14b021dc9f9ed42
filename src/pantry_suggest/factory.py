"""FastAPI application factory.

``create_app`` wires the suggestion API onto a fresh FastAPI instance. The
suggestion service itself is built later, in the lifespan, so creating an
app never touches Redis or a generation provider.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from pantry_suggest.api.v1.router import router as v1_router
from pantry_suggest.core.config import Settings, get_settings
from pantry_suggest.core.events import lifespan
from pantry_suggest.core.exceptions import setup_exception_handlers


def _docs_urls(settings: Settings) -> dict[str, str | None]:
    """Interactive docs are only served in development."""
    if not settings.is_development:
        return {"docs_url": None, "redoc_url": None, "openapi_url": None}
    return {
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "openapi_url": "/openapi.json",
    }


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the suggestion API application.

    Args:
        settings: Settings to run with, defaults to ``get_settings()``.
    """
    settings = settings or get_settings()
    docs = _docs_urls(settings)

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Pantry-first quick recipe suggestions",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        debug=settings.app.debug,
        **docs,
    )
    # Read back by the lifespan and by get_app_settings
    app.state.settings = settings

    setup_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    @app.get("/", include_in_schema=False)
    async def service_info() -> dict[str, str]:
        return {
            "service": settings.app.name,
            "version": settings.app.version,
            "docs": docs["docs_url"] or "disabled",
        }

    return app
