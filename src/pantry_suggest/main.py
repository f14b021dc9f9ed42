"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn pantry_suggest.main:app --reload

    # Or directly
    python -m pantry_suggest.main
"""

from pantry_suggest.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from pantry_suggest.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "pantry_suggest.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
