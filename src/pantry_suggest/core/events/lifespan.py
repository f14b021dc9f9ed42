"""Application lifespan event handlers.

Startup builds the suggestion engine's collaborators (generation provider,
cache store, inventory reader) and stores the service on ``app.state``.
Shutdown releases provider and Redis connections.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from pantry_suggest.cache.memory import InMemorySuggestionCache
from pantry_suggest.cache.redis import RedisSuggestionCache
from pantry_suggest.core.config import CacheBackend, Settings, get_settings
from pantry_suggest.inventory.json_file import JsonFileInventory
from pantry_suggest.inventory.memory import StaticInventory
from pantry_suggest.llm.client.factory import create_generation_provider
from pantry_suggest.observability.logging import get_logger, setup_logging
from pantry_suggest.services.suggestions.service import QuickSuggestionsService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from pantry_suggest.cache.protocol import SuggestionCacheProtocol
    from pantry_suggest.inventory.protocol import InventoryReaderProtocol
    from pantry_suggest.llm.client.protocol import ManagedProviderProtocol


logger = get_logger(__name__)


async def _init_provider(settings: Settings) -> ManagedProviderProtocol | None:
    """Create the generation provider (non-critical)."""
    try:
        provider = create_generation_provider(settings)
        if provider is not None:
            await provider.initialize()
    except Exception:
        logger.exception(
            "Failed to initialize generation provider - using fallback recipes only"
        )
        return None
    return provider


async def _init_cache(settings: Settings) -> SuggestionCacheProtocol:
    """Create the suggestion cache, falling back to memory if Redis is down."""
    ttl = settings.suggestions.cache_ttl_seconds
    if settings.suggestions.cache_backend == CacheBackend.REDIS:
        cache = RedisSuggestionCache.from_url(
            settings.redis_cache_url,
            ttl_seconds=ttl,
            key_prefix=settings.redis.key_prefix,
        )
        try:
            await cache.ping()
        except Exception:
            logger.exception("Failed to connect to Redis - using in-memory cache")
            await cache.close()
        else:
            return cache
    return InMemorySuggestionCache(ttl_seconds=ttl)


def _init_inventory(settings: Settings) -> InventoryReaderProtocol:
    if settings.inventory.path:
        logger.info("Reading inventory from file", path=settings.inventory.path)
        return JsonFileInventory(settings.inventory.path)
    logger.warning("No inventory path configured - pantry is empty")
    return StaticInventory()


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
    )

    provider = await _init_provider(settings)
    cache = await _init_cache(settings)
    inventory = _init_inventory(settings)

    app.state.llm_provider = provider
    app.state.suggestion_cache = cache
    app.state.suggestions_service = QuickSuggestionsService(
        inventory,
        provider,
        settings=settings.suggestions,
        cache=cache,
        cache_key_prefix=settings.redis.key_prefix,
    )
    logger.info(
        "Application startup complete",
        llm_provider=type(provider).__name__ if provider else None,
        cache_backend=type(cache).__name__,
    )


async def _shutdown(app: FastAPI) -> None:
    """Release provider and cache connections."""
    logger.info("Shutting down application")

    provider = getattr(app.state, "llm_provider", None)
    if provider is not None:
        await provider.shutdown()

    cache = getattr(app.state, "suggestion_cache", None)
    if isinstance(cache, RedisSuggestionCache):
        await cache.close()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
