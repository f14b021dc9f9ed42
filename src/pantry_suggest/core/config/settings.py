"""Service configuration using Pydantic Settings with YAML support.

Configuration is layered (highest priority first):
1. Values passed to ``Settings()``
2. Environment variables (``SUGGESTIONS__CACHE_TTL_SECONDS=60``)
3. ``.env`` file (secrets)
4. ``config/environments/{APP_ENV}/*.yaml``
5. ``config/base/*.yaml``
6. Defaults below
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


class LLMProvider(StrEnum):
    """Generation provider backends."""

    OLLAMA = "ollama"
    GROQ = "groq"


class CacheBackend(StrEnum):
    """Where suggestion lists are memoized."""

    MEMORY = "memory"
    REDIS = "redis"


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Pantry Suggest"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server bind settings."""

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)


class ApiSettings(BaseModel):
    """HTTP API settings."""

    v1_prefix: str = "/api/v1/pantry-suggest"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "json"


class RedisSettings(BaseModel):
    """Redis connection used by the redis cache backend."""

    host: str = "localhost"
    port: int = 6379
    user: str | None = None
    cache_db: int = 0
    key_prefix: str = "quick_suggestions"


class OllamaSettings(BaseModel):
    """Ollama generation provider configuration."""

    url: str = "http://localhost:11434"
    model: str = "mistral:7b"
    timeout: float = Field(default=60.0, gt=0)


class GroqSettings(BaseModel):
    """Groq generation provider configuration."""

    url: str = "https://api.groq.com/openai/v1"
    model: str = "llama-3.1-8b-instant"
    timeout: float = Field(default=30.0, gt=0)
    requests_per_minute: float = Field(default=30.0, gt=0)


class LLMSettings(BaseModel):
    """Generation provider selection."""

    enabled: bool = True
    provider: LLMProvider = LLMProvider.OLLAMA
    ollama: OllamaSettings = OllamaSettings()
    groq: GroqSettings = GroqSettings()


class SuggestionSettings(BaseModel):
    """Suggestion engine tuning.

    ``cache_window_seconds`` controls how often the cache key rolls over;
    ``cache_ttl_seconds`` bounds how long a stored entry is served.
    """

    cache_backend: CacheBackend = CacheBackend.MEMORY
    cache_window_seconds: int = Field(default=24 * 60 * 60, gt=0)
    cache_ttl_seconds: int = Field(default=24 * 60 * 60, gt=0)
    min_pantry_items: int = Field(default=3, ge=1)
    min_pantry_matches: int = Field(default=3, ge=1)
    max_missing_ingredients: int = Field(default=2, ge=0)
    max_results: int = Field(default=4, ge=1)
    fallback_pantry_slice: int = Field(default=8, ge=1)
    generation_timeout: float | None = Field(default=45.0, gt=0)


class InventorySettings(BaseModel):
    """Where the development inventory snapshot is read from."""

    path: str | None = None


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Service settings with YAML + environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()
    redis: RedisSettings = RedisSettings()
    llm: LLMSettings = LLMSettings()
    suggestions: SuggestionSettings = SuggestionSettings()
    inventory: InventorySettings = InventorySettings()

    # Secrets (.env only)
    REDIS_PASSWORD: str = ""
    GROQ_API_KEY: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source below env and dotenv."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def redis_cache_url(self) -> str:
        """Redis URL for the suggestion cache, with optional ACL credentials."""
        auth_part = ""
        if self.redis.user and self.REDIS_PASSWORD:
            auth_part = f"{self.redis.user}:{self.REDIS_PASSWORD}@"
        elif self.REDIS_PASSWORD:
            auth_part = f":{self.REDIS_PASSWORD}@"
        elif self.redis.user:
            auth_part = f"{self.redis.user}@"
        return (
            f"redis://{auth_part}{self.redis.host}:{self.redis.port}"
            f"/{self.redis.cache_db}"
        )

    @property
    def is_development(self) -> bool:
        """Docs, colorized logs and reload are enabled."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Deployed behind the production overrides."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Running under the test overrides (generation disabled)."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
