"""Configuration module with YAML and environment variable support."""

from .settings import CacheBackend, LLMProvider, Settings, get_settings


__all__ = [
    "CacheBackend",
    "LLMProvider",
    "Settings",
    "get_settings",
]
