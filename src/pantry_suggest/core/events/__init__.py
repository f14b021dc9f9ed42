"""Application lifecycle events."""

from pantry_suggest.core.events.lifespan import lifespan


__all__ = ["lifespan"]
