"""Pantry-driven quick recipe suggestion engine."""

__version__ = "0.1.0"
