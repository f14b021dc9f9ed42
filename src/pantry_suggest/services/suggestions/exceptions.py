"""Exceptions for the quick suggestions engine.

Provider and parse failures are recovered inside the engine; only a failed
pantry load can reach the caller.
"""

from __future__ import annotations


class SuggestionsError(Exception):
    """Base exception for suggestion engine errors."""

    def __init__(self, message: str, user_id: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            user_id: Optional user the request was made for.
        """
        self.user_id = user_id
        super().__init__(message)


class ParseError(SuggestionsError):
    """Raised when provider output yields no usable recipe candidates."""


class InsufficientPantryError(SuggestionsError):
    """Raised when fewer usable pantry items exist than a recipe needs."""

    def __init__(
        self,
        message: str,
        user_id: str | None = None,
        item_count: int = 0,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            user_id: Optional user ID.
            item_count: Number of usable pantry items found.
        """
        self.item_count = item_count
        super().__init__(message, user_id)


class PantryUnavailableError(SuggestionsError):
    """Raised when the pantry cannot be loaded and no fallback is possible."""

    def __init__(
        self,
        message: str,
        user_id: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            user_id: Optional user ID.
            cause: Optional underlying exception.
        """
        self.cause = cause
        super().__init__(message, user_id)
