"""Observability components: structured logging."""

from pantry_suggest.observability.logging import (
    get_logger,
    logger,
    logging_context,
    setup_logging,
)


__all__ = [
    "get_logger",
    "logger",
    "logging_context",
    "setup_logging",
]
