"""Loguru logging setup for the suggestion engine.

Provides:
- JSON log lines (orjson) outside development
- Colorized human-readable lines in development
- Standard library logging routed through Loguru
- Request-scoped fields (user_id, request shape) carried in a ContextVar
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

import orjson
from loguru import logger


if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any

    from loguru import Logger


_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "asyncio", "redis")


class InterceptHandler(logging.Handler):
    """Forward standard library log records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Re-emit ``record`` through Loguru at the matching level."""
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _format_record(record: dict[str, Any]) -> str:
    """Serialize a record and its bound fields as one JSON line."""
    record["extra"].update(_log_context.get())

    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["extra"].pop("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
        **record["extra"],
    }

    exc = record["exception"]
    if exc:
        payload["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    # Loguru treats the returned string as a format template
    line = orjson.dumps(payload, default=str).decode()
    return line.replace("{", "{{").replace("}", "}}") + "\n"


def _format_record_dev(record: dict[str, Any]) -> str:
    """Build a colorized format string including bound fields."""
    fields = {**_log_context.get(), **record["extra"]}
    fields.pop("name", None)
    suffix = ""
    if fields:
        rendered = " ".join(f"{k}={v}" for k, v in fields.items())
        suffix = " | " + rendered.replace("{", "{{").replace("}", "}}")

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
        f"{suffix}\n"
    )
    if record["exception"]:
        fmt += "{exception}\n"
    return fmt


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
) -> None:
    """Configure the process-wide Loguru sink.

    Args:
        log_level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: ``json`` or ``text``.
        is_development: Force the human-readable format.
    """
    readable = is_development or log_format != "json"
    logger.remove()
    logger.add(
        sys.stdout,
        format=_format_record_dev if readable else _format_record,
        level=log_level.upper(),
        colorize=readable,
        # Variable values in tracebacks only where logs stay local
        backtrace=readable,
        diagnose=readable,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Logger:
    """Return the Loguru logger bound to ``name`` (usually ``__name__``)."""
    return logger.bind(name=name)


@contextmanager
def logging_context(**kwargs: Any) -> Iterator[None]:
    """Bind fields for the duration of a ``with`` block, then restore."""
    token = _log_context.set({**_log_context.get(), **kwargs})
    try:
        yield
    finally:
        _log_context.reset(token)


__all__ = [
    "InterceptHandler",
    "get_logger",
    "logger",
    "logging_context",
    "setup_logging",
]
