"""Unit tests for logging module.

Tests cover:
- Request-scoped logging context
- Logger retrieval
- Log formatting (JSON and dev)
- Sink setup and standard library interception
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from unittest.mock import MagicMock

import orjson
import pytest
from loguru import logger

from pantry_suggest.observability.logging import (
    InterceptHandler,
    _format_record,
    _format_record_dev,
    get_logger,
    logging_context,
    setup_logging,
)


pytestmark = pytest.mark.unit


def _record(message: str = "hello", **extra: object) -> dict:
    level = MagicMock()
    level.name = "INFO"
    return {
        "time": datetime(2024, 6, 1, 12, 0, tzinfo=UTC),
        "level": level,
        "message": message,
        "name": "pantry_suggest.test",
        "function": "fn",
        "line": 42,
        "extra": dict(extra),
        "exception": None,
    }


_STANDARD_KEYS = {"timestamp", "level", "message", "logger", "function", "line"}


def _context_fields() -> dict:
    """Fields the JSON formatter adds to a bare record."""
    line = _format_record(_record())
    payload = orjson.loads(line.replace("{{", "{").replace("}}", "}"))
    return {k: v for k, v in payload.items() if k not in _STANDARD_KEYS}


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore a default sink after each test."""
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestLoggingContext:
    """Tests for request-scoped logging fields."""

    def test_empty_outside_block(self) -> None:
        """Should add no fields when no context is bound."""
        assert _context_fields() == {}

    def test_fields_bound_inside_block(self) -> None:
        """Should attach the bound fields to every record in the block."""
        with logging_context(user_id="u1"):
            assert _context_fields() == {"user_id": "u1"}

    def test_nested_blocks_merge_and_restore(self) -> None:
        """Should merge nested fields and restore the outer ones on exit."""
        with logging_context(request="outer"):
            with logging_context(user_id="u1"):
                assert _context_fields() == {"request": "outer", "user_id": "u1"}

            assert _context_fields() == {"request": "outer"}

        assert _context_fields() == {}

    def test_restores_on_error(self) -> None:
        """Should restore the context even when the block raises."""
        with pytest.raises(RuntimeError), logging_context(user_id="u1"):
            raise RuntimeError

        assert _context_fields() == {}

    def test_dev_format_includes_context(self) -> None:
        """Should append context fields to the dev format."""
        with logging_context(user_id="u1"):
            fmt = _format_record_dev(_record())

        assert "user_id=u1" in fmt


class TestFormatting:
    """Tests for record formatting."""

    def test_json_line(self) -> None:
        """Should serialize message, fields and context as JSON."""
        record = _record("Generated", count=3, name="pantry_suggest.service")

        with logging_context(user_id="u1"):
            line = _format_record(record)

        payload = orjson.loads(line.replace("{{", "{").replace("}}", "}"))
        assert payload["message"] == "Generated"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "pantry_suggest.service"
        assert payload["count"] == 3
        assert payload["user_id"] == "u1"

    def test_json_escapes_braces(self) -> None:
        """Should escape braces so Loguru does not format the line."""
        line = _format_record(_record())

        assert "{{" in line
        assert line.endswith("\n")

    def test_dev_format_includes_fields(self) -> None:
        """Should append bound fields to the dev format."""
        fmt = _format_record_dev(_record(count=3, name="x"))

        assert "count=3" in fmt
        assert "name=x" not in fmt
        assert "{message}" in fmt


class TestSetupLogging:
    """Tests for setup_logging and get_logger."""

    def test_json_output(self, capsys) -> None:
        """Should write JSON lines with bound fields."""
        setup_logging(log_level="INFO", log_format="json")

        get_logger("pantry_suggest.test").info("Cache cleared", removed=2)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = orjson.loads(line)
        assert payload["message"] == "Cache cleared"
        assert payload["removed"] == 2
        assert payload["logger"] == "pantry_suggest.test"

    def test_level_filter(self, capsys) -> None:
        """Should drop records below the configured level."""
        setup_logging(log_level="WARNING", log_format="json")

        get_logger("pantry_suggest.test").info("quiet")

        assert capsys.readouterr().out == ""

    def test_development_uses_text(self, capsys) -> None:
        """Should use the human-readable format in development."""
        setup_logging(log_level="INFO", log_format="json", is_development=True)

        get_logger("pantry_suggest.test").info("readable", user_id="u1")

        out = capsys.readouterr().out
        assert "readable" in out
        assert "user_id=u1" in out

    def test_intercepts_stdlib_logging(self, capsys) -> None:
        """Should route standard library records through Loguru."""
        setup_logging(log_level="INFO", log_format="json")

        logging.getLogger("third.party").warning("from stdlib")

        assert "from stdlib" in capsys.readouterr().out
        assert any(
            isinstance(h, InterceptHandler) for h in logging.getLogger().handlers
        )
