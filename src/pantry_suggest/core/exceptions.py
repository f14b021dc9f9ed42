"""HTTP error mapping.

Every error leaves the API in the same envelope (``ErrorResponse``):
application exceptions carry their own status, suggestion engine errors
are mapped by type, and anything unexpected becomes an opaque 500.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from pantry_suggest.observability.logging import get_logger
from pantry_suggest.services.suggestions.exceptions import (
    InsufficientPantryError,
    PantryUnavailableError,
    SuggestionsError,
)


if TYPE_CHECKING:
    from fastapi import FastAPI, Request


logger = get_logger(__name__)

# Most specific first; SuggestionsError itself is the catch-all
_SUGGESTIONS_ERRORS: tuple[tuple[type[SuggestionsError], int, str], ...] = (
    (
        PantryUnavailableError,
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "PANTRY_UNAVAILABLE",
    ),
    (
        InsufficientPantryError,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "INSUFFICIENT_PANTRY",
    ),
    (SuggestionsError, status.HTTP_500_INTERNAL_SERVER_ERROR, "SUGGESTIONS_ERROR"),
)


class ErrorDetail(BaseModel):
    """One problem with the request, e.g. an invalid query parameter."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None


class AppException(Exception):
    """Exception raised by endpoints with a ready-made HTTP status."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundException(AppException):
    """A per-user record (e.g. analytics) does not exist."""

    def __init__(self, resource: str, identifier: Any) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error="NOT_FOUND",
            message=f"{resource} with identifier '{identifier}' not found",
        )


def _respond(
    status_code: int,
    error: str,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> ORJSONResponse:
    body = ErrorResponse(error=error, message=message, details=details)
    return ORJSONResponse(status_code=status_code, content=body.model_dump())


def suggestions_error_status(exc: SuggestionsError) -> tuple[int, str]:
    """Return the HTTP status and error code for an engine error."""
    for error_type, status_code, code in _SUGGESTIONS_ERRORS:
        if isinstance(exc, error_type):
            return status_code, code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "SUGGESTIONS_ERROR"


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        _request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        return _respond(exc.status_code, exc.error, exc.message, exc.details)

    @app.exception_handler(SuggestionsError)
    async def suggestions_exception_handler(
        _request: Request,
        exc: SuggestionsError,
    ) -> ORJSONResponse:
        status_code, error = suggestions_error_status(exc)
        logger.warning(
            "Suggestion request failed",
            error=error,
            user_id=exc.user_id,
            message=str(exc),
        )
        return _respond(status_code, error, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        _request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        return _respond(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        _request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return _respond(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_ERROR",
            "Request validation failed",
            details,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        _request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        logger.opt(exception=exc).error("Unhandled exception")
        return _respond(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred",
        )
