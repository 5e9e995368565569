"""
Custom exception classes and error handling for the API Playground.

Provides consistent error responses across all API endpoints, plus the
execution error family the proxy uses internally to describe failed
outbound calls.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError


logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standard error response format."""
    detail: str
    error_code: str | None = None


class APIException(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str | None = None
    ):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(detail)


class ResourceNotFoundError(APIException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            detail=f"{resource_type} with id {resource_id} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="RESOURCE_NOT_FOUND"
        )


class ValidationError(APIException):
    """
    Exception raised when a request configuration is malformed.

    ``errors`` keeps the per-field messages so callers can report every
    offending field at once.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(
            detail="; ".join(self.errors) if self.errors else "Validation error",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            error_code="VALIDATION_ERROR"
        )


class UnauthorizedError(APIException):
    """Exception raised when no authenticated owner could be resolved."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="UNAUTHORIZED"
        )


class StorageError(APIException):
    """Exception raised when the history backend fails."""

    def __init__(self, detail: str = "Database error occurred"):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="DATABASE_ERROR"
        )


class RequestExecutionError(Exception):
    """
    An outbound proxy call failed before a response was received.

    These never reach the API caller as errors: the executor turns them
    into a status 0 history record whose status text is ``status_text``.
    """
    status_text: str | None = None

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def describe(self) -> str:
        """Status text for the synthesized failure record."""
        return self.status_text or self.message


class RequestTimeoutError(RequestExecutionError):
    """The outbound call exceeded the proxy timeout."""
    status_text = "Request timeout"


class ConnectionFailureError(RequestExecutionError):
    """DNS resolution or TCP connect to the target failed."""
    status_text = "Connection failed"


class BodyParseError(RequestExecutionError):
    """The request body was not valid JSON."""
    status_text = "Network Error"


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Handler for custom API exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code}
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    errors = exc.errors()
    # Format validation errors into a readable message
    error_messages = []
    for error in errors:
        loc = " -> ".join(str(l) for l in error["loc"])
        msg = error["msg"]
        error_messages.append(f"{loc}: {msg}")

    detail = "; ".join(error_messages) if error_messages else "Validation error"

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": detail, "error_code": "VALIDATION_ERROR"}
    )


async def sqlalchemy_exception_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """Handler for SQLAlchemy errors that escaped the store."""
    logger.error("Unhandled database error: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error occurred", "error_code": "DATABASE_ERROR"}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
