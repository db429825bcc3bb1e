"""
Application Errors

Every failure a handler can produce is an ``AppError`` carrying a stable
error code and HTTP status. ``register_exception_handlers`` installs the
single boundary that turns them into the response envelope:

    {"message": str, "errorCode": str, "errors": Any}

Unexpected exceptions become ``InternalError``: the cause is logged and
never returned to the caller.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for all client-visible errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 400,
        errors: Any = None,
        headers: dict[str, str] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.errors = errors
        self.headers = headers
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errorCode": self.error_code,
            "errors": self.errors,
        }


class ValidationError(AppError):
    """Raised when required fields are missing or malformed."""

    def __init__(self, message: str, errors: Any = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            errors=errors,
        )


class NotFoundError(AppError):
    """Raised when an id or slug has no matching record."""

    def __init__(self, resource: str = "Resource", identifier: Any = None):
        message = (
            f"{resource} {identifier} not found" if identifier is not None else f"{resource} not found"
        )
        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class DuplicateSlugError(AppError):
    """Raised when a title produces a slug already held by another record of the same kind."""

    def __init__(self, resource: str, slug: str):
        self.slug = slug
        super().__init__(
            message=f"A {resource.lower()} with this title already exists",
            error_code="DUPLICATE_SLUG",
            status_code=status.HTTP_409_CONFLICT,
            errors={"slug": slug},
        )


class EmailAlreadyRegisteredError(AppError):
    def __init__(self, email: str):
        super().__init__(
            message="An account with this email already exists.",
            error_code="EMAIL_ALREADY_REGISTERED",
            status_code=status.HTTP_409_CONFLICT,
            errors={"email": email},
        )


class ForbiddenError(AppError):
    """Raised when an authenticated actor is not permitted to perform an action."""

    def __init__(self, message: str = "You are not allowed to perform this action."):
        super().__init__(
            message=message,
            error_code="FORBIDDEN",
            status_code=status.HTTP_403_FORBIDDEN,
        )


class UnauthenticatedError(AppError):
    """Raised when the bearer credential is missing or invalid."""

    def __init__(self, message: str = "Authentication required."):
        super().__init__(
            message=message,
            error_code="UNAUTHENTICATED",
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidStateError(AppError):
    """Raised when a transition is not allowed from the record's current status."""

    def __init__(self, current_status: str, trigger: str, allowed: list[str] | None = None):
        self.current_status = current_status
        self.trigger = trigger
        super().__init__(
            message=f"Cannot {trigger} a record in status {current_status}.",
            error_code="INVALID_STATE",
            status_code=status.HTTP_409_CONFLICT,
            errors={"current_status": current_status, "allowed_from": allowed or []},
        )


class RateLimitExceededError(AppError):
    """Raised when an actor exceeds the rate limit for an action."""

    def __init__(self, limit: int, window_seconds: int):
        super().__init__(
            message=f"Rate limit exceeded. Maximum {limit} requests per {window_seconds} seconds.",
            error_code="RATE_LIMIT_EXCEEDED",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            errors={"retry_after_seconds": window_seconds},
            headers={"Retry-After": str(window_seconds)},
        )


class InternalError(AppError):
    """Unexpected store or provider failure. The cause is logged, never returned."""

    def __init__(self, message: str = "Something went wrong!"):
        super().__init__(
            message=message,
            error_code="INTERNAL_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def _error_response(error: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=jsonable_encoder(error.to_dict()),
        headers=error.headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(ValidationError("Invalid request data.", errors=exc.errors()))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return _error_response(InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error boundary on the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "DuplicateSlugError",
    "EmailAlreadyRegisteredError",
    "ForbiddenError",
    "UnauthenticatedError",
    "InvalidStateError",
    "RateLimitExceededError",
    "InternalError",
    "register_exception_handlers",
]
