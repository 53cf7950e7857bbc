"""
Service Errors and Exception Handlers

Business-rule failures are raised as ServiceError subclasses by the service
layer and rendered into the API envelope {success, message, error, data?}
by the handlers registered on the application.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for service-layer errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 400,
        data: Any = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.data = data
        super().__init__(message)


class ForbiddenError(ServiceError):
    """Raised when the requester's role or identity does not allow the action."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message=message, error_code="FORBIDDEN", status_code=403)


class UnauthorizedError(ServiceError):
    """Raised when authentication is missing or invalid."""

    def __init__(self, message: str = "Authentication required."):
        super().__init__(message=message, error_code="UNAUTHORIZED", status_code=401)


class NotFoundError(ServiceError):
    """Raised when a school, teacher, acceptance or other record does not exist."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(message=f"{resource} not found", error_code="NOT_FOUND", status_code=404)


class MissingFieldError(ServiceError):
    """Raised when a required request field is absent."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="MISSING_FIELD", status_code=400)


class InvalidInputError(ServiceError):
    """Raised when a request field holds a value outside its domain."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="INVALID_INPUT", status_code=400)


class ConflictError(ServiceError):
    """Raised when a record already exists for a unique pair."""

    def __init__(self, message: str, data: Any = None):
        super().__init__(message=message, error_code="CONFLICT", status_code=400, data=data)


class RateLimitExceededError(ServiceError):
    """Raised when a requester exceeds a rate limit."""

    def __init__(self, limit: int, window_seconds: int):
        super().__init__(
            message=f"Rate limit exceeded. Maximum {limit} requests per {window_seconds} seconds.",
            error_code="RATE_LIMIT_EXCEEDED",
            status_code=429,
        )
        self.window_seconds = window_seconds


def internal_error_message(exc: Exception, is_production: bool) -> str:
    """Message returned for unexpected errors; the raw text is hidden in production."""
    if is_production:
        return "An unexpected error occurred."
    return str(exc) or exc.__class__.__name__


def internal_error(exc: Exception, is_production: bool) -> HTTPException:
    """HTTP 500 raised by routers for errors outside the ServiceError taxonomy."""
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": internal_error_message(exc, is_production),
        },
    )


def _envelope(message: str, error: str, data: Any = None) -> dict[str, Any]:
    content: dict[str, Any] = {"success": False, "message": message, "error": error}
    if data is not None:
        content["data"] = jsonable_encoder(data, by_alias=True)
    return content


def register_exception_handlers(app: FastAPI, is_production: bool) -> None:
    """Register envelope-producing exception handlers on the application."""

    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        logger.warning(
            f"{exc.error_code} on {request.method} {request.url.path}: "
            f"{exc.message} (status={exc.status_code})"
        )
        headers = None
        if isinstance(exc, RateLimitExceededError):
            headers = {"Retry-After": str(exc.window_seconds)}
        return JSONResponse(
            status_code=exc.status_code,
            content=_envelope(exc.message, exc.error_code, exc.data),
            headers=headers,
        )

    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        detail = exc.detail
        if isinstance(detail, dict):
            message = detail.get("message", "Request failed")
            error = detail.get("error", "HTTP_ERROR")
        else:
            message = str(detail)
            error = "HTTP_ERROR"
        return JSONResponse(
            status_code=exc.status_code,
            content=_envelope(message, error),
            headers=exc.headers,
        )

    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        logger.warning(f"Validation failed on {request.method} {request.url.path}: {errors}")
        content = _envelope("Validation error", "VALIDATION_ERROR")
        content["errors"] = errors
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)

    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_envelope(internal_error_message(exc, is_production), "INTERNAL_ERROR"),
        )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
