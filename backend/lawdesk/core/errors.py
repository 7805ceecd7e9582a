"""
API error types and exception handlers.

- Defines a small hierarchy of ApiError exceptions.
- Maps errors to a consistent JSON shape for clients.
- Registers FastAPI exception handlers, including request validation.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from lawdesk.core.logging import get_logger

__all__ = [
    "ApiError",
    "BadRequestError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "PayloadTooLargeError",
    "ValidationFailedError",
    "RateLimitError",
    "ServerError",
    "ErrorBody",
    "ErrorResponse",
    "register_exception_handlers",
]

log = get_logger(__name__)


# -------------------------------
# Error response models
# -------------------------------

class ErrorBody(BaseModel):
    code: str = Field(..., description="Stable machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict = Field(default_factory=dict, description="Optional structured details")


class ErrorResponse(BaseModel):
    error: ErrorBody
    request_id: Optional[str] = Field(default=None, description="Client-supplied correlation/request id")


# -------------------------------
# Exception types
# -------------------------------

class ApiError(Exception):
    """
    Base API error with HTTP status and machine code.
    """
    status_code: int = 400
    code: str = "bad_request"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict] = None,
        headers: Optional[dict] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.headers = headers or {}


class BadRequestError(ApiError):
    status_code = 400
    code = "bad_request"


class AuthenticationError(ApiError):
    status_code = 401
    code = "unauthorized"


class PermissionDeniedError(ApiError):
    status_code = 403
    code = "forbidden"


class NotFoundError(ApiError):
    status_code = 404
    code = "not_found"


class ConflictError(ApiError):
    status_code = 409
    code = "conflict"


class PayloadTooLargeError(ApiError):
    status_code = 413
    code = "payload_too_large"


class ValidationFailedError(ApiError):
    status_code = 422
    code = "validation_error"


class RateLimitError(ApiError):
    status_code = 429
    code = "rate_limited"


class ServerError(ApiError):
    status_code = 500
    code = "server_error"


# -------------------------------
# Handlers
# -------------------------------

def _make_json_response(request: Request, exc: ApiError) -> JSONResponse:
    # Accept common correlation headers
    req_id = request.headers.get("x-request-id") or request.headers.get("x-correlation-id")

    body = ErrorResponse(
        error=ErrorBody(code=exc.code, message=exc.message, details=exc.details or {}),
        request_id=req_id,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(body.model_dump()),
        headers=exc.headers or None,
    )


async def api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    FastAPI expects handlers typed as (Request, Exception) -> Response.

    - ApiError: mapped directly.
    - Request/Pydantic validation errors: mapped to 422 validation_error with details.
    - Other exceptions: mapped to 500 server_error.
    """
    if isinstance(exc, ApiError):
        return _make_json_response(request, exc)

    if isinstance(exc, (RequestValidationError, ValidationError)):
        details: dict[str, Any] = {"errors": jsonable_encoder(exc.errors())}
        return _make_json_response(request, ValidationFailedError("Validation error", details=details))

    return await unhandled_error_handler(request, exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error(
        "unhandled error",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"path": request.url.path, "method": request.method},
    )
    return _make_json_response(request, ServerError("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers on the FastAPI app.
    """
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, api_error_handler)
    app.add_exception_handler(ValidationError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
