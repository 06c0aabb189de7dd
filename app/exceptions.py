# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API in the same shape:
#   {"statusCode": 401, "statusMessage": "Unauthorized - Please log in"}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized - Please log in"


def error_body(status_code: int, message: str, **extra: Any) -> dict[str, Any]:
    """Build the uniform error payload."""
    body: dict[str, Any] = {
        "statusCode": status_code,
        "statusMessage": message,
    }
    body.update({key: value for key, value in extra.items() if value})
    return body


class EntryboardException(Exception):
    """
    Base exception for the Entryboard API.

    All custom exceptions inherit from this class. The machine-readable
    `code` is kept for logs; clients only see statusCode/statusMessage
    (plus a suggestion when one is set).
    """

    def __init__(
        self,
        message: str,
        code: str = "ENTRYBOARD_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return error_body(self.status_code, self.message, suggestion=self.suggestion)


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthorizedError(EntryboardException):
    """Raised when a protected action is attempted without a valid session."""

    def __init__(self, reason: str | None = None):
        super().__init__(
            message=UNAUTHORIZED_MESSAGE,
            code="UNAUTHORIZED",
            status_code=401,
            details={"reason": reason} if reason else None,
        )


class AuthProviderError(EntryboardException):
    """Raised when Supabase Auth rejects a login or signup."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(
            message=message,
            code="AUTH_PROVIDER_ERROR",
            status_code=status_code,
        )


# =============================================================================
# Store Exceptions
# =============================================================================

class StoreFailureError(EntryboardException):
    """Raised when the Supabase store reports an error for a query or insert."""

    def __init__(self, message: str, operation: str):
        super().__init__(
            message=message,
            code="STORE_FAILURE",
            status_code=500,
            details={"operation": operation},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def entryboard_exception_handler(
    request: Request,
    exc: EntryboardException
) -> JSONResponse:
    """Convert EntryboardException to JSON response."""
    logger.debug(f"{exc.code} on {request.url.path}: {exc.message} {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (404, 405, ...) in the uniform shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Keeps the field-level errors so callers can see which input was wrong.
    """
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=error_body(422, "Validation error", errors=errors),
    )
