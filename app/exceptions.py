# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the gateway.
# Every error response has the same shape: {"error": "<message>"}.
# =============================================================================

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GatewayException(Exception):
    """
    Base exception for the gateway.

    All custom exceptions inherit from this class and carry the HTTP
    status they map to.
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict[str, str]:
        """Convert exception to API response dict."""
        return {"error": self.message}


# =============================================================================
# Authorization Exceptions
# =============================================================================

class UnauthorizedError(GatewayException):
    """Raised when the bearer token is missing or not in the allowlist."""

    def __init__(self):
        super().__init__(message="Unauthorized", status_code=401)


class MissingTargetError(GatewayException):
    """Raised when a request does not say which database/collection to use."""

    def __init__(self):
        super().__init__(message="Missing collection or db in body", status_code=401)


# =============================================================================
# Request Exceptions
# =============================================================================

class MissingParameterError(GatewayException):
    """Raised when an operation-specific field is absent."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=400)


class InvalidParameterError(GatewayException):
    """Raised when a body or query parameter cannot be decoded."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=400)


# =============================================================================
# Database Exceptions
# =============================================================================

class DatabaseOperationError(GatewayException):
    """
    Raised when the MongoDB driver rejects an operation.

    The driver's message is passed through unmodified.
    """

    def __init__(self, message: str):
        super().__init__(message=message, status_code=500)


# =============================================================================
# Exception Handlers
# =============================================================================

async def gateway_exception_handler(
    request: Request,
    exc: GatewayException
) -> JSONResponse:
    """Convert GatewayException to JSON response."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": str(exc)},
    )
