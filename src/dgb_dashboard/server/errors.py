"""
Error handling for the dashboard HTTP surface.

Gateway failures never reach the client unformatted: route handlers convert
them into a HandlerError, and the exception handlers registered by the app
render that as a JSON body with a 5xx status.
"""

from enum import IntEnum
from functools import wraps
from typing import Any, Dict, Optional
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from ..rpc import RpcError


class ErrorStatus(IntEnum):
    """HTTP status codes used for failed dashboard requests."""
    # Data endpoints (/api/*)
    DATA_ENDPOINT_FAILURE = 500
    # Liveness probe (/health), distinct from generic failure
    HEALTH_CHECK_FAILURE = 503


class HandlerError(Exception):
    """A failure that must be reported to the HTTP client.

    Args:
        message: Human-readable error message, sent as the ``error`` field
        status_code: HTTP status of the response
        extra: Additional fields merged into the JSON body
        original_error: The exception that caused this failure
    """

    def __init__(
        self,
        message: str,
        status_code: int = ErrorStatus.DATA_ENDPOINT_FAILURE,
        extra: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.extra = extra or {}
        self.original_error = original_error

    def to_content(self) -> Dict[str, Any]:
        content = dict(self.extra)
        content["error"] = self.message
        return content


def create_error_response(
    message: str,
    status_code: int = ErrorStatus.DATA_ENDPOINT_FAILURE,
    extra: Optional[Dict[str, Any]] = None,
    log_error: bool = True
) -> JSONResponse:
    """Create a JSON error response.

    Args:
        message: Human-readable error message
        status_code: HTTP status code
        extra: Optional additional body fields
        log_error: Whether to log the error

    Returns:
        JSONResponse with ``{"error": message}`` plus any extra fields
    """
    if log_error:
        logging.error(f"Request failed with {int(status_code)}: {message}")
    return JSONResponse(
        content=HandlerError(message, status_code, extra).to_content(),
        status_code=int(status_code)
    )


def wrap_rpc_failures(status_code: int = ErrorStatus.DATA_ENDPOINT_FAILURE, **extra: Any):
    """Decorator converting gateway failures raised by a handler into HandlerError."""
    def decorator(func):
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except RpcError as e:
                raise HandlerError(
                    message=str(e),
                    status_code=status_code,
                    extra=extra,
                    original_error=e
                )
        return wrapper
    return decorator


async def handler_error_handler(request: Request, exc: HandlerError) -> JSONResponse:
    """Render a HandlerError raised anywhere in a route."""
    return create_error_response(
        message=exc.message,
        status_code=exc.status_code,
        extra=exc.extra,
        # The gateway already logged the underlying RPC failure
        log_error=exc.original_error is None
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for exceptions no handler mapped."""
    logging.exception(f"Unhandled error on {request.url.path}: {exc}")
    return create_error_response(
        message=str(exc) or type(exc).__name__,
        status_code=ErrorStatus.DATA_ENDPOINT_FAILURE,
        log_error=False
    )
