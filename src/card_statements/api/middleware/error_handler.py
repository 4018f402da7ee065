"""Global error handling.

This module provides consistent error responses across all API endpoints.
Every failure is rendered as the same JSON body (see
ProcessingErrorDetail) so the UI can show the matching remediation
message instead of a generic error.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from card_statements.config import settings
from card_statements.core.errors import get_error
from card_statements.core.exceptions import StatementProcessingError

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str | None:
    """Request id assigned by RequestLoggingMiddleware, if it ran."""
    return getattr(request.state, "request_id", None)


async def handle_statement_processing_error(
    request: Request, exc: StatementProcessingError
) -> JSONResponse:
    """Handle typed statement parsing failures.

    Args:
        request: The incoming request
        exc: The statement processing exception

    Returns:
        JSONResponse with error details from catalog
    """
    error_info = get_error(exc.error_code)

    extra = {
        "request_id": _request_id(request),
        "error_code": exc.error_code,
        "path": request.url.path,
        "method": request.method,
    }
    if settings.debug:
        extra["details"] = exc.details

    logger.warning(f"Statement processing error: {exc.error_code}", extra=extra)

    return JSONResponse(
        status_code=exc.http_status,
        content={
            "error_code": exc.error_code,
            "message": error_info["message"],
            "user_message": error_info["user_message"],
            "suggestion": error_info["suggestion"],
            "retry_allowed": error_info["retry_allowed"],
        },
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse with validation error details
    """
    error_messages = []
    for error in exc.errors():
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={
            "request_id": _request_id(request),
            "path": request.url.path,
            "method": request.method,
        },
    )

    error_info = get_error("VAL_001")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error_code": "VAL_001",
            "message": " | ".join(error_messages),
            "user_message": error_info["user_message"],
            "suggestion": error_info["suggestion"],
            "retry_allowed": error_info["retry_allowed"],
        },
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: The incoming request
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    # In non-debug: do not log str(exc) or traceback (may include statement text).
    extra = {
        "request_id": _request_id(request),
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "SYS_001",
            "message": "Internal server error",
            "user_message": "Ocurrio un error inesperado.",
            "suggestion": "Intenta nuevamente mas tarde.",
            "retry_allowed": True,
        },
    )
