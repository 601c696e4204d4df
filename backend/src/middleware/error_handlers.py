"""Centralized error handling with consistent response formatting."""

import logging
from typing import Any
from uuid import UUID

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.exceptions import ProgressStoreError, ResourceNotFoundError
from src.progress.results import ErrorKind


logger = logging.getLogger(__name__)


# === Error Categories ===


class ErrorCategory:
    """Error category constants."""

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONFLICT = "CONFLICT_ERROR"
    DATABASE = "DATABASE_ERROR"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE_ERROR"
    INTERNAL = "INTERNAL_ERROR"


class ErrorCode:
    """Specific error codes for better client handling."""

    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    DB_QUERY_FAILED = "DB_QUERY_FAILED"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL = "INTERNAL_ERROR"


# ErrorKind -> (category, code, status)
_STORE_ERROR_MAP: dict[ErrorKind, tuple[str, str, int]] = {
    ErrorKind.CONSTRAINT: (ErrorCategory.CONFLICT, ErrorCode.ALREADY_EXISTS, status.HTTP_409_CONFLICT),
    ErrorKind.NOT_FOUND: (ErrorCategory.RESOURCE_NOT_FOUND, ErrorCode.NOT_FOUND, status.HTTP_404_NOT_FOUND),
    ErrorKind.QUERY: (ErrorCategory.DATABASE, ErrorCode.DB_QUERY_FAILED, status.HTTP_502_BAD_GATEWAY),
    ErrorKind.TRANSPORT: (
        ErrorCategory.EXTERNAL_SERVICE,
        ErrorCode.SERVICE_UNAVAILABLE,
        status.HTTP_503_SERVICE_UNAVAILABLE,
    ),
}


# === Error Response Formatting ===


def format_error_response(
    category: str,
    code: str,
    detail: str,
    status_code: int,
    suggestions: list[str] | None = None,
    metadata: dict[str, Any] | None = None,
) -> JSONResponse:
    """Format a consistent error response."""
    content = {
        "error": {
            "category": category,
            "code": code,
            "detail": detail,
        }
    }

    if suggestions:
        content["error"]["suggestions"] = suggestions

    if metadata:
        content["error"]["metadata"] = metadata

    return JSONResponse(status_code=status_code, content=content)


async def handle_not_found_errors(_request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    """Handle lookups of resources that do not exist."""
    return format_error_response(
        category=ErrorCategory.RESOURCE_NOT_FOUND,
        code=ErrorCode.NOT_FOUND,
        detail=str(exc),
        status_code=status.HTTP_404_NOT_FOUND,
        suggestions=["The requested resource does not exist"],
    )


async def handle_progress_store_errors(request: Request, exc: ProgressStoreError) -> JSONResponse:
    """Map progress store failures to HTTP responses by kind."""
    category, code, status_code = _STORE_ERROR_MAP[exc.kind]

    if exc.kind in (ErrorKind.QUERY, ErrorKind.TRANSPORT):
        logger.error(f"Progress store error on {request.method} {request.url.path}: {exc}")
    else:
        logger.info(f"Progress store rejected {request.method} {request.url.path}: {exc}")

    suggestions = ["Please try again later"] if exc.kind == ErrorKind.TRANSPORT else None
    return format_error_response(
        category=category,
        code=code,
        detail=str(exc),
        status_code=status_code,
        suggestions=suggestions,
    )


# === Utility Functions ===


def log_error_context(request: Request, exc: Exception, error_id: UUID | None = None) -> None:
    """Log comprehensive error context for debugging."""
    context = {
        "error_id": str(error_id) if error_id else None,
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client_host": request.client.host if request.client else "unknown",
        "error_type": type(exc).__name__,
        "error_message": str(exc),
    }

    # Add request headers (excluding sensitive ones)
    safe_headers = {
        k: v for k, v in request.headers.items() if k.lower() not in ["authorization", "cookie", "x-api-key"]
    }
    context["headers"] = safe_headers

    logger.error("Request failed", extra=context, exc_info=exc)
