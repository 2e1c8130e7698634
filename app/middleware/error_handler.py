"""Exception handlers rendering every error as ``{error, message, path}``."""

from typing import Any

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException

logger = structlog.get_logger()


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: Any,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    """Build the JSON error envelope shared by all handlers."""
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, **extra, "path": str(request.url)},
        headers=headers,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render application exceptions with their own status and headers."""
    return error_response(
        request, exc.status_code, exc.__class__.__name__, exc.message, headers=exc.headers
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """
    Handle uniqueness, foreign key, NOT NULL and enumeration violations.

    The database message is logged, never returned to the caller.

    Args:
        request: Request object
        exc: Integrity error raised by the database

    Returns:
        409 JSON error response
    """
    logger.warning(
        "constraint_violation",
        path=request.url.path,
        error=str(exc.orig) if exc.orig is not None else str(exc),
    )
    return error_response(
        request,
        status.HTTP_409_CONFLICT,
        "ConstraintViolation",
        "The request conflicts with existing data",
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Render framework and endpoint HTTP errors."""
    return error_response(
        request,
        exc.status_code,
        "HTTPException",
        exc.detail,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle request validation errors.

    Args:
        request: Request object
        exc: Validation exception

    Returns:
        422 JSON error response with per-field details
    """
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "ValidationError",
        "Request validation failed",
        details=jsonable_errors(exc),
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Strip non-serializable context (e.g. ValueError instances) from errors."""
    errors = []
    for error in exc.errors():
        cleaned = {key: value for key, value in error.items() if key != "ctx"}
        if "ctx" in error:
            cleaned["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        errors.append(cleaned)
    return errors


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected exceptions and answer 500."""
    logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalServerError",
        "An unexpected error occurred",
    )
