"""
Centralized error formatting.

Every error leaves the API with the same body:

    {"status": "error", "code": "...", "message": "...", "detail": "...",
     "details": {...}, "path": "/api/...", "timestamp": "..."}

"details" is omitted when there is nothing to add.
"""

from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config.logging import rest_api_logger as logger
from shared.security.rate_limit import rate_limit_exceeded_handler
from shared.utils.exceptions import AppException, ErrorCode


# Codes for plain HTTPExceptions raised by FastAPI/Starlette themselves
STATUS_CODES: dict[int, str] = {
    400: ErrorCode.BAD_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.RESOURCE_CONFLICT,
    429: ErrorCode.RATE_LIMIT_EXCEEDED,
    500: ErrorCode.INTERNAL_SERVER_ERROR,
}


def error_body(
    request: Request,
    code: str,
    message: str,
    details: Any = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "status": "error",
        "code": code,
        "message": message,
        "detail": message,
        "path": request.url.path,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if details is not None:
        body["details"] = details
    return body


def _field_name(loc: tuple) -> str:
    # ("body", "productIds", 0) -> "productIds.0"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "body"


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.code, str(exc.detail), exc.details),
        headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = STATUS_CODES.get(exc.status_code, ErrorCode.UNKNOWN_ERROR)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures are 400 with one entry per offending field."""
    errors = [
        {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    logger.info("Request validation failed", path=request.url.path, errors=errors)
    message = "Invalid request data: " + "; ".join(f"{e['field']}: {e['message']}" for e in errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(request, ErrorCode.VALIDATION_ERROR, message, {"errors": errors}),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything not mapped above: log with traceback, answer with a generic 500."""
    logger.error(
        "Unhandled error",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(request, ErrorCode.INTERNAL_SERVER_ERROR, "An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error formatters on the application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
