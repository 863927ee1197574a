"""
Security middlewares for the FastAPI application.
Implements security headers and content-type validation.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware
from rest_api.core.exception_handlers import error_body


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add security headers to all responses.

    Headers added:
    - X-Content-Type-Options: nosniff
    - X-Frame-Options: DENY
    - Referrer-Policy: strict-origin-when-cross-origin
    - Permissions-Policy: disable dangerous browser features
    - Content-Security-Policy: the API serves JSON only
    - Strict-Transport-Security: production only
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


class ContentTypeValidationMiddleware(BaseHTTPMiddleware):
    """
    Validate Content-Type for requests with body.

    POST/PUT/PATCH requests that declare a content type must use
    application/json. Returns 415 Unsupported Media Type otherwise.
    """

    METHODS_WITH_BODY = {"POST", "PUT", "PATCH"}

    async def dispatch(self, request: Request, call_next):
        if request.method in self.METHODS_WITH_BODY:
            content_type = request.headers.get("content-type", "")
            if content_type and not content_type.startswith("application/json"):
                return JSONResponse(
                    status_code=415,
                    content=error_body(
                        request,
                        "UNSUPPORTED_MEDIA_TYPE",
                        "Unsupported Media Type. Use application/json",
                    ),
                )
        return await call_next(request)


def register_middlewares(app: FastAPI) -> None:
    """
    Register all middlewares on the FastAPI application.

    Order matters: middlewares are executed in reverse order of registration.
    CorrelationId runs first so every later log line carries the request ID.
    """
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ContentTypeValidationMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
