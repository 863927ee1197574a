"""
Rate limiting utilities using slowapi.
Protects the login endpoint from credential stuffing.

Usage:
    from shared.security.rate_limit import limiter

    @router.post("/login")
    @limiter.limit(settings.login_rate_limit_string)
    def login(request: Request, body: LoginRequest): ...
"""

from datetime import datetime, timezone

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shared.config.logging import get_logger, mask_email
from shared.config.settings import settings
from shared.utils.exceptions import ErrorCode

logger = get_logger(__name__)

# Limiter keyed by client IP; disabled entirely when RATE_LIMIT_ENABLED=false
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def set_rate_limit_email(request: Request, email: str) -> None:
    """Remember the login email on the request so limit violations can be logged."""
    request.state.rate_limit_email = email


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Custom handler for rate limit exceeded errors.
    Returns the standard error body with retry information.
    """
    email = getattr(request.state, "rate_limit_email", None)
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        client=get_remote_address(request),
        email=mask_email(email) if email else None,
        limit=str(exc.detail),
    )
    message = "Too many requests. Please try again later."
    return JSONResponse(
        status_code=429,
        content={
            "status": "error",
            "code": ErrorCode.RATE_LIMIT_EXCEEDED,
            "message": message,
            "detail": message,
            "details": {"limit": str(exc.detail)},
            "path": request.url.path,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        headers={"Retry-After": str(settings.login_rate_window)},
    )
