"""
Authentication and authorization utilities.
Handles JWT access tokens for back-office users.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import jwt
from fastapi import Depends, Header

from shared.config.constants import Roles
from shared.config.settings import JWT_SECRET, JWT_ISSUER, JWT_AUDIENCE, settings
from shared.config.logging import auth_logger as logger
from shared.utils.exceptions import ForbiddenError, UnauthorizedError


# =============================================================================
# JWT Functions
# =============================================================================


def sign_jwt(payload: dict[str, Any], ttl_seconds: int | None = None) -> str:
    """
    Sign a JWT token with the given payload.

    Args:
        payload: Claims to include in the token (sub, email, role).
        ttl_seconds: Token lifetime in seconds. Defaults to access token expiry.

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": "access",
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Verify and decode a JWT token.

    Returns:
        Decoded token claims.

    Raises:
        UnauthorizedError: If token is invalid, expired or missing required claims.
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=["HS256"],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as e:
        # Generic message to the client, real reason in the log
        logger.warning("JWT validation failed", error=str(e))
        raise UnauthorizedError("Invalid token")

    if "sub" not in payload:
        raise UnauthorizedError("Invalid token: missing subject claim")

    try:
        int(payload["sub"])
    except (ValueError, TypeError):
        raise UnauthorizedError("Invalid token: malformed subject claim")

    if payload.get("role") not in Roles.ALL:
        raise UnauthorizedError("Invalid token: invalid role claim")

    return payload


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        UnauthorizedError: If header is missing or malformed.
    """
    if not authorization:
        raise UnauthorizedError("Missing Authorization header")
    if not authorization.startswith("Bearer "):
        raise UnauthorizedError("Invalid Authorization header format. Expected: Bearer <token>")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise UnauthorizedError("Missing bearer token")
    return token


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency to get the current user context from JWT.

    Usage:
        @router.get("/me")
        def me(ctx: dict = Depends(current_user_context)):
            user_id = int(ctx["sub"])

    Returns:
        Dict with: sub (user_id), email, role
    """
    token = get_bearer_token(authorization)
    return verify_jwt(token)


def require_admin(user: dict[str, Any] = Depends(current_user_context)) -> dict[str, Any]:
    """
    Dependency that requires the admin role.

    Applied at router level so every route in an admin group is guarded:
        admin_router = APIRouter(dependencies=[Depends(require_admin)])
    """
    if user.get("role") != Roles.ADMIN:
        raise ForbiddenError("perform admin operations", user_id=user.get("sub"))
    return user


def is_admin_request(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> bool:
    """
    True when the request carries a valid admin token.

    Anonymous requests get False. A token that is present but invalid is
    still rejected with 401.
    """
    if authorization is None:
        return False
    return verify_jwt(get_bearer_token(authorization)).get("role") == Roles.ADMIN
