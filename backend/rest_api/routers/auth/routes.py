"""
Authentication router.
Handles login and current-user lookup for back-office users.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.config.logging import auth_logger as logger, mask_email
from shared.config.settings import settings
from shared.security.auth import current_user_context, sign_jwt
from shared.security.password import verify_password
from shared.security.rate_limit import limiter, set_rate_limit_email
from shared.utils.exceptions import UnauthorizedError
from shared.utils.schemas import LoginRequest, LoginResponse, UserInfo
from rest_api.repositories import UserRepository


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit_string)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Authenticate a back-office user and return an access token.

    The access token contains:
    - sub: user ID
    - email: user's email
    - role: "admin" or "user"

    Rate limited per client IP to slow down credential stuffing.
    """
    set_rate_limit_email(request, body.email)

    user = UserRepository(db).find_by_email(body.email)

    if not user:
        logger.warning("LOGIN_FAILED: User not found", email=mask_email(body.email))
        raise UnauthorizedError("Invalid email or password")

    if not verify_password(body.password, user.password):
        logger.warning("LOGIN_FAILED: Invalid password", email=mask_email(body.email), user_id=user.id)
        raise UnauthorizedError("Invalid email or password")

    access_token = sign_jwt({
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
    })

    logger.info("LOGIN_SUCCESS", email=mask_email(user.email), user_id=user.id, role=user.role)

    return LoginResponse(
        access_token=access_token,
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=UserInfo(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
        ),
    )


@router.get("/me")
def me(ctx: dict[str, Any] = Depends(current_user_context)) -> dict[str, Any]:
    """Claims of the current access token."""
    return {
        "id": int(ctx["sub"]),
        "email": ctx.get("email"),
        "role": ctx["role"],
    }
