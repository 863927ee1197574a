"""
Shared Pydantic schemas used across the application.
"""

from typing import Any, Literal

from pydantic import BaseModel, EmailStr, Field


# =============================================================================
# Common Types
# =============================================================================

Role = Literal["admin", "user"]


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class UserInfo(BaseModel):
    """Basic user information included in auth responses."""

    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: Role


class LoginResponse(BaseModel):
    """Login response with JWT token."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserInfo


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response body."""

    status: Literal["error"] = "error"
    code: str
    message: str
    detail: str
    details: Any = None
    path: str
    timestamp: str
