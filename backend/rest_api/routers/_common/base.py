"""
Helpers for reading the authenticated user out of the JWT context.
"""

from typing import Any


def get_user_id(user: dict[str, Any]) -> int | None:
    """Get user ID from context, handling string format."""
    sub = user.get("sub")
    if sub is None:
        return None
    return int(sub) if isinstance(sub, str) else sub


def get_user_email(user: dict[str, Any]) -> str | None:
    return user.get("email")
