"""
Centralized constants for the backend application.

Usage:
    from shared.config.constants import Roles, Limits

    if ctx["role"] == Roles.ADMIN:
        ...
"""

from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants."""

    ADMIN: Final[str] = "admin"
    USER: Final[str] = "user"

    ALL: Final[list[str]] = [ADMIN, USER]


# =============================================================================
# Category tree
# =============================================================================


class CategoryLevel:
    """Depth of a category in the two-level tree."""

    PARENT: Final[int] = 0
    CHILD: Final[int] = 1

    MAX: Final[int] = CHILD


# =============================================================================
# Validation limits
# =============================================================================


class Limits:
    """Validation limits."""

    # Pagination
    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 200

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 255
    MAX_DESCRIPTION_LENGTH: Final[int] = 5000
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100
    MAX_SKU_LENGTH: Final[int] = 100
    MAX_SLUG_LENGTH: Final[int] = 200

    # Bulk operations
    MAX_BULK_IDS: Final[int] = 1000

    # Catalog markup
    DEFAULT_MARKUP_PERCENTAGE: Final[int] = 50
