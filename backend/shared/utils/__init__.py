"""
Utilities module: Exceptions, validators, schemas.
"""

from shared.utils.exceptions import (
    AppException,
    BadRequestError,
    ValidationError,
    DuplicateEntityError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    InternalError,
    DatabaseError,
)
from shared.utils.validators import (
    validate_image_url,
    escape_like_pattern,
    sanitize_search_term,
    slugify,
)
from shared.utils.schemas import ErrorResponse

__all__ = [
    # exceptions
    "AppException",
    "BadRequestError",
    "ValidationError",
    "DuplicateEntityError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
    "DatabaseError",
    # validators
    "validate_image_url",
    "escape_like_pattern",
    "sanitize_search_term",
    "slugify",
    # schemas
    "ErrorResponse",
]
