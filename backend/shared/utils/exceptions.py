"""
Centralized HTTP exceptions for consistent error handling.

Every exception logs itself on construction and carries a machine-readable
``code`` plus optional ``details`` that the centralized error formatter
(rest_api.core.exception_handlers) renders into the response body.

Usage:
    from shared.utils.exceptions import NotFoundError, ForbiddenError, ValidationError

    raise NotFoundError("Category", category_id)
    raise ForbiddenError("update suppliers")
    raise ValidationError("price must be positive", field="price")
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class ErrorCode:
    """Error codes returned in the ``code`` field of error responses."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    RESOURCE_EXISTS = "RESOURCE_EXISTS"
    RESOURCE_CONFLICT = "RESOURCE_CONFLICT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        code: str = ErrorCode.UNKNOWN_ERROR,
        details: Any = None,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, code=code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.details = details


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class BadRequestError(AppException):
    """
    Malformed request (400).

    Usage:
        raise BadRequestError("Invalid category ID")
    """

    def __init__(self, detail: str = "Invalid request data provided", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code=ErrorCode.BAD_REQUEST,
            **log_context,
        )


class ValidationError(AppException):
    """
    Input validation error (400) with field-level detail.

    Usage:
        raise ValidationError("Category nesting is limited to two levels", field="parent_id")
        raise ValidationError("Invalid request body", errors=[{"field": "isActive", "message": "..."}])
    """

    def __init__(
        self,
        detail: str,
        field: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **log_context: Any,
    ):
        if errors is None and field is not None:
            errors = [{"field": field, "message": detail}]

        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code=ErrorCode.VALIDATION_ERROR,
            details={"errors": errors} if errors else None,
            field=field,
            **log_context,
        )


class DuplicateEntityError(AppException):
    """Entity with the same identifying value already exists (400)."""

    def __init__(self, entity: str, identifier: str | None = None, **log_context: Any):
        if identifier:
            detail = f"A {entity.lower()} with identifier '{identifier}' already exists"
        else:
            detail = f"{entity} already exists"

        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code=ErrorCode.RESOURCE_EXISTS,
            details={"resource_type": entity, "identifier": identifier},
            entity=entity,
            **log_context,
        )


# =============================================================================
# 401 / 403 Errors
# =============================================================================


class UnauthorizedError(AppException):
    """Authentication required or token invalid (401)."""

    def __init__(self, detail: str = "Authentication required to access this resource", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            code=ErrorCode.UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("update categories")
    """

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not authorized to {action}"
        else:
            detail = "You do not have permission to access this resource"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            code=ErrorCode.FORBIDDEN,
            action=action,
            **log_context,
        )


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Product", 123)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code=ErrorCode.NOT_FOUND,
            details={"resource_type": entity},
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Raised when a row was modified by a concurrent request between read and write.
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            code=ErrorCode.RESOURCE_CONFLICT,
            **log_context,
        )


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    The message returned to the client stays generic; the context passed as
    keyword arguments only reaches the server log.
    """

    def __init__(self, detail: str = "An unexpected error occurred", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            code=ErrorCode.INTERNAL_SERVER_ERROR,
            log_level="error",
            **log_context,
        )


class DatabaseError(AppException):
    """Database operation failed (500)."""

    def __init__(self, operation: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database error while trying to {operation}. Please try again.",
            code=ErrorCode.DATABASE_ERROR,
            log_level="error",
            operation=operation,
            **log_context,
        )
