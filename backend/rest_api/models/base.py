"""
Base class and AuditMixin for all SQLAlchemy ORM models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

# BIGINT primary keys on PostgreSQL; SQLite only autoincrements INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class AuditMixin:
    """
    Mixin providing soft delete, audit trail and optimistic locking fields.

    Fields added:
    - is_active: Visibility / soft delete flag (False = hidden or deleted)
    - created_at, updated_at, deleted_at: Audit timestamps
    - created_by_id/email, updated_by_id/email, deleted_by_id/email: User tracking
    - version: Row version; a concurrent ORM write to the same row raises StaleDataError

    Methods:
    - soft_delete(user_id, user_email): Mark entity as deleted
    """

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), nullable=True
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # User tracking - ID and email are denormalized, no FK to app_user
    created_by_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    created_by_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    updated_by_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    updated_by_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    deleted_by_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    deleted_by_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    @declared_attr.directive
    def __mapper_args__(cls) -> dict[str, Any]:
        return {"version_id_col": cls.version}

    def soft_delete(self, user_id: int | None, user_email: str | None) -> None:
        """Perform soft delete with audit trail."""
        self.is_active = False
        self.deleted_at = datetime.now(timezone.utc)
        self.deleted_by_id = user_id
        self.deleted_by_email = user_email

    def set_created_by(self, user_id: int | None, user_email: str | None) -> None:
        """Set created_by fields on new entity."""
        self.created_by_id = user_id
        self.created_by_email = user_email

    def set_updated_by(self, user_id: int | None, user_email: str | None) -> None:
        """Set updated_by fields on entity update."""
        self.updated_by_id = user_id
        self.updated_by_email = user_email
        self.updated_at = datetime.now(timezone.utc)

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        id_val = getattr(self, "id", None)
        active = "active" if self.is_active else "inactive"
        return f"<{class_name}(id={id_val}, {active})>"
