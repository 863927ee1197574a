"""
Soft delete and audit-field helpers shared by all services.

Provides functions to:
- Soft delete entities (set is_active=False with audit trail)
- Set created_by/updated_by audit fields on ORM entities
- Build the audit column values for bulk UPDATE statements
"""

from typing import Any, TypeVar

from sqlalchemy.orm import Session

from rest_api.models import AuditMixin


T = TypeVar("T", bound=AuditMixin)


def soft_delete(
    db: Session,
    entity: T,
    user_id: int | None,
    user_email: str | None,
    commit: bool = True,
) -> T:
    """
    Perform soft delete on an entity with audit trail.

    With commit=False the change is only flushed so it can join a larger
    transaction (for example a visibility cascade).
    """
    entity.soft_delete(user_id, user_email)
    if not commit:
        db.flush()
        return entity
    try:
        db.commit()
        db.refresh(entity)
    except Exception:
        db.rollback()
        raise
    return entity


def set_created_by(entity: T, user_id: int | None, user_email: str | None) -> T:
    """Set created_by fields on a new entity."""
    entity.set_created_by(user_id, user_email)
    return entity


def set_updated_by(entity: T, user_id: int | None, user_email: str | None) -> T:
    """Set updated_by fields on an entity being updated."""
    entity.set_updated_by(user_id, user_email)
    return entity


def audit_values(user_id: int | None, user_email: str | None) -> dict[str, Any]:
    """Audit columns to include in a bulk UPDATE (updated_at is set by the column's onupdate)."""
    return {"updated_by_id": user_id, "updated_by_email": user_email}
