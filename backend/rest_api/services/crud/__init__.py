"""
CRUD helpers - soft delete and audit trail utilities.
"""

from .soft_delete import (
    soft_delete,
    set_created_by,
    set_updated_by,
    audit_values,
)

__all__ = [
    "soft_delete",
    "set_created_by",
    "set_updated_by",
    "audit_values",
]
