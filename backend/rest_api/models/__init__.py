"""
SQLAlchemy ORM Models Package.

Models are organized into domain-specific modules:
- base: Base class, AuditMixin, IdType
- catalog: Supplier, Catalog, Category, Product
- user: User
"""

from .base import Base, AuditMixin, IdType
from .catalog import Supplier, Catalog, Category, Product
from .user import User

__all__ = [
    "Base",
    "AuditMixin",
    "IdType",
    "Supplier",
    "Catalog",
    "Category",
    "Product",
    "User",
]
