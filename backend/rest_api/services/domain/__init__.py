"""
Domain Services - application layer.

Services contain business logic and orchestrate operations.
They use Repositories for data access and the cascade engine for
visibility propagation.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import CategoryService

    service = CategoryService(db)
    result = service.set_visibility(category_id, False, True, user_id, user_email)
"""

from .visibility_cascade import (
    VisibilityCascadeService,
    CategoryVisibilityResult,
    SupplierCascadeResult,
)
from .supplier_service import SupplierService
from .catalog_service import CatalogService
from .category_service import CategoryService
from .product_service import ProductService

__all__ = [
    "VisibilityCascadeService",
    "CategoryVisibilityResult",
    "SupplierCascadeResult",
    "SupplierService",
    "CatalogService",
    "CategoryService",
    "ProductService",
]
