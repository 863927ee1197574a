"""
Visibility Cascade Engine.

Propagates a visibility change from a parent entity to everything below it
and reports how many rows were written:

    Supplier --(deactivation only)--> Catalogs --> Products
    Catalog  --(activate/deactivate)--> Products
    Category (level 0) --> child Categories --> their Products
    Category (any level) --> its own Products

Rules:
- Parent rows are written (flushed) before their dependents.
- Writes are unconditional: re-applying the same state rewrites and recounts
  the same rows, so the end state is idempotent but the counts are not zero.
- Inactive children are included, so re-activating a category or catalog
  brings back everything below it. Supplier re-activation does not cascade.
- The cascade_* entry points run as one transaction. The apply_* methods only
  flush, so services can join them to a larger transaction (update + cascade).

Usage:
    engine = VisibilityCascadeService(db)
    result = engine.cascade_category_visibility(category_id, is_active=False)
    result.products_updated, result.subcategories_updated
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from rest_api.models import Catalog, Category, Supplier
from rest_api.repositories import CatalogRepository, CategoryRepository, ProductRepository, SupplierRepository
from rest_api.services.base_service import transactional
from rest_api.services.crud.soft_delete import audit_values, set_updated_by
from shared.config.constants import CategoryLevel
from shared.config.logging import cascade_logger as logger
from shared.utils.exceptions import NotFoundError


@dataclass
class CategoryVisibilityResult:
    """Outcome of a category visibility change."""

    category: Category
    products_updated: int
    subcategories_updated: int
    cascaded: bool


@dataclass
class SupplierCascadeResult:
    """Outcome of a supplier deactivation."""

    catalogs_updated: int
    products_updated: int


class VisibilityCascadeService:
    """Computes the dependency closure of a visibility change and applies it."""

    def __init__(self, db: Session):
        self._db = db
        self._categories = CategoryRepository(db)
        self._products = ProductRepository(db)
        self._catalogs = CatalogRepository(db)
        self._suppliers = SupplierRepository(db)

    # =========================================================================
    # Category
    # =========================================================================

    def cascade_category_visibility(
        self,
        category_id: int,
        is_active: bool,
        cascade: bool = True,
        user_id: int | None = None,
        user_email: str | None = None,
    ) -> CategoryVisibilityResult:
        """
        Show or hide a category and, when cascade is set and the category is
        top-level, every child category and all of their products.

        Raises:
            NotFoundError: If the category does not exist (hidden ones included).
            InternalError: If any write fails; nothing is persisted.
        """
        category = self._categories.find_by_id(category_id, include_inactive=True)
        if category is None:
            raise NotFoundError("Category", category_id)

        with transactional(
            self._db,
            "update category visibility",
            "Category",
            category_id=category_id,
            is_active=is_active,
        ):
            result = self.apply_category_visibility(category, is_active, cascade, user_id, user_email)

        logger.info(
            "Category visibility changed",
            category_id=category_id,
            is_active=is_active,
            cascade=cascade,
            category_level=category.level,
            subcategories_updated=result.subcategories_updated,
            products_updated=result.products_updated,
            user_id=user_id,
        )
        return result

    def apply_category_visibility(
        self,
        category: Category,
        is_active: bool,
        cascade: bool = True,
        user_id: int | None = None,
        user_email: str | None = None,
    ) -> CategoryVisibilityResult:
        """Write the category change and its closure without committing."""
        audit = audit_values(user_id, user_email)

        set_updated_by(category, user_id, user_email)
        self._categories.update(category, {"is_active": is_active})

        subcategories_updated = 0
        products_updated = 0

        if cascade and category.level == CategoryLevel.PARENT:
            for child in self._categories.find_children(category.id, include_inactive=True):
                set_updated_by(child, user_id, user_email)
                self._categories.update(child, {"is_active": is_active})
                subcategories_updated += 1
                products_updated += self._products.bulk_update_category_products(
                    child.id, is_active, **audit
                )

        # Products owned directly by the target always follow it
        products_updated += self._products.bulk_update_category_products(
            category.id, is_active, **audit
        )

        return CategoryVisibilityResult(
            category=category,
            products_updated=products_updated,
            subcategories_updated=subcategories_updated,
            cascaded=cascade,
        )

    # =========================================================================
    # Supplier
    # =========================================================================

    def cascade_supplier_deactivation(
        self,
        supplier_id: int,
        user_id: int | None = None,
        user_email: str | None = None,
    ) -> SupplierCascadeResult:
        """
        Deactivate a supplier, all of its catalogs and all of their products.

        Raises:
            NotFoundError: If the supplier does not exist.
        """
        supplier = self._suppliers.find_by_id(supplier_id, include_inactive=True)
        if supplier is None:
            raise NotFoundError("Supplier", supplier_id)

        with transactional(self._db, "deactivate supplier", "Supplier", supplier_id=supplier_id):
            set_updated_by(supplier, user_id, user_email)
            self._suppliers.update(supplier, {"is_active": False})
            result = self.apply_supplier_deactivation(supplier, user_id, user_email)

        return result

    def apply_supplier_deactivation(
        self,
        supplier: Supplier,
        user_id: int | None = None,
        user_email: str | None = None,
    ) -> SupplierCascadeResult:
        """
        Deactivate every catalog of the supplier (active or not) and their products.

        Reactivating a supplier does not cascade; catalogs are re-enabled one by one.
        """
        audit = audit_values(user_id, user_email)
        catalogs_updated = 0
        products_updated = 0

        for catalog in self._catalogs.find_by_supplier(supplier.id, active_only=False):
            set_updated_by(catalog, user_id, user_email)
            self._catalogs.update(catalog, {"is_active": False})
            catalogs_updated += 1
            products_updated += self._products.bulk_update_catalog_products(
                catalog.id, {"is_active": False, **audit}
            )

        logger.info(
            "Supplier deactivation cascaded",
            supplier_id=supplier.id,
            catalogs_updated=catalogs_updated,
            products_updated=products_updated,
            user_id=user_id,
        )
        return SupplierCascadeResult(catalogs_updated=catalogs_updated, products_updated=products_updated)

    # =========================================================================
    # Catalog
    # =========================================================================

    def cascade_catalog_status_change(
        self,
        catalog_id: int,
        is_active: bool,
        user_id: int | None = None,
        user_email: str | None = None,
    ) -> int:
        """
        Set a catalog's status and make every product of the catalog follow it.

        Returns:
            Number of products updated.
        """
        catalog = self._catalogs.find_by_id(catalog_id, include_inactive=True)
        if catalog is None:
            raise NotFoundError("Catalog", catalog_id)

        with transactional(
            self._db,
            "update catalog status",
            "Catalog",
            catalog_id=catalog_id,
            is_active=is_active,
        ):
            set_updated_by(catalog, user_id, user_email)
            self._catalogs.update(catalog, {"is_active": is_active})
            products_updated = self.apply_catalog_status_change(catalog, is_active, user_id, user_email)

        return products_updated

    def apply_catalog_status_change(
        self,
        catalog: Catalog,
        is_active: bool,
        user_id: int | None = None,
        user_email: str | None = None,
    ) -> int:
        """Bulk-update the products of an already written catalog, without committing."""
        products_updated = self._products.bulk_update_catalog_products(
            catalog.id, {"is_active": is_active, **audit_values(user_id, user_email)}
        )
        logger.info(
            "Catalog status cascaded",
            catalog_id=catalog.id,
            is_active=is_active,
            products_updated=products_updated,
            user_id=user_id,
        )
        return products_updated
