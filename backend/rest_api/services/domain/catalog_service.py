"""
Catalog Service.

Business rules:
- A catalog may belong to a supplier; the supplier must exist
- Catalog names are unique per supplier, ignoring case
- Any status change in an update (activate or deactivate) is applied to every
  product of the catalog in the same transaction
- Deleting a catalog hides all of its products
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Catalog
from rest_api.repositories import CatalogFilters, CatalogRepository, SupplierRepository
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.domain.visibility_cascade import VisibilityCascadeService
from shared.config.constants import Limits
from shared.utils.admin_schemas import CatalogOutput, CatalogUpdateOutput
from shared.utils.exceptions import DuplicateEntityError, ValidationError
from shared.utils.validators import sanitize_search_term


class CatalogService(BaseCRUDService[Catalog, CatalogOutput]):
    """Service for catalog management."""

    def __init__(self, db: Session):
        self._catalogs = CatalogRepository(db)
        super().__init__(
            db=db,
            repo=self._catalogs,
            output_schema=CatalogOutput,
            entity_name="Catalog",
        )
        self._suppliers = SupplierRepository(db)
        self._cascade = VisibilityCascadeService(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def search(
        self,
        *,
        active_only: bool = False,
        supplier_id: int | None = None,
        q: str | None = None,
        limit: int = Limits.MAX_PAGE_SIZE,
        offset: int = 0,
    ) -> list[CatalogOutput]:
        """List catalogs; q matches catalog name, description or supplier name."""
        filters = CatalogFilters(
            include_inactive=not active_only,
            supplier_id=supplier_id,
            search=sanitize_search_term(q) or None,
            limit=limit,
            offset=offset,
        )
        return self.list_all(filters)

    def list_by_supplier(self, supplier_id: int, *, active_only: bool = False) -> list[CatalogOutput]:
        return [self.to_output(c) for c in self._catalogs.find_by_supplier(supplier_id, active_only)]

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _check_supplier(self, supplier_id: int | None) -> None:
        if supplier_id is not None and self._suppliers.find_by_id(supplier_id, include_inactive=True) is None:
            raise ValidationError(f"Supplier {supplier_id} does not exist", field="supplier_id")

    def _check_unique_name(self, supplier_id: int | None, name: str, exclude_id: int | None = None) -> None:
        existing = self._catalogs.find_by_name_for_supplier(supplier_id, name)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateEntityError("Catalog", name, supplier_id=supplier_id)

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._check_supplier(data.get("supplier_id"))
        self._check_unique_name(data.get("supplier_id"), data["name"])

    def _validate_update(self, entity: Catalog, data: dict[str, Any]) -> None:
        supplier_id = data.get("supplier_id", entity.supplier_id)
        if "supplier_id" in data:
            self._check_supplier(supplier_id)
        if "name" in data or "supplier_id" in data:
            self._check_unique_name(supplier_id, data.get("name", entity.name), exclude_id=entity.id)

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def _after_update(
        self,
        entity: Catalog,
        data: dict[str, Any],
        user_id: int | None,
        user_email: str | None,
    ) -> dict[str, Any]:
        if "is_active" in data:
            products_updated = self._cascade.apply_catalog_status_change(
                entity, data["is_active"], user_id, user_email
            )
            return {"products_updated": products_updated}
        return {}

    def _after_delete(
        self,
        entity: Catalog,
        user_id: int | None,
        user_email: str | None,
    ) -> dict[str, Any]:
        products_updated = self._cascade.apply_catalog_status_change(entity, False, user_id, user_email)
        return {"products_updated": products_updated}

    def _update_output(self, entity: Catalog, extra: dict[str, Any]) -> CatalogUpdateOutput:
        return CatalogUpdateOutput.model_validate(entity).model_copy(update=extra)
