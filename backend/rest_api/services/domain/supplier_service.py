"""
Supplier Service.

Business rules:
- New suppliers default to the configured country
- Deactivating a supplier (update with is_active=false, or delete) deactivates
  all of its catalogs and their products in the same transaction
- Reactivating a supplier does not touch its catalogs
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Supplier
from rest_api.repositories import SupplierRepository
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.domain.visibility_cascade import VisibilityCascadeService
from shared.config.settings import settings
from shared.utils.admin_schemas import SupplierOutput, SupplierUpdateOutput


class SupplierService(BaseCRUDService[Supplier, SupplierOutput]):
    """Service for supplier management."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=SupplierRepository(db),
            output_schema=SupplierOutput,
            entity_name="Supplier",
        )
        self._cascade = VisibilityCascadeService(db)

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        if not data.get("country"):
            data["country"] = settings.default_country
        return data

    def _after_update(
        self,
        entity: Supplier,
        data: dict[str, Any],
        user_id: int | None,
        user_email: str | None,
    ) -> dict[str, Any]:
        # Deactivation cascades whatever the previous state was; activation never does
        if data.get("is_active") is False:
            result = self._cascade.apply_supplier_deactivation(entity, user_id, user_email)
            return {
                "catalogs_updated": result.catalogs_updated,
                "products_updated": result.products_updated,
            }
        return {}

    def _after_delete(
        self,
        entity: Supplier,
        user_id: int | None,
        user_email: str | None,
    ) -> dict[str, Any]:
        result = self._cascade.apply_supplier_deactivation(entity, user_id, user_email)
        return {
            "catalogs_updated": result.catalogs_updated,
            "products_updated": result.products_updated,
        }

    def _update_output(self, entity: Supplier, extra: dict[str, Any]) -> SupplierUpdateOutput:
        return SupplierUpdateOutput.model_validate(entity).model_copy(update=extra)
