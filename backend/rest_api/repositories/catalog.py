"""
Catalog and Supplier Repositories.
"""

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import joinedload

from rest_api.models import Catalog, Supplier
from shared.utils.validators import escape_like_pattern
from .base import BaseRepository, RepositoryFilters


@dataclass
class CatalogFilters(RepositoryFilters):
    """Filters specific to catalogs."""

    supplier_id: int | None = None


class CatalogRepository(BaseRepository[Catalog]):
    """
    Repository for Catalog entities.

    Guarantees eager loading of:
    - supplier (name is shown next to every catalog)
    """

    @property
    def model(self) -> type[Catalog]:
        return Catalog

    def _base_query(self) -> Select:
        return (
            select(Catalog)
            .options(joinedload(Catalog.supplier))
            .order_by(Catalog.name, Catalog.id)
        )

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply catalog-specific filters. Search matches name, description and supplier name."""
        if not isinstance(filters, CatalogFilters):
            filters = CatalogFilters(**filters.__dict__)

        if filters.supplier_id is not None:
            query = query.where(Catalog.supplier_id == filters.supplier_id)

        if filters.search:
            search_term = f"%{escape_like_pattern(filters.search)}%"
            query = query.outerjoin(Supplier, Catalog.supplier_id == Supplier.id).where(
                or_(
                    Catalog.name.ilike(search_term, escape="\\"),
                    Catalog.description.ilike(search_term, escape="\\"),
                    Supplier.name.ilike(search_term, escape="\\"),
                )
            )

        return query

    def find_by_supplier(self, supplier_id: int, active_only: bool = False) -> Sequence[Catalog]:
        """Catalogs of a supplier. All of them unless active_only is set."""
        query = self._base_query().where(Catalog.supplier_id == supplier_id)
        query = self._active_only(query, include_inactive=not active_only)
        return self._db.execute(query).scalars().unique().all()

    def find_by_name_for_supplier(self, supplier_id: int | None, name: str) -> Catalog | None:
        """Case-insensitive lookup of a catalog name within one supplier."""
        query = select(Catalog).where(func.lower(Catalog.name) == name.strip().lower())
        if supplier_id is None:
            query = query.where(Catalog.supplier_id.is_(None))
        else:
            query = query.where(Catalog.supplier_id == supplier_id)
        return self._db.scalar(query.limit(1))


class SupplierRepository(BaseRepository[Supplier]):
    """Repository for Supplier entities."""

    @property
    def model(self) -> type[Supplier]:
        return Supplier

    def _base_query(self) -> Select:
        return select(Supplier).order_by(Supplier.name, Supplier.id)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if filters.search:
            search_term = f"%{escape_like_pattern(filters.search)}%"
            query = query.where(
                or_(
                    Supplier.name.ilike(search_term, escape="\\"),
                    Supplier.contact_name.ilike(search_term, escape="\\"),
                )
            )
        return query
