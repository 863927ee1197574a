"""
Product Repository - Data access for products, including the bulk status
writes used by the visibility cascades.
"""

from dataclasses import dataclass
from typing import Any, Sequence

from sqlalchemy import Select, or_, select

from rest_api.models import Product
from shared.utils.validators import escape_like_pattern
from .base import BaseRepository, RepositoryFilters


@dataclass
class ProductFilters(RepositoryFilters):
    """Filters specific to products."""

    category_id: int | None = None
    catalog_id: int | None = None
    is_featured: bool | None = None


class ProductRepository(BaseRepository[Product]):
    """Repository for Product entities."""

    @property
    def model(self) -> type[Product]:
        return Product

    def _base_query(self) -> Select:
        return select(Product).order_by(Product.display_order, Product.id)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply product-specific filters."""
        if not isinstance(filters, ProductFilters):
            filters = ProductFilters(**filters.__dict__)

        if filters.category_id is not None:
            query = query.where(Product.category_id == filters.category_id)

        if filters.catalog_id is not None:
            query = query.where(Product.catalog_id == filters.catalog_id)

        if filters.is_featured is not None:
            query = query.where(Product.is_featured.is_(filters.is_featured))

        if filters.search:
            search_term = f"%{escape_like_pattern(filters.search)}%"
            query = query.where(
                or_(
                    Product.name.ilike(search_term, escape="\\"),
                    Product.sku.ilike(search_term, escape="\\"),
                    Product.brand.ilike(search_term, escape="\\"),
                )
            )

        return query

    # =========================================================================
    # Lookups
    # =========================================================================

    def find_by_category(
        self,
        category_id: int,
        limit: int | None = None,
        offset: int = 0,
        include_inactive: bool = False,
    ) -> Sequence[Product]:
        """Products directly owned by a category, paginated when limit is given."""
        query = self._base_query().where(Product.category_id == category_id)
        query = self._active_only(query, include_inactive)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return self._db.execute(query).scalars().all()

    def find_by_slug(self, slug: str) -> Product | None:
        return self._db.scalar(select(Product).where(Product.slug == slug))

    def find_by_sku(self, sku: str) -> Product | None:
        return self._db.scalar(select(Product).where(Product.sku == sku))

    # =========================================================================
    # Bulk writes
    # =========================================================================

    def bulk_update_status(self, product_ids: list[int], is_active: bool, **audit: Any) -> int:
        """
        Set is_active on every product in product_ids.

        Returns:
            Number of rows updated. Unknown IDs are ignored.
        """
        if not product_ids:
            return 0
        return self._bulk_update(
            Product.id.in_(product_ids),
            values={"is_active": is_active, **audit},
        )

    def bulk_update_category_products(self, category_id: int, is_active: bool, **audit: Any) -> int:
        """Set is_active on every product of a category, active or not."""
        return self._bulk_update(
            Product.category_id == category_id,
            values={"is_active": is_active, **audit},
        )

    def bulk_update_catalog_products(self, catalog_id: int, patch: dict[str, Any]) -> int:
        """Apply patch to every product of a catalog, active or not."""
        return self._bulk_update(Product.catalog_id == catalog_id, values=patch)