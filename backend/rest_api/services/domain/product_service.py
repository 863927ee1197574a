"""
Product Service.

Business rules:
- Category and catalog references must exist
- Slugs are generated from the name when not supplied and are unique
- SKUs are unique when present
- A sale price may not exceed the regular price
- Bulk status changes touch exactly the listed products, no cascade
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Product
from rest_api.repositories import (
    CatalogRepository,
    CategoryRepository,
    ProductFilters,
    ProductRepository,
)
from rest_api.services.base_service import BaseCRUDService, transactional, unique_slug
from rest_api.services.crud.soft_delete import audit_values
from shared.config.logging import cascade_logger
from shared.utils.admin_schemas import ProductOutput
from shared.utils.exceptions import BadRequestError, DuplicateEntityError, NotFoundError, ValidationError
from shared.utils.validators import sanitize_search_term, slugify


class ProductService(BaseCRUDService[Product, ProductOutput]):
    """Service for product management."""

    def __init__(self, db: Session):
        self._products = ProductRepository(db)
        super().__init__(
            db=db,
            repo=self._products,
            output_schema=ProductOutput,
            entity_name="Product",
        )
        self._categories = CategoryRepository(db)
        self._catalogs = CatalogRepository(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_paginated(
        self,
        *,
        limit: int,
        offset: int,
        category_id: int | None = None,
        catalog_id: int | None = None,
        include_inactive: bool = False,
        search: str | None = None,
    ) -> tuple[list[ProductOutput], int]:
        """Page of products plus the total matching count."""
        filters = ProductFilters(
            limit=limit,
            offset=offset,
            include_inactive=include_inactive,
            category_id=category_id,
            catalog_id=catalog_id,
            search=sanitize_search_term(search) or None,
        )
        return self.list_all(filters), self.count(filters)

    def list_by_category(
        self,
        category_id: int,
        *,
        limit: int | None = None,
        offset: int = 0,
        include_inactive: bool = False,
    ) -> list[ProductOutput]:
        """
        Products directly owned by a category.

        Raises:
            NotFoundError: If the category does not exist.
        """
        if self._categories.find_by_id(category_id, include_inactive=True) is None:
            raise NotFoundError("Category", category_id)
        products = self._products.find_by_category(
            category_id,
            limit=limit,
            offset=offset,
            include_inactive=include_inactive,
        )
        return [self.to_output(p) for p in products]

    # =========================================================================
    # Bulk status
    # =========================================================================

    def bulk_update_status(
        self,
        product_ids: list[int],
        is_active: bool,
        user_id: int | None,
        user_email: str | None,
    ) -> int:
        """
        Set is_active on the listed products in one statement.

        Returns:
            Number of products actually updated (unknown IDs are not counted).
        """
        if not product_ids:
            raise BadRequestError("productIds must be a non-empty list")
        ids = sorted(set(product_ids))
        with transactional(self._db, "update product status", "Product", product_count=len(ids)):
            count = self._products.bulk_update_status(ids, is_active, **audit_values(user_id, user_email))

        cascade_logger.info(
            "Bulk product status updated",
            requested=len(ids),
            updated=count,
            is_active=is_active,
            user_id=user_id,
        )
        return count

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _check_references(self, data: dict[str, Any]) -> None:
        category_id = data.get("category_id")
        if category_id is not None and self._categories.find_by_id(category_id, include_inactive=True) is None:
            raise ValidationError(f"Category {category_id} does not exist", field="category_id")

        catalog_id = data.get("catalog_id")
        if catalog_id is not None and self._catalogs.find_by_id(catalog_id, include_inactive=True) is None:
            raise ValidationError(f"Catalog {catalog_id} does not exist", field="catalog_id")

    def _check_sku_free(self, sku: str | None, exclude_id: int | None = None) -> None:
        if not sku:
            return
        existing = self._products.find_by_sku(sku)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateEntityError("Product", sku)

    def _check_slug_free(self, slug: str, exclude_id: int | None = None) -> None:
        existing = self._products.find_by_slug(slug)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateEntityError("Product", slug)

    @staticmethod
    def _check_prices(price: float | None, sale_price: float | None) -> None:
        if price is not None and sale_price is not None and sale_price > price:
            raise ValidationError("Sale price cannot exceed the regular price", field="sale_price")

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._check_references(data)
        self._check_sku_free(data.get("sku"))
        self._check_prices(data.get("price"), data.get("sale_price"))

        if data.get("slug"):
            if not slugify(data["slug"]):
                raise ValidationError("Slug must contain letters or digits", field="slug")
            self._check_slug_free(slugify(data["slug"]))
        elif not slugify(data["name"]):
            raise ValidationError("Name must contain letters or digits", field="name")

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        if data.get("slug"):
            data["slug"] = slugify(data["slug"])
        else:
            data["slug"] = unique_slug(
                slugify(data["name"]),
                lambda s: self._products.find_by_slug(s) is not None,
            )
        return data

    def _validate_update(self, entity: Product, data: dict[str, Any]) -> None:
        self._check_references(data)
        if "sku" in data:
            self._check_sku_free(data["sku"], exclude_id=entity.id)
        self._check_prices(data.get("price", entity.price), data.get("sale_price", entity.sale_price))
        if "slug" in data:
            slug = slugify(data["slug"])
            if not slug:
                raise ValidationError("Slug must contain letters or digits", field="slug")
            self._check_slug_free(slug, exclude_id=entity.id)
            data["slug"] = slug
