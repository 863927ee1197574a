"""
Category Service.

Business rules:
- Categories form a two-level tree; the level is derived from the parent
- Names are unique among siblings (ignoring case); slugs are unique globally
- Slugs are generated from the name when not supplied
- Display order is auto-calculated within the parent when not provided
- Visibility changes go through the cascade engine; plain updates never cascade
- Deleting a category hides it, its children and all of their products
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from rest_api.models import Category
from rest_api.repositories import CategoryRepository
from rest_api.services.base_service import BaseCRUDService, unique_slug
from rest_api.services.domain.visibility_cascade import VisibilityCascadeService
from shared.config.constants import CategoryLevel
from shared.utils.admin_schemas import CategoryOutput, CategoryVisibilityOutput
from shared.utils.exceptions import DuplicateEntityError, ValidationError
from shared.utils.validators import slugify


class CategoryService(BaseCRUDService[Category, CategoryOutput]):
    """Service for category management."""

    def __init__(self, db: Session):
        self._categories = CategoryRepository(db)
        super().__init__(
            db=db,
            repo=self._categories,
            output_schema=CategoryOutput,
            entity_name="Category",
        )
        self._cascade = VisibilityCascadeService(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_categories(
        self,
        *,
        include_inactive: bool = False,
        parent_id: int | None = None,
        level: int | None = None,
    ) -> list[CategoryOutput]:
        """All categories matching the options, ordered by display order then name."""
        categories = self._categories.get_all(
            include_inactive=include_inactive,
            parent_id=parent_id,
            level=level,
        )
        return [self.to_output(c) for c in categories]

    def get_next_order(self, parent_id: int | None) -> int:
        """Next display order number among the siblings under parent_id."""
        query = select(func.max(Category.display_order))
        if parent_id is None:
            query = query.where(Category.parent_id.is_(None))
        else:
            query = query.where(Category.parent_id == parent_id)
        return (self._db.scalar(query) or 0) + 1

    # =========================================================================
    # Visibility
    # =========================================================================

    def set_visibility(
        self,
        category_id: int,
        is_active: bool,
        cascade: bool,
        user_id: int | None,
        user_email: str | None,
    ) -> CategoryVisibilityOutput:
        """Show or hide a category through the cascade engine."""
        result = self._cascade.cascade_category_visibility(
            category_id,
            is_active,
            cascade=cascade,
            user_id=user_id,
            user_email=user_email,
        )
        return CategoryVisibilityOutput(
            **CategoryOutput.model_validate(result.category).model_dump(),
            products_updated=result.products_updated,
            subcategories_updated=result.subcategories_updated,
            cascaded=result.cascaded,
        )

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _check_unique_name(self, name: str, parent_id: int | None, exclude_id: int | None = None) -> None:
        existing = self._categories.find_by_name_and_parent(name, parent_id)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateEntityError("Category", name, parent_id=parent_id)

    def _check_slug_free(self, slug: str, exclude_id: int | None = None) -> None:
        existing = self._categories.find_by_slug(slug)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateEntityError("Category", slug)

    def _validate_create(self, data: dict[str, Any]) -> None:
        parent_id = data.get("parent_id")
        if parent_id is not None:
            parent = self._categories.find_by_id(parent_id, include_inactive=True)
            if parent is None:
                raise ValidationError(f"Parent category {parent_id} does not exist", field="parent_id")
            if parent.level >= CategoryLevel.MAX:
                raise ValidationError(
                    "Categories can only be nested one level deep",
                    field="parent_id",
                )

        self._check_unique_name(data["name"], parent_id)

        if data.get("slug"):
            if not slugify(data["slug"]):
                raise ValidationError("Slug must contain letters or digits", field="slug")
            self._check_slug_free(slugify(data["slug"]))
        elif not slugify(data["name"]):
            raise ValidationError("Name must contain letters or digits", field="name")

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        parent_id = data.get("parent_id")
        data["level"] = CategoryLevel.CHILD if parent_id is not None else CategoryLevel.PARENT

        if data.get("slug"):
            data["slug"] = slugify(data["slug"])
        else:
            data["slug"] = unique_slug(
                slugify(data["name"]),
                lambda s: self._categories.find_by_slug(s) is not None,
            )

        if data.get("display_order") is None:
            data["display_order"] = self.get_next_order(parent_id)
        return data

    def _validate_update(self, entity: Category, data: dict[str, Any]) -> None:
        if "name" in data:
            self._check_unique_name(data["name"], entity.parent_id, exclude_id=entity.id)
        if "slug" in data:
            slug = slugify(data["slug"])
            if not slug:
                raise ValidationError("Slug must contain letters or digits", field="slug")
            self._check_slug_free(slug, exclude_id=entity.id)
            data["slug"] = slug

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def _after_delete(
        self,
        entity: Category,
        user_id: int | None,
        user_email: str | None,
    ) -> dict[str, Any]:
        result = self._cascade.apply_category_visibility(
            entity, False, cascade=True, user_id=user_id, user_email=user_email
        )
        return {
            "products_updated": result.products_updated,
            "subcategories_updated": result.subcategories_updated,
        }
