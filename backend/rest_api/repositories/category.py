"""
Category Repository - Data access for the two-level category tree.
"""

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import Select, func, select

from rest_api.models import Category
from shared.utils.validators import escape_like_pattern
from .base import BaseRepository, RepositoryFilters


@dataclass
class CategoryFilters(RepositoryFilters):
    """Filters specific to categories."""

    parent_id: int | None = None
    level: int | None = None


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category entities."""

    @property
    def model(self) -> type[Category]:
        return Category

    def _base_query(self) -> Select:
        return select(Category).order_by(Category.display_order, Category.name, Category.id)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply category-specific filters."""
        if not isinstance(filters, CategoryFilters):
            filters = CategoryFilters(**filters.__dict__)

        if filters.parent_id is not None:
            query = query.where(Category.parent_id == filters.parent_id)

        if filters.level is not None:
            query = query.where(Category.level == filters.level)

        if filters.search:
            search_term = f"%{escape_like_pattern(filters.search)}%"
            query = query.where(Category.name.ilike(search_term, escape="\\"))

        return query

    def get_all(
        self,
        include_inactive: bool = False,
        parent_id: int | None = None,
        level: int | None = None,
    ) -> Sequence[Category]:
        """All categories matching the options, unpaginated."""
        query = self._active_only(self._base_query(), include_inactive)
        query = self._apply_filters(query, CategoryFilters(parent_id=parent_id, level=level))
        return self._db.execute(query).scalars().all()

    def find_children(self, category_id: int, include_inactive: bool = True) -> Sequence[Category]:
        """Direct children of a category. Inactive children are included by default."""
        query = self._base_query().where(Category.parent_id == category_id)
        query = self._active_only(query, include_inactive)
        return self._db.execute(query).scalars().all()

    def find_by_slug(self, slug: str) -> Category | None:
        return self._db.scalar(select(Category).where(Category.slug == slug))

    def find_by_name_and_parent(self, name: str, parent_id: int | None) -> Category | None:
        """Case-insensitive name lookup among siblings (any visibility)."""
        query = select(Category).where(func.lower(Category.name) == name.strip().lower())
        if parent_id is None:
            query = query.where(Category.parent_id.is_(None))
        else:
            query = query.where(Category.parent_id == parent_id)
        return self._db.scalar(query.limit(1))