"""
Base Repository implementation.
Provides common data access patterns for catalog entities.

Lookup methods return None on not-found; bulk methods return affected-row counts.
Repositories flush but never commit; the calling service owns the transaction.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select, update
from sqlalchemy.orm import Session

from shared.config.constants import Limits


ModelT = TypeVar("ModelT")


@dataclass
class RepositoryFilters:
    """Base filters for repository queries."""

    # Pagination
    limit: int = Limits.DEFAULT_PAGE_SIZE
    offset: int = 0

    # Soft delete / visibility
    include_inactive: bool = False

    # Search
    search: str | None = None

    def __post_init__(self):
        """Validate and normalize filters."""
        self.limit = min(max(1, self.limit), Limits.MAX_PAGE_SIZE)
        self.offset = max(0, self.offset)
        if self.search:
            self.search = self.search.strip()[:Limits.MAX_SEARCH_TERM_LENGTH]


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: The SQLAlchemy model class
    - _base_query(): Base select with ordering / eager loading
    - _apply_filters(): Entity-specific filters
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    @abstractmethod
    def _base_query(self) -> Select:
        """Return base query with default ordering."""
        ...

    @abstractmethod
    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply entity-specific filters to query."""
        ...

    def _active_only(self, query: Select, include_inactive: bool) -> Select:
        if not include_inactive:
            query = query.where(self.model.is_active.is_(True))
        return query

    def find_all(self, filters: RepositoryFilters | None = None) -> Sequence[ModelT]:
        """Find all entities matching filters, paginated."""
        filters = filters or RepositoryFilters()
        query = self._active_only(self._base_query(), filters.include_inactive)
        query = self._apply_filters(query, filters)
        query = query.offset(filters.offset).limit(filters.limit)
        return self._db.execute(query).scalars().unique().all()

    def count(self, filters: RepositoryFilters | None = None) -> int:
        """Count entities matching filters (pagination ignored)."""
        filters = filters or RepositoryFilters()
        query = self._active_only(select(self.model), filters.include_inactive)
        query = self._apply_filters(query, filters)
        return self._db.scalar(select(func.count()).select_from(query.subquery())) or 0

    def find_by_id(self, entity_id: int, include_inactive: bool = False) -> ModelT | None:
        """
        Find entity by ID.

        Args:
            entity_id: Entity ID
            include_inactive: Include hidden / soft-deleted entities

        Returns:
            Entity or None
        """
        query = select(self.model).where(self.model.id == entity_id)
        query = self._active_only(query, include_inactive)
        return self._db.scalar(query)

    def save(self, entity: ModelT) -> ModelT:
        """Add entity to the session and flush so it gets its primary key."""
        self._db.add(entity)
        self._db.flush()
        return entity

    def update(self, entity: ModelT, data: dict[str, Any]) -> ModelT:
        """
        Apply a partial update to a loaded entity and flush it.

        The flush checks the row version, so a concurrent write raises StaleDataError.
        """
        for field_name, value in data.items():
            setattr(entity, field_name, value)
        self._db.flush()
        return entity

    def _bulk_update(self, *criteria: Any, values: dict[str, Any]) -> int:
        """
        Issue one UPDATE for every row matching criteria and bump its version.

        Objects already loaded in the session are not synchronized; they are
        expired on commit like everything else.
        """
        stmt = (
            update(self.model)
            .where(*criteria)
            .values(**values, version=self.model.version + 1)
            .execution_options(synchronize_session=False)
        )
        result = self._db.execute(stmt)
        return result.rowcount or 0
