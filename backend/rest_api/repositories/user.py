"""
User Repository - account lookups for authentication.
"""

from sqlalchemy import Select, func, select

from rest_api.models import User
from .base import BaseRepository, RepositoryFilters


class UserRepository(BaseRepository[User]):
    """Repository for User entities."""

    @property
    def model(self) -> type[User]:
        return User

    def _base_query(self) -> Select:
        return select(User).order_by(User.id)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        return query

    def find_by_email(self, email: str, include_inactive: bool = False) -> User | None:
        """Case-insensitive email lookup."""
        query = select(User).where(func.lower(User.email) == email.strip().lower())
        query = self._active_only(query, include_inactive)
        return self._db.scalar(query)
