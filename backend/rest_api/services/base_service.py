"""
Base Service Classes.

Provides the shared transaction boundary and the CRUD skeleton used by the
catalog domain services.

Architecture:
    Router (thin) -> Service (business logic) -> Repository (data access) -> Model

Usage:
    from rest_api.services.base_service import BaseCRUDService

    class SupplierService(BaseCRUDService[Supplier, SupplierOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                repo=SupplierRepository(db),
                output_schema=SupplierOutput,
                entity_name="Supplier",
            )
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from rest_api.models import Base
from rest_api.repositories.base import BaseRepository, RepositoryFilters
from rest_api.services.crud.soft_delete import set_created_by, set_updated_by, soft_delete
from shared.config.logging import get_logger
from shared.utils.exceptions import (
    AppException,
    ConflictError,
    DatabaseError,
    DuplicateEntityError,
    InternalError,
    NotFoundError,
)

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


@contextmanager
def transactional(
    db: Session,
    operation: str,
    entity_name: str | None = None,
    **log_context: Any,
) -> Iterator[Session]:
    """
    Run a block of writes as one transaction.

    Commits once at the end; any failure rolls back every write in the block.

    - AppException raised inside propagates unchanged.
    - Concurrent modification (row version mismatch) becomes ConflictError (409).
    - Unique constraint violations become DuplicateEntityError (400).
    - Other database failures become DatabaseError (500).
    - Anything else is logged with traceback and becomes a generic InternalError (500).
    """
    try:
        yield db
        db.commit()
    except AppException:
        db.rollback()
        raise
    except StaleDataError as e:
        db.rollback()
        raise ConflictError(
            f"Could not {operation}: the record was modified by another request. Please retry.",
            error=str(e),
            **log_context,
        ) from e
    except IntegrityError as e:
        db.rollback()
        raise DuplicateEntityError(entity_name or "Record", error=str(e.orig), **log_context) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database failure during {operation}", error=str(e), exc_info=True, **log_context)
        raise DatabaseError(operation, error=str(e)) from e
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to {operation}", error=str(e), exc_info=True, **log_context)
        raise InternalError(f"Failed to {operation}") from e


class BaseCRUDService(Generic[ModelT, OutputT]):
    """
    Base service for entities with CRUD operations.

    Provides standard CRUD methods that can be overridden for
    custom business logic. Uses a Repository for all data access.

    Responsibilities:
    - Data access via Repository (not direct queries)
    - DTO transformation via output schema
    - Audit trail for mutations
    - Business rule validation hooks
    - In-transaction hooks for dependent writes (cascades)
    """

    def __init__(
        self,
        db: Session,
        repo: BaseRepository[ModelT],
        output_schema: type[OutputT],
        entity_name: str,
    ):
        self._db = db
        self._repo = repo
        self._output_schema = output_schema
        self._entity_name = entity_name

    @property
    def db(self) -> Session:
        return self._db

    @property
    def repo(self) -> BaseRepository[ModelT]:
        return self._repo

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_entity(self, entity_id: int, *, include_inactive: bool = False) -> ModelT | None:
        """Get raw entity (for internal use)."""
        return self._repo.find_by_id(entity_id, include_inactive=include_inactive)

    def require_entity(self, entity_id: int, *, include_inactive: bool = False) -> ModelT:
        """
        Get raw entity or raise.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self._repo.find_by_id(entity_id, include_inactive=include_inactive)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def get_by_id(self, entity_id: int, *, include_inactive: bool = False) -> OutputT:
        """Get entity by ID as output DTO."""
        return self.to_output(self.require_entity(entity_id, include_inactive=include_inactive))

    def list_all(self, filters: RepositoryFilters | None = None) -> list[OutputT]:
        """List entities matching filters."""
        return [self.to_output(e) for e in self._repo.find_all(filters)]

    def count(self, filters: RepositoryFilters | None = None) -> int:
        return self._repo.count(filters)

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any], user_id: int | None, user_email: str | None) -> OutputT:
        """
        Create new entity.

        Raises:
            ValidationError / DuplicateEntityError: If data is invalid.
        """
        self._validate_create(data)
        data = self._prepare_create(data)

        entity = self._repo.model(**data)
        set_created_by(entity, user_id, user_email)

        with transactional(self._db, f"create {self._entity_name.lower()}", self._entity_name):
            self._repo.save(entity)

        self._db.refresh(entity)
        logger.info(f"{self._entity_name} created", entity_id=entity.id, user_id=user_id)
        return self.to_output(entity)

    def update(
        self,
        entity_id: int,
        data: dict[str, Any],
        user_id: int | None,
        user_email: str | None,
    ) -> OutputT:
        """
        Update existing entity (hidden entities included) and run the
        _after_update hook inside the same transaction.

        Raises:
            NotFoundError: If entity not found.
            ValidationError: If data is invalid.
            ConflictError: If the row was modified concurrently.
        """
        entity = self.require_entity(entity_id, include_inactive=True)
        self._validate_update(entity, data)

        with transactional(
            self._db,
            f"update {self._entity_name.lower()}",
            self._entity_name,
            entity_id=entity_id,
        ):
            set_updated_by(entity, user_id, user_email)
            self._repo.update(entity, data)
            extra = self._after_update(entity, data, user_id, user_email)

        self._db.refresh(entity)
        return self._update_output(entity, extra)

    def delete(self, entity_id: int, user_id: int | None, user_email: str | None) -> dict[str, Any]:
        """
        Soft delete entity and run the _after_delete hook in the same transaction.

        Returns:
            Counters reported by _after_delete (empty when nothing cascaded).
        """
        entity = self.require_entity(entity_id, include_inactive=True)
        self._validate_delete(entity)

        with transactional(
            self._db,
            f"delete {self._entity_name.lower()}",
            self._entity_name,
            entity_id=entity_id,
        ):
            soft_delete(self._db, entity, user_id, user_email, commit=False)
            extra = self._after_delete(entity, user_id, user_email)

        logger.info(f"{self._entity_name} deleted", entity_id=entity_id, user_id=user_id, **extra)
        return extra

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """
        Convert entity to output DTO.

        Override this method for custom transformation logic.
        """
        return self._output_schema.model_validate(entity)

    def _update_output(self, entity: ModelT, extra: dict[str, Any]) -> OutputT:
        return self.to_output(entity)

    # =========================================================================
    # Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        pass

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Fill derived fields (slugs, levels, defaults) before the entity is built."""
        return data

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> None:
        pass

    def _validate_delete(self, entity: ModelT) -> None:
        pass

    def _after_update(
        self,
        entity: ModelT,
        data: dict[str, Any],
        user_id: int | None,
        user_email: str | None,
    ) -> dict[str, Any]:
        """Runs inside the update transaction after the entity is flushed."""
        return {}

    def _after_delete(
        self,
        entity: ModelT,
        user_id: int | None,
        user_email: str | None,
    ) -> dict[str, Any]:
        """Runs inside the delete transaction after the soft delete is flushed."""
        return {}


def unique_slug(base: str, is_taken: Callable[[str], bool]) -> str:
    """
    Return base, or base with the first free numeric suffix.

    Example:
        unique_slug("shoes", repo_lookup)  # "shoes", "shoes-2", "shoes-3", ...
    """
    candidate = base
    suffix = 2
    while is_taken(candidate):
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate
