"""
Catalog management endpoints.

Any status change on a catalog (activate or deactivate) is applied to all of
its products in the same transaction.
"""

from typing import Any

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context as current_user
from shared.utils.admin_schemas import (
    CatalogCreate,
    CatalogOutput,
    CatalogUpdate,
    CatalogUpdateOutput,
)
from rest_api.routers._common import get_user_email, get_user_id
from rest_api.services.domain import CatalogService


router = APIRouter(tags=["admin-catalogs"])


@router.post("/catalogs", response_model=CatalogOutput, status_code=status.HTTP_201_CREATED)
def create_catalog(
    body: CatalogCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> CatalogOutput:
    """Create a catalog. The name must be unique for its supplier."""
    return CatalogService(db).create(
        body.model_dump(exclude_unset=True, exclude_none=True),
        get_user_id(user),
        get_user_email(user),
    )


@router.put("/catalogs/{catalog_id}", response_model=CatalogUpdateOutput)
def update_catalog(
    body: CatalogUpdate,
    catalog_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> CatalogUpdateOutput:
    return CatalogService(db).update(
        catalog_id,
        body.model_dump(exclude_unset=True, exclude_none=True),
        get_user_id(user),
        get_user_email(user),
    )


@router.delete("/catalogs/{catalog_id}")
def delete_catalog(
    catalog_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> dict[str, Any]:
    counts = CatalogService(db).delete(catalog_id, get_user_id(user), get_user_email(user))
    return {
        "success": True,
        "message": "Catalog deleted",
        "productsUpdated": counts["products_updated"],
    }
