"""
Supplier management endpoints.

Deactivating a supplier (update with isActive=false, or delete) hides all of
its catalogs and their products; the counts come back in the response.
"""

from typing import Any

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context as current_user
from shared.utils.admin_schemas import (
    SupplierCreate,
    SupplierOutput,
    SupplierUpdate,
    SupplierUpdateOutput,
)
from rest_api.routers._common import get_user_email, get_user_id
from rest_api.services.domain import SupplierService


router = APIRouter(tags=["admin-suppliers"])


@router.post("/suppliers", response_model=SupplierOutput, status_code=status.HTTP_201_CREATED)
def create_supplier(
    body: SupplierCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> SupplierOutput:
    return SupplierService(db).create(
        body.model_dump(exclude_unset=True, exclude_none=True),
        get_user_id(user),
        get_user_email(user),
    )


@router.put("/suppliers/{supplier_id}", response_model=SupplierUpdateOutput)
def update_supplier(
    body: SupplierUpdate,
    supplier_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> SupplierUpdateOutput:
    """Update a supplier. isActive=false also deactivates its catalogs and their products."""
    return SupplierService(db).update(
        supplier_id,
        body.model_dump(exclude_unset=True, exclude_none=True),
        get_user_id(user),
        get_user_email(user),
    )


@router.delete("/suppliers/{supplier_id}")
def delete_supplier(
    supplier_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> dict[str, Any]:
    """Soft delete a supplier and deactivate its catalogs and their products."""
    counts = SupplierService(db).delete(supplier_id, get_user_id(user), get_user_email(user))
    return {
        "success": True,
        "message": "Supplier deleted",
        "catalogsUpdated": counts["catalogs_updated"],
        "productsUpdated": counts["products_updated"],
    }
