"""
Product management endpoints.

Bulk status sets isActive on exactly the listed products; it never cascades.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context as current_user
from shared.utils.admin_schemas import (
    BulkStatusRequest,
    BulkStatusResponse,
    ProductCreate,
    ProductOutput,
    ProductUpdate,
)
from rest_api.routers._common import get_user_email, get_user_id
from rest_api.services.domain import ProductService


router = APIRouter(tags=["admin-products"])


@router.api_route(
    "/products/bulk-update-status",
    methods=["POST", "PATCH"],
    response_model=BulkStatusResponse,
)
def bulk_update_status(
    body: BulkStatusRequest,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> BulkStatusResponse:
    """
    Activate or deactivate many products at once.

    count is the number of products actually updated; unknown IDs are ignored.
    """
    count = ProductService(db).bulk_update_status(
        body.product_ids,
        body.is_active,
        get_user_id(user),
        get_user_email(user),
    )
    state = "activated" if body.is_active else "deactivated"
    return BulkStatusResponse(
        success=True,
        count=count,
        message=f"{count} product(s) {state}",
    )


@router.post("/products", response_model=ProductOutput, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ProductOutput:
    return ProductService(db).create(
        body.model_dump(exclude_unset=True, exclude_none=True),
        get_user_id(user),
        get_user_email(user),
    )


@router.put("/products/{product_id}", response_model=ProductOutput)
def update_product(
    body: ProductUpdate,
    product_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ProductOutput:
    return ProductService(db).update(
        product_id,
        body.model_dump(exclude_unset=True, exclude_none=True),
        get_user_id(user),
        get_user_email(user),
    )


@router.delete("/products/{product_id}")
def delete_product(
    product_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> dict:
    ProductService(db).delete(product_id, get_user_id(user), get_user_email(user))
    return {"success": True, "message": "Product deleted"}
