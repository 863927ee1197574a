"""
Category management endpoints.

Plain updates never cascade. Visibility goes through the dedicated
/visibility endpoint (PUT, or POST for older clients), which can propagate
to child categories and products.
"""

from typing import Any

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context as current_user
from shared.utils.admin_schemas import (
    CategoryCreate,
    CategoryOutput,
    CategoryUpdate,
    CategoryVisibilityOutput,
    CategoryVisibilityRequest,
)
from rest_api.routers._common import get_user_email, get_user_id
from rest_api.services.domain import CategoryService


router = APIRouter(tags=["admin-categories"])


@router.post("/categories", response_model=CategoryOutput, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> CategoryOutput:
    """Create a category. Slug, level and display order are derived when omitted."""
    return CategoryService(db).create(
        body.model_dump(exclude_unset=True, exclude_none=True),
        get_user_id(user),
        get_user_email(user),
    )


@router.put("/categories/{category_id}", response_model=CategoryOutput)
def update_category(
    body: CategoryUpdate,
    category_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> CategoryOutput:
    return CategoryService(db).update(
        category_id,
        body.model_dump(exclude_unset=True, exclude_none=True),
        get_user_id(user),
        get_user_email(user),
    )


@router.api_route(
    "/categories/{category_id}/visibility",
    methods=["PUT", "POST"],
    response_model=CategoryVisibilityOutput,
)
def set_category_visibility(
    body: CategoryVisibilityRequest,
    category_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> CategoryVisibilityOutput:
    """
    Show or hide a category.

    With cascade (default) on a top-level category, every child category and
    the products of the category and its children follow. The response is the
    category plus productsUpdated, subcategoriesUpdated and cascaded.
    """
    return CategoryService(db).set_visibility(
        category_id,
        body.is_active,
        body.cascade,
        get_user_id(user),
        get_user_email(user),
    )


@router.delete("/categories/{category_id}")
def delete_category(
    category_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> dict[str, Any]:
    """Soft delete a category, hiding its children and all of their products."""
    counts = CategoryService(db).delete(category_id, get_user_id(user), get_user_email(user))
    return {
        "success": True,
        "message": "Category deleted",
        "productsUpdated": counts["products_updated"],
        "subcategoriesUpdated": counts["subcategories_updated"],
    }
