"""
Public read endpoints for the storefront catalog.

Thin router: every query goes through the domain services. Hidden
(inactive) rows are excluded unless an admin asks for them.
"""

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from shared.config.constants import CategoryLevel, Limits
from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import (
    CatalogOutput,
    CategoryOutput,
    ProductListResponse,
    ProductOutput,
    SupplierOutput,
)
from rest_api.repositories import RepositoryFilters
from rest_api.routers._common import (
    Pagination,
    active_only_param,
    get_pagination,
    include_inactive_param,
)
from rest_api.services.domain import (
    CatalogService,
    CategoryService,
    ProductService,
    SupplierService,
)


router = APIRouter(prefix="/api", tags=["catalog"])


# =============================================================================
# Suppliers
# =============================================================================


@router.get("/suppliers", response_model=list[SupplierOutput])
def list_suppliers(
    include_inactive: bool = Depends(include_inactive_param),
    q: str | None = Query(default=None, max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    db: Session = Depends(get_db),
) -> list[SupplierOutput]:
    """List suppliers ordered by name."""
    filters = RepositoryFilters(
        limit=Limits.MAX_PAGE_SIZE,
        include_inactive=include_inactive,
        search=q,
    )
    return SupplierService(db).list_all(filters)


@router.get("/suppliers/{supplier_id}", response_model=SupplierOutput)
def get_supplier(
    supplier_id: int = Path(gt=0),
    include_inactive: bool = Depends(include_inactive_param),
    db: Session = Depends(get_db),
) -> SupplierOutput:
    return SupplierService(db).get_by_id(supplier_id, include_inactive=include_inactive)


# =============================================================================
# Catalogs
# =============================================================================


@router.get("/catalogs", response_model=list[CatalogOutput])
def list_catalogs(
    active_only: bool = Depends(active_only_param),
    supplier_id: int | None = Query(default=None, gt=0),
    q: str | None = Query(default=None, max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    db: Session = Depends(get_db),
) -> list[CatalogOutput]:
    """
    List catalogs.

    q matches the catalog name, its description or its supplier's name.
    """
    return CatalogService(db).search(active_only=active_only, supplier_id=supplier_id, q=q)


@router.get("/catalogs/supplier/{supplier_id}", response_model=list[CatalogOutput])
def list_catalogs_by_supplier(
    supplier_id: int = Path(gt=0),
    active_only: bool = Depends(active_only_param),
    db: Session = Depends(get_db),
) -> list[CatalogOutput]:
    return CatalogService(db).list_by_supplier(supplier_id, active_only=active_only)


@router.get("/catalogs/{catalog_id}", response_model=CatalogOutput)
def get_catalog(
    catalog_id: int = Path(gt=0),
    include_inactive: bool = Depends(include_inactive_param),
    db: Session = Depends(get_db),
) -> CatalogOutput:
    return CatalogService(db).get_by_id(catalog_id, include_inactive=include_inactive)


# =============================================================================
# Categories
# =============================================================================


@router.get("/categories", response_model=list[CategoryOutput])
def list_categories(
    include_inactive: bool = Depends(include_inactive_param),
    parent_id: int | None = Query(default=None, gt=0),
    level: int | None = Query(default=None, ge=CategoryLevel.PARENT, le=CategoryLevel.MAX),
    db: Session = Depends(get_db),
) -> list[CategoryOutput]:
    """List categories ordered by display order, then name."""
    return CategoryService(db).list_categories(
        include_inactive=include_inactive,
        parent_id=parent_id,
        level=level,
    )


@router.get("/categories/{category_id}", response_model=CategoryOutput)
def get_category(
    category_id: int = Path(gt=0),
    include_inactive: bool = Depends(include_inactive_param),
    db: Session = Depends(get_db),
) -> CategoryOutput:
    return CategoryService(db).get_by_id(category_id, include_inactive=include_inactive)


# =============================================================================
# Products
# =============================================================================


@router.get("/products", response_model=ProductListResponse)
def list_products(
    category_id: int | None = Query(default=None, gt=0),
    catalog_id: int | None = Query(default=None, gt=0),
    include_inactive: bool = Depends(include_inactive_param),
    q: str | None = Query(default=None, max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
) -> ProductListResponse:
    """
    Paginated product list.

    Response: {"items": [...], "pagination": {limit, offset, page, total, pages, hasNext, hasPrev}}
    """
    items, total = ProductService(db).list_paginated(
        limit=pagination.limit,
        offset=pagination.offset,
        category_id=category_id,
        catalog_id=catalog_id,
        include_inactive=include_inactive,
        search=q,
    )
    return ProductListResponse(items=items, pagination=pagination.to_dict(total=total))


@router.get("/products/category/{category_id}", response_model=list[ProductOutput])
def list_products_by_category(
    category_id: int = Path(gt=0),
    include_inactive: bool = Depends(include_inactive_param),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
) -> list[ProductOutput]:
    """Products directly owned by a category. 404 if the category does not exist."""
    return ProductService(db).list_by_category(
        category_id,
        limit=pagination.limit,
        offset=pagination.offset,
        include_inactive=include_inactive,
    )


@router.get("/products/{product_id}", response_model=ProductOutput)
def get_product(
    product_id: int = Path(gt=0),
    include_inactive: bool = Depends(include_inactive_param),
    db: Session = Depends(get_db),
) -> ProductOutput:
    return ProductService(db).get_by_id(product_id, include_inactive=include_inactive)
