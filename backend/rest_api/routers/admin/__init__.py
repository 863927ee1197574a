"""
Admin API router - combines all admin sub-routers.

Every route in this group requires a valid access token with the admin role:
missing or invalid token -> 401, authenticated non-admin -> 403.

- suppliers: Supplier CRUD with deactivation cascade
- catalogs: Catalog CRUD with status cascade to products
- categories: Category CRUD and the visibility toggle
- products: Product CRUD and bulk status

All routes are prefixed with /api
"""

from fastapi import APIRouter, Depends

from shared.security.auth import require_admin
from shared.utils.schemas import ErrorResponse

from .suppliers import router as suppliers_router
from .catalogs import router as catalogs_router
from .categories import router as categories_router
from .products import router as products_router


router = APIRouter(
    prefix="/api",
    dependencies=[Depends(require_admin)],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
)

router.include_router(suppliers_router)
router.include_router(catalogs_router)
router.include_router(categories_router)
router.include_router(products_router)


__all__ = ["router"]
