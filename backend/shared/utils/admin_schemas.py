"""
Pydantic schemas for the catalog admin API.
Centralized to avoid circular imports between routers and services.

Request bodies accept snake_case field names and their camelCase aliases
(isActive, productIds, ...). Responses are serialized with camelCase keys.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, field_validator
from pydantic.alias_generators import to_camel

from shared.config.constants import Limits
from shared.utils.validators import validate_image_url


class InputModel(BaseModel):
    """Base for request bodies: camelCase aliases, unknown fields rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


class OutputModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


Name = Annotated[str, Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)]
Description = Annotated[str, Field(max_length=Limits.MAX_DESCRIPTION_LENGTH)]
PositiveId = Annotated[StrictInt, Field(gt=0)]


# =============================================================================
# Supplier Schemas
# =============================================================================


class SupplierOutput(OutputModel):
    id: int
    name: str
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    notes: str | None = None
    logo: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None


class SupplierCreate(InputModel):
    name: Name
    contact_name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    website: str | None = Field(default=None, max_length=255)
    address: str | None = None
    city: str | None = Field(default=None, max_length=100)
    country: str | None = Field(default=None, max_length=100)
    notes: Description | None = None
    logo: str | None = None
    is_active: StrictBool = True

    @field_validator("logo")
    @classmethod
    def _logo_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class SupplierUpdate(InputModel):
    name: Name | None = None
    contact_name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    website: str | None = Field(default=None, max_length=255)
    address: str | None = None
    city: str | None = Field(default=None, max_length=100)
    country: str | None = Field(default=None, max_length=100)
    notes: Description | None = None
    logo: str | None = None
    is_active: StrictBool | None = None

    @field_validator("logo")
    @classmethod
    def _logo_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class SupplierUpdateOutput(SupplierOutput):
    """Supplier after an update, with the deactivation cascade counts (zero when none ran)."""

    catalogs_updated: int = 0
    products_updated: int = 0


# =============================================================================
# Catalog Schemas
# =============================================================================


class CatalogOutput(OutputModel):
    id: int
    supplier_id: int | None = None
    supplier_name: str | None = None
    name: str
    description: str | None = None
    default_markup_percentage: int
    cover_image: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None


class CatalogCreate(InputModel):
    supplier_id: PositiveId | None = None
    name: Name
    description: Description | None = None
    default_markup_percentage: StrictInt = Field(default=Limits.DEFAULT_MARKUP_PERCENTAGE, ge=0, le=1000)
    cover_image: str | None = None
    start_date: str | None = Field(default=None, max_length=32)
    end_date: str | None = Field(default=None, max_length=32)
    is_active: StrictBool = True

    @field_validator("cover_image")
    @classmethod
    def _cover_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class CatalogUpdate(InputModel):
    supplier_id: PositiveId | None = None
    name: Name | None = None
    description: Description | None = None
    default_markup_percentage: StrictInt | None = Field(default=None, ge=0, le=1000)
    cover_image: str | None = None
    start_date: str | None = Field(default=None, max_length=32)
    end_date: str | None = Field(default=None, max_length=32)
    is_active: StrictBool | None = None

    @field_validator("cover_image")
    @classmethod
    def _cover_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class CatalogUpdateOutput(CatalogOutput):
    """Catalog after an update, with the number of products whose status followed it."""

    products_updated: int = 0


# =============================================================================
# Category Schemas
# =============================================================================


class CategoryOutput(OutputModel):
    id: int
    parent_id: int | None = None
    name: str
    slug: str
    description: str | None = None
    icon: str | None = None
    image_url: str | None = None
    level: int
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None


class CategoryCreate(InputModel):
    name: Name
    parent_id: PositiveId | None = None
    slug: str | None = Field(default=None, max_length=Limits.MAX_SLUG_LENGTH)
    description: Description | None = None
    icon: str | None = None
    image_url: str | None = None
    display_order: StrictInt | None = Field(default=None, ge=0)
    is_active: StrictBool = True

    @field_validator("image_url")
    @classmethod
    def _image_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class CategoryUpdate(InputModel):
    """Plain attribute update; visibility changes go through the visibility endpoint."""

    name: Name | None = None
    slug: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_SLUG_LENGTH)
    description: Description | None = None
    icon: str | None = None
    image_url: str | None = None
    display_order: StrictInt | None = Field(default=None, ge=0)

    @field_validator("image_url")
    @classmethod
    def _image_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class CategoryVisibilityRequest(InputModel):
    """Body of PUT /api/categories/{id}/visibility."""

    is_active: StrictBool
    cascade: StrictBool = True


class CategoryVisibilityOutput(CategoryOutput):
    """The updated category plus cascade counters."""

    products_updated: int
    subcategories_updated: int
    cascaded: bool


# =============================================================================
# Product Schemas
# =============================================================================


class ProductOutput(OutputModel):
    id: int
    category_id: int | None = None
    catalog_id: int | None = None
    name: str
    slug: str
    sku: str | None = None
    description: str | None = None
    brand: str | None = None
    image_url: str | None = None
    price: float
    sale_price: float | None = None
    stock_quantity: int
    is_featured: bool
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None


class ProductCreate(InputModel):
    name: Name
    category_id: PositiveId | None = None
    catalog_id: PositiveId | None = None
    slug: str | None = Field(default=None, max_length=Limits.MAX_SLUG_LENGTH)
    sku: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_SKU_LENGTH)
    description: Description | None = None
    brand: str | None = Field(default=None, max_length=255)
    image_url: str | None = None
    price: float = Field(ge=0)
    sale_price: float | None = Field(default=None, ge=0)
    stock_quantity: StrictInt = Field(default=0, ge=0)
    is_featured: StrictBool = False
    display_order: StrictInt = Field(default=999, ge=0)
    is_active: StrictBool = True

    @field_validator("image_url")
    @classmethod
    def _image_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class ProductUpdate(InputModel):
    name: Name | None = None
    category_id: PositiveId | None = None
    catalog_id: PositiveId | None = None
    slug: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_SLUG_LENGTH)
    sku: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_SKU_LENGTH)
    description: Description | None = None
    brand: str | None = Field(default=None, max_length=255)
    image_url: str | None = None
    price: float | None = Field(default=None, ge=0)
    sale_price: float | None = Field(default=None, ge=0)
    stock_quantity: StrictInt | None = Field(default=None, ge=0)
    is_featured: StrictBool | None = None
    display_order: StrictInt | None = Field(default=None, ge=0)
    is_active: StrictBool | None = None

    @field_validator("image_url")
    @classmethod
    def _image_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class BulkStatusRequest(InputModel):
    """Body of POST /api/products/bulk-update-status."""

    product_ids: list[PositiveId] = Field(min_length=1, max_length=Limits.MAX_BULK_IDS)
    is_active: StrictBool


class BulkStatusResponse(BaseModel):
    success: bool
    count: int
    message: str


class ProductListResponse(BaseModel):
    """Paginated product list."""

    items: list[ProductOutput]
    pagination: dict
