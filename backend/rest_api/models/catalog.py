"""
Catalog Models: Supplier, Catalog, Category, Product.

Visibility flows downward: Supplier -> Catalog -> Product and
parent Category -> child Category -> Product. Product.is_active is stored
denormalized and kept in sync by rest_api.services.domain.visibility_cascade.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import (
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import CategoryLevel, Limits
from .base import AuditMixin, Base, IdType


class Supplier(AuditMixin, Base):
    """
    Vendor that provides one or more catalogs.
    Inherits: is_active, audit fields and version from AuditMixin.
    """

    __tablename__ = "supplier"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_name: Mapped[Optional[str]] = mapped_column(String(255))
    email: Mapped[Optional[str]] = mapped_column(String(255))
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    website: Mapped[Optional[str]] = mapped_column(String(255))
    address: Mapped[Optional[str]] = mapped_column(Text)
    city: Mapped[Optional[str]] = mapped_column(String(100))
    country: Mapped[Optional[str]] = mapped_column(String(100), default="South Africa")
    notes: Mapped[Optional[str]] = mapped_column(Text)
    logo: Mapped[Optional[str]] = mapped_column(Text)

    catalogs: Mapped[list["Catalog"]] = relationship(back_populates="supplier")


class Catalog(AuditMixin, Base):
    """
    A supplier's collection of products.
    Name is unique per supplier (case-insensitive, enforced in CatalogService).
    """

    __tablename__ = "catalog"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    supplier_id: Mapped[Optional[int]] = mapped_column(
        IdType, ForeignKey("supplier.id"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    default_markup_percentage: Mapped[int] = mapped_column(
        Integer, default=Limits.DEFAULT_MARKUP_PERCENTAGE, nullable=False
    )
    cover_image: Mapped[Optional[str]] = mapped_column(Text)
    start_date: Mapped[Optional[str]] = mapped_column(String(32))
    end_date: Mapped[Optional[str]] = mapped_column(String(32))

    supplier: Mapped[Optional["Supplier"]] = relationship(back_populates="catalogs")
    products: Mapped[list["Product"]] = relationship(back_populates="catalog")

    __table_args__ = (
        Index("ix_catalog_supplier_active", "supplier_id", "is_active"),
    )

    @property
    def supplier_name(self) -> str | None:
        return self.supplier.name if self.supplier else None


class Category(AuditMixin, Base):
    """
    Node in the two-level category tree.
    level 0 = top-level category, level 1 = child of a level-0 category.
    """

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    parent_id: Mapped[Optional[int]] = mapped_column(
        IdType, ForeignKey("category.id"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(Limits.MAX_SLUG_LENGTH), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    icon: Mapped[Optional[str]] = mapped_column(Text)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    level: Mapped[int] = mapped_column(Integer, default=CategoryLevel.PARENT, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    parent: Mapped[Optional["Category"]] = relationship(
        back_populates="children", remote_side=[id]
    )
    children: Mapped[list["Category"]] = relationship(back_populates="parent")
    products: Mapped[list["Product"]] = relationship(back_populates="category")

    __table_args__ = (
        # Same name allowed under different parents
        UniqueConstraint("name", "parent_id", name="uq_category_name_parent"),
        Index("ix_category_parent_active", "parent_id", "is_active"),
    )


class Product(AuditMixin, Base):
    """
    Sellable item. Belongs to a category and optionally to a supplier catalog.
    """

    __tablename__ = "product"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    category_id: Mapped[Optional[int]] = mapped_column(
        IdType, ForeignKey("category.id"), nullable=True, index=True
    )
    catalog_id: Mapped[Optional[int]] = mapped_column(
        IdType, ForeignKey("catalog.id"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(Limits.MAX_SLUG_LENGTH), nullable=False, unique=True)
    sku: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_SKU_LENGTH), unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    brand: Mapped[Optional[str]] = mapped_column(String(255))
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    sale_price: Mapped[Optional[float]] = mapped_column(Float)
    stock_quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_featured: Mapped[bool] = mapped_column(default=False, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=999, nullable=False)

    category: Mapped[Optional["Category"]] = relationship(back_populates="products")
    catalog: Mapped[Optional["Catalog"]] = relationship(back_populates="products")

    __table_args__ = (
        Index("ix_product_category_active", "category_id", "is_active"),
        Index("ix_product_catalog_active", "catalog_id", "is_active"),
    )
