"""
Repository Pattern implementation.
Centralizes data access for catalog entities.

Usage:
    from rest_api.repositories import ProductRepository, ProductFilters

    repo = ProductRepository(db)
    products = repo.find_all(ProductFilters(category_id=5))
    product = repo.find_by_id(123)
"""

from .base import BaseRepository, RepositoryFilters
from .product import ProductRepository, ProductFilters
from .category import CategoryRepository, CategoryFilters
from .catalog import CatalogRepository, CatalogFilters, SupplierRepository
from .user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "RepositoryFilters",
    # Product
    "ProductRepository",
    "ProductFilters",
    # Category
    "CategoryRepository",
    "CategoryFilters",
    # Catalog / Supplier
    "CatalogRepository",
    "CatalogFilters",
    "SupplierRepository",
    # User
    "UserRepository",
]
