"""
Tests for the domain services - validation rules and transaction behavior.

Tests cover:
- Category tree rules (level derivation, nesting limit, sibling names)
- Product rules (slugs, SKUs, prices, references)
- Bulk status counts
- Concurrent modification surfaced as a conflict
"""

import pytest
from sqlalchemy import select, update
from sqlalchemy.exc import OperationalError

from rest_api.models import Category, Product
from rest_api.services.base_service import unique_slug
from rest_api.services.domain import CatalogService, CategoryService, ProductService, SupplierService
from shared.utils.exceptions import (
    BadRequestError,
    ConflictError,
    DatabaseError,
    DuplicateEntityError,
    NotFoundError,
    ValidationError,
)


class TestCategoryService:

    @pytest.fixture
    def service(self, db_session):
        return CategoryService(db_session)

    def test_create_derives_slug_level_and_order(self, service):
        created = service.create({"name": "Kids' Shoes"}, user_id=1, user_email="admin@test.com")

        assert created.slug == "kids-shoes"
        assert created.level == 0
        assert created.display_order == 1

    def test_explicit_slug_is_normalized(self, service):
        created = service.create({"name": "Boots", "slug": "Winter Boots"}, None, None)
        assert created.slug == "winter-boots"

    def test_explicit_slug_must_be_free(self, service, category_tree):
        with pytest.raises(DuplicateEntityError):
            service.create({"name": "Other", "slug": "shoes"}, None, None)

    def test_nesting_limited_to_one_level(self, service, category_tree):
        with pytest.raises(ValidationError):
            service.create({"name": "High Tops", "parent_id": category_tree["sneakers"].id}, None, None)

    def test_missing_parent_rejected(self, service):
        with pytest.raises(ValidationError):
            service.create({"name": "Orphan", "parent_id": 999}, None, None)

    def test_same_name_allowed_under_different_parents(self, service, category_tree):
        created = service.create({"name": "Boots", "parent_id": category_tree["bags"].id}, None, None)
        assert created.parent_id == category_tree["bags"].id
        assert created.slug == "boots-2"

    def test_rename_to_sibling_name_rejected(self, service, category_tree):
        with pytest.raises(DuplicateEntityError):
            service.update(category_tree["boots"].id, {"name": "SNEAKERS"}, None, None)

    def test_update_unknown_category(self, service):
        with pytest.raises(NotFoundError):
            service.update(123, {"name": "Nope"}, None, None)

    def test_set_visibility_output(self, service, category_tree):
        result = service.set_visibility(category_tree["shoes"].id, False, True, 1, "admin@test.com")

        assert result.is_active is False
        assert result.products_updated == 4
        assert result.subcategories_updated == 2
        assert result.cascaded is True

    def test_get_next_order_per_parent(self, service, category_tree):
        assert service.get_next_order(None) == 3
        assert service.get_next_order(category_tree["shoes"].id) == 3
        assert service.get_next_order(category_tree["bags"].id) == 1

    def test_stale_version_raises_conflict(self, service, db_session, category_tree):
        shoes = db_session.get(Category, category_tree["shoes"].id)
        assert shoes.name == "Shoes"

        # Another writer bumps the row version behind this session's back
        db_session.execute(
            update(Category)
            .where(Category.id == shoes.id)
            .values(version=Category.version + 1)
            .execution_options(synchronize_session=False)
        )

        with pytest.raises(ConflictError):
            service.update(shoes.id, {"description": "changed"}, None, None)


class TestProductService:

    @pytest.fixture
    def service(self, db_session):
        return ProductService(db_session)

    def test_create_generates_unique_slug(self, service, category_tree):
        first = service.create({"name": "Runner", "price": 100.0}, None, None)
        assert first.slug == "runner-2"

    def test_create_rejects_sale_price_above_price(self, service):
        with pytest.raises(ValidationError):
            service.create({"name": "Odd", "price": 5.0, "sale_price": 6.0}, None, None)

    def test_update_checks_sale_price_against_stored_price(self, service, category_tree):
        with pytest.raises(ValidationError):
            service.update(category_tree["runner"].id, {"sale_price": 501.0}, None, None)

    def test_create_rejects_unknown_catalog(self, service):
        with pytest.raises(ValidationError):
            service.create({"name": "Lost", "price": 1.0, "catalog_id": 404}, None, None)

    def test_sku_change_to_taken_sku_rejected(self, service, category_tree):
        with pytest.raises(DuplicateEntityError):
            service.update(category_tree["runner"].id, {"sku": "SKU-TOTE"}, None, None)

    def test_bulk_update_status_counts_rows(self, service, db_session, category_tree):
        ids = [category_tree["runner"].id, category_tree["runner"].id, category_tree["tote"].id]

        count = service.bulk_update_status(ids, False, 1, "admin@test.com")

        assert count == 2
        tote = db_session.scalar(select(Product).where(Product.id == category_tree["tote"].id))
        assert tote.is_active is False
        assert tote.updated_by_email == "admin@test.com"

    def test_bulk_update_bumps_version(self, service, db_session, category_tree):
        before = db_session.scalar(select(Product.version).where(Product.id == category_tree["tote"].id))

        service.bulk_update_status([category_tree["tote"].id], False, None, None)

        after = db_session.scalar(select(Product.version).where(Product.id == category_tree["tote"].id))
        assert after == before + 1

    def test_bulk_update_status_requires_ids(self, service):
        with pytest.raises(BadRequestError):
            service.bulk_update_status([], True, None, None)

    def test_list_by_unknown_category(self, service):
        with pytest.raises(NotFoundError):
            service.list_by_category(999)

    def test_list_paginated_returns_total(self, service, category_tree):
        items, total = service.list_paginated(limit=2, offset=4)
        assert total == 5
        assert len(items) == 1


class TestSupplierAndCatalogServices:

    def test_supplier_default_country(self, db_session):
        created = SupplierService(db_session).create({"name": "Joburg Goods"}, None, None)
        assert created.country == "South Africa"

    def test_supplier_explicit_country_kept(self, db_session):
        created = SupplierService(db_session).create({"name": "Gaborone Goods", "country": "Botswana"}, None, None)
        assert created.country == "Botswana"

    def test_supplier_delete_returns_counts(self, db_session, seed_supplier, category_tree):
        counts = SupplierService(db_session).delete(seed_supplier.id, None, None)
        assert counts == {"catalogs_updated": 1, "products_updated": 5}

    def test_catalog_without_supplier(self, db_session):
        created = CatalogService(db_session).create({"name": "House Brand"}, None, None)
        assert created.supplier_id is None
        assert created.supplier_name is None

    def test_catalog_rename_collision(self, db_session, seed_supplier, seed_catalog):
        service = CatalogService(db_session)
        other = service.create({"name": "Spring", "supplier_id": seed_supplier.id}, None, None)

        with pytest.raises(DuplicateEntityError):
            service.update(other.id, {"name": "SUMMER COLLECTION"}, None, None)


def test_unique_slug_suffixes():
    taken = {"shoes", "shoes-2"}
    assert unique_slug("shoes", taken.__contains__) == "shoes-3"
    assert unique_slug("bags", taken.__contains__) == "bags"


def test_database_failure_becomes_database_error(db_session, category_tree, monkeypatch):
    service = ProductService(db_session)

    def broken(*args, **kwargs):
        raise OperationalError("UPDATE products", {}, Exception("disk I/O error"))

    monkeypatch.setattr(service._products, "bulk_update_status", broken)

    with pytest.raises(DatabaseError):
        service.bulk_update_status([category_tree["tote"].id], False, None, None)
