"""
Tests for hidden rows on the public read endpoints.

Only admins can ask for inactive or soft-deleted rows; other callers get
visible rows whatever switches they pass.
"""

import pytest

from rest_api.models import Catalog, Category, Product, Supplier


@pytest.fixture
def hidden_rows(db_session, category_tree, seed_catalog, seed_supplier):
    """Hide Tote, the Bags category, the summer catalog and a second supplier."""
    db_session.get(Product, category_tree["tote"].id).is_active = False
    db_session.get(Category, category_tree["bags"].id).is_active = False
    db_session.get(Catalog, seed_catalog.id).is_active = False
    retired = Supplier(name="Retired Supplier", is_active=False)
    db_session.add(retired)
    db_session.commit()
    return {"retired": retired, **category_tree}


class TestAnonymousCallers:

    def test_include_inactive_ignored_for_products(self, client, hidden_rows):
        response = client.get("/api/products?include_inactive=true")

        assert response.status_code == 200
        names = {p["name"] for p in response.json()["items"]}
        assert "Tote" not in names
        assert response.json()["pagination"]["total"] == 4

    def test_include_inactive_ignored_for_categories(self, client, hidden_rows):
        names = {c["name"] for c in client.get("/api/categories?include_inactive=true").json()}
        assert "Bags" not in names

    def test_include_inactive_ignored_for_suppliers(self, client, hidden_rows):
        names = {s["name"] for s in client.get("/api/suppliers?include_inactive=true").json()}
        assert names == {"Cape Footwear Co"}

    def test_hidden_product_by_id_is_not_found(self, client, hidden_rows):
        response = client.get(f"/api/products/{hidden_rows['tote'].id}?include_inactive=true")
        assert response.status_code == 404

    def test_inactive_catalogs_are_not_listed(self, client, hidden_rows, seed_catalog):
        assert client.get("/api/catalogs").json() == []
        assert client.get(f"/api/catalogs/supplier/{seed_catalog.supplier_id}").json() == []


class TestAuthenticatedCallers:

    def test_regular_user_gets_visible_rows_only(self, client, user_auth_headers, hidden_rows):
        response = client.get("/api/products?include_inactive=true", headers=user_auth_headers)
        assert response.json()["pagination"]["total"] == 4

    def test_admin_sees_hidden_rows(self, client, auth_headers, hidden_rows):
        products = client.get("/api/products?include_inactive=true", headers=auth_headers).json()
        suppliers = client.get("/api/suppliers?include_inactive=true", headers=auth_headers).json()
        tote = client.get(
            f"/api/products/{hidden_rows['tote'].id}?include_inactive=true",
            headers=auth_headers,
        )

        assert products["pagination"]["total"] == 5
        assert "Retired Supplier" in {s["name"] for s in suppliers}
        assert tote.status_code == 200
        assert tote.json()["isActive"] is False

    def test_admin_catalog_list_includes_inactive(self, client, auth_headers, hidden_rows):
        catalogs = client.get("/api/catalogs", headers=auth_headers).json()
        assert [c["name"] for c in catalogs] == ["Summer Collection"]

    def test_invalid_token_rejected(self, client, hidden_rows):
        response = client.get(
            "/api/products?include_inactive=true",
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert response.status_code == 401
