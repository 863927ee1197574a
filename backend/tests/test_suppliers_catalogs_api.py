"""
Tests for supplier and catalog endpoints and their status cascades.
"""

from sqlalchemy import select

from rest_api.models import Catalog, Product, Supplier


class TestSupplierEndpoints:

    def test_create_supplier_defaults_country(self, client, auth_headers):
        response = client.post(
            "/api/suppliers",
            headers=auth_headers,
            json={"name": "Durban Leather", "contactName": "Sipho Dlamini"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["country"] == "South Africa"
        assert data["contactName"] == "Sipho Dlamini"

    def test_list_and_get(self, client, seed_supplier):
        listed = client.get("/api/suppliers").json()
        assert [s["name"] for s in listed] == ["Cape Footwear Co"]

        response = client.get(f"/api/suppliers/{seed_supplier.id}")
        assert response.status_code == 200
        assert response.json()["id"] == seed_supplier.id

    def test_get_unknown_supplier_returns_404(self, client, db_session):
        response = client.get("/api/suppliers/77")
        assert response.status_code == 404
        assert response.json()["details"]["resource_type"] == "Supplier"

    def test_deactivation_cascades(self, client, auth_headers, db_session, seed_supplier, category_tree):
        response = client.put(
            f"/api/suppliers/{seed_supplier.id}",
            headers=auth_headers,
            json={"isActive": False},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["isActive"] is False
        assert data["catalogsUpdated"] == 1
        assert data["productsUpdated"] == 5
        assert db_session.scalars(select(Product).where(Product.is_active.is_(True))).all() == []

    def test_reactivation_does_not_cascade(self, client, auth_headers, db_session, seed_supplier, seed_catalog, category_tree):
        client.put(f"/api/suppliers/{seed_supplier.id}", headers=auth_headers, json={"isActive": False})

        response = client.put(
            f"/api/suppliers/{seed_supplier.id}",
            headers=auth_headers,
            json={"isActive": True},
        )

        data = response.json()
        assert data["isActive"] is True
        assert data["catalogsUpdated"] == 0
        assert data["productsUpdated"] == 0
        assert db_session.get(Catalog, seed_catalog.id).is_active is False
        assert db_session.get(Product, category_tree["runner"].id).is_active is False

    def test_plain_update_does_not_cascade(self, client, auth_headers, db_session, seed_supplier, seed_catalog):
        response = client.put(
            f"/api/suppliers/{seed_supplier.id}",
            headers=auth_headers,
            json={"phone": "+27 21 555 0100"},
        )
        assert response.json()["catalogsUpdated"] == 0
        assert db_session.get(Catalog, seed_catalog.id).is_active is True

    def test_delete_is_soft_and_cascades(self, client, auth_headers, db_session, seed_supplier, seed_catalog):
        response = client.delete(f"/api/suppliers/{seed_supplier.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["catalogsUpdated"] == 1
        supplier = db_session.get(Supplier, seed_supplier.id)
        assert supplier.is_active is False
        assert supplier.deleted_at is not None
        assert db_session.get(Catalog, seed_catalog.id).is_active is False

    def test_mutations_require_admin(self, client, user_auth_headers, seed_supplier):
        assert client.post("/api/suppliers", headers=user_auth_headers, json={"name": "X"}).status_code == 403
        assert client.delete(f"/api/suppliers/{seed_supplier.id}").status_code == 401


class TestCatalogEndpoints:

    def test_create_catalog(self, client, auth_headers, seed_supplier):
        response = client.post(
            "/api/catalogs",
            headers=auth_headers,
            json={"supplierId": seed_supplier.id, "name": "Autumn Drop"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["supplierName"] == "Cape Footwear Co"
        assert data["defaultMarkupPercentage"] == 50

    def test_name_unique_per_supplier_ignoring_case(self, client, auth_headers, seed_catalog):
        response = client.post(
            "/api/catalogs",
            headers=auth_headers,
            json={"supplierId": seed_catalog.supplier_id, "name": "summer collection"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "RESOURCE_EXISTS"

    def test_unknown_supplier_rejected(self, client, auth_headers):
        response = client.post(
            "/api/catalogs",
            headers=auth_headers,
            json={"supplierId": 999, "name": "Ghost"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_status_change_is_symmetric(self, client, auth_headers, db_session, seed_catalog, category_tree):
        hidden = client.put(
            f"/api/catalogs/{seed_catalog.id}",
            headers=auth_headers,
            json={"isActive": False},
        ).json()
        assert hidden["productsUpdated"] == 5
        assert db_session.get(Product, category_tree["loafer"].id).is_active is False

        shown = client.put(
            f"/api/catalogs/{seed_catalog.id}",
            headers=auth_headers,
            json={"isActive": True},
        ).json()
        assert shown["isActive"] is True
        assert shown["productsUpdated"] == 5
        assert db_session.get(Product, category_tree["loafer"].id).is_active is True

    def test_update_without_status_leaves_products(self, client, auth_headers, seed_catalog, category_tree):
        response = client.put(
            f"/api/catalogs/{seed_catalog.id}",
            headers=auth_headers,
            json={"description": "Light shoes"},
        )
        assert response.status_code == 200
        assert response.json()["productsUpdated"] == 0

    def test_search_matches_supplier_name(self, client, seed_catalog):
        response = client.get("/api/catalogs?q=footwear")
        assert [c["name"] for c in response.json()] == ["Summer Collection"]

        assert client.get("/api/catalogs?q=nothing-like-this").json() == []

    def test_active_only(self, client, auth_headers, db_session, seed_catalog):
        db_session.get(Catalog, seed_catalog.id).is_active = False
        db_session.commit()

        assert client.get("/api/catalogs?active_only=true", headers=auth_headers).json() == []
        assert len(client.get("/api/catalogs", headers=auth_headers).json()) == 1

    def test_by_supplier(self, client, seed_catalog):
        response = client.get(f"/api/catalogs/supplier/{seed_catalog.supplier_id}")
        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [seed_catalog.id]

    def test_delete_hides_products(self, client, auth_headers, db_session, seed_catalog, category_tree):
        response = client.delete(f"/api/catalogs/{seed_catalog.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["productsUpdated"] == 5
        assert db_session.get(Product, category_tree["tote"].id).is_active is False
