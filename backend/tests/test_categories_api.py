"""
Tests for category endpoints, including the visibility toggle.
"""

import pytest
from sqlalchemy import select

from rest_api.models import Category, Product
from rest_api.repositories import ProductRepository


class TestCategoryVisibilityEndpoint:
    """PUT/POST /api/categories/{id}/visibility"""

    @pytest.fixture
    def shoes_and_sneakers(self, db_session):
        """Shoes (top-level) > Sneakers with three products."""
        shoes = Category(id=5, name="Shoes", slug="shoes", level=0)
        db_session.add(shoes)
        db_session.flush()
        sneakers = Category(id=12, parent_id=5, name="Sneakers", slug="sneakers", level=1)
        db_session.add(sneakers)
        db_session.flush()
        for product_id in (100, 101, 102):
            db_session.add(Product(
                id=product_id,
                name=f"Sneaker {product_id}",
                slug=f"sneaker-{product_id}",
                price=799.0,
                category_id=12,
            ))
        db_session.commit()

    def test_hide_parent_category_end_to_end(self, client, auth_headers, db_session, shoes_and_sneakers):
        response = client.put(
            "/api/categories/5/visibility",
            headers=auth_headers,
            json={"isActive": False, "cascade": True},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 5
        assert data["isActive"] is False
        assert data["productsUpdated"] == 3
        assert data["subcategoriesUpdated"] == 1
        assert data["cascaded"] is True

        assert db_session.get(Category, 12).is_active is False
        for product_id in (100, 101, 102):
            assert db_session.get(Product, product_id).is_active is False

    def test_post_is_accepted_too(self, client, auth_headers, shoes_and_sneakers):
        response = client.post(
            "/api/categories/5/visibility",
            headers=auth_headers,
            json={"is_active": False},
        )
        assert response.status_code == 200
        # cascade defaults to true
        assert response.json()["cascaded"] is True
        assert response.json()["subcategoriesUpdated"] == 1

    def test_cascade_false(self, client, auth_headers, db_session, shoes_and_sneakers):
        response = client.put(
            "/api/categories/5/visibility",
            headers=auth_headers,
            json={"isActive": False, "cascade": False},
        )
        data = response.json()
        assert data["cascaded"] is False
        assert data["subcategoriesUpdated"] == 0
        assert data["productsUpdated"] == 0
        assert db_session.get(Category, 12).is_active is True

    def test_missing_category_returns_404(self, client, auth_headers):
        response = client.put(
            "/api/categories/999/visibility",
            headers=auth_headers,
            json={"isActive": False},
        )
        assert response.status_code == 404
        body = response.json()
        assert body["status"] == "error"
        assert body["code"] == "NOT_FOUND"
        assert body["path"] == "/api/categories/999/visibility"

    @pytest.mark.parametrize("payload", [
        {},
        {"isActive": "no"},
        {"isActive": 0},
        {"isActive": False, "cascade": "yes"},
        {"isActive": False, "unexpected": 1},
    ])
    def test_invalid_body_returns_400(self, client, auth_headers, shoes_and_sneakers, payload):
        response = client.put("/api/categories/5/visibility", headers=auth_headers, json=payload)
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["details"]["errors"]

    def test_cascade_failure_returns_generic_500(self, client, auth_headers, db_session, shoes_and_sneakers, monkeypatch):
        def lose_connection(*args, **kwargs):
            raise RuntimeError("connection to 10.0.0.5 lost")

        monkeypatch.setattr(ProductRepository, "bulk_update_category_products", lose_connection)

        response = client.put(
            "/api/categories/5/visibility",
            headers=auth_headers,
            json={"isActive": False},
        )

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "INTERNAL_SERVER_ERROR"
        assert "10.0.0.5" not in response.text
        assert "Traceback" not in response.text
        db_session.expire_all()
        assert db_session.get(Category, 5).is_active is True
        assert db_session.get(Category, 12).is_active is True

    def test_requires_authentication(self, client, shoes_and_sneakers):
        response = client.put("/api/categories/5/visibility", json={"isActive": False})
        assert response.status_code == 401

    def test_non_admin_forbidden(self, client, user_auth_headers, db_session, shoes_and_sneakers):
        response = client.put(
            "/api/categories/5/visibility",
            headers=user_auth_headers,
            json={"isActive": False},
        )
        assert response.status_code == 403
        assert db_session.get(Category, 5).is_active is True


class TestCategoryCrud:

    def test_list_hides_inactive_by_default(self, client, auth_headers, db_session, category_tree):
        db_session.get(Category, category_tree["bags"].id).is_active = False
        db_session.commit()

        visible = client.get("/api/categories").json()
        everything = client.get("/api/categories?include_inactive=true", headers=auth_headers).json()

        assert "Bags" not in {c["name"] for c in visible}
        assert "Bags" in {c["name"] for c in everything}

    def test_list_filters_by_parent_and_level(self, client, category_tree):
        shoes_id = category_tree["shoes"].id

        children = client.get(f"/api/categories?parent_id={shoes_id}").json()
        top_level = client.get("/api/categories?level=0").json()

        assert [c["name"] for c in children] == ["Sneakers", "Boots"]
        assert {c["name"] for c in top_level} == {"Shoes", "Bags"}

    def test_get_category(self, client, category_tree):
        response = client.get(f"/api/categories/{category_tree['sneakers'].id}")
        assert response.status_code == 200
        data = response.json()
        assert data["slug"] == "sneakers"
        assert data["parentId"] == category_tree["shoes"].id
        assert data["level"] == 1

    def test_create_top_level_category(self, client, auth_headers):
        response = client.post(
            "/api/categories",
            headers=auth_headers,
            json={"name": "Home & Garden"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "home-garden"
        assert data["level"] == 0
        assert data["displayOrder"] == 1
        assert data["isActive"] is True

    def test_create_child_category_derives_level(self, client, auth_headers, category_tree):
        response = client.post(
            "/api/categories",
            headers=auth_headers,
            json={"name": "Sandals", "parentId": category_tree["shoes"].id},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["level"] == 1
        # Sneakers and Boots already hold display orders 1 and 2
        assert data["displayOrder"] == 3

    def test_create_grandchild_rejected(self, client, auth_headers, category_tree):
        response = client.post(
            "/api/categories",
            headers=auth_headers,
            json={"name": "High Tops", "parentId": category_tree["sneakers"].id},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_duplicate_name_under_same_parent_rejected(self, client, auth_headers, category_tree):
        response = client.post(
            "/api/categories",
            headers=auth_headers,
            json={"name": "sneakers", "parentId": category_tree["shoes"].id},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "RESOURCE_EXISTS"

    def test_generated_slug_is_unique(self, client, auth_headers, category_tree):
        # "Sneakers" under Bags is allowed, but the slug "sneakers" is taken
        response = client.post(
            "/api/categories",
            headers=auth_headers,
            json={"name": "Sneakers", "parentId": category_tree["bags"].id},
        )
        assert response.status_code == 201
        assert response.json()["slug"] == "sneakers-2"

    def test_update_does_not_cascade(self, client, auth_headers, db_session, category_tree):
        response = client.put(
            f"/api/categories/{category_tree['shoes'].id}",
            headers=auth_headers,
            json={"name": "Footwear", "description": "All shoes"},
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Footwear"

    def test_update_rejects_is_active(self, client, auth_headers, category_tree):
        response = client.put(
            f"/api/categories/{category_tree['shoes'].id}",
            headers=auth_headers,
            json={"isActive": False},
        )
        assert response.status_code == 400

    def test_delete_runs_full_cascade(self, client, auth_headers, db_session, category_tree):
        response = client.delete(
            f"/api/categories/{category_tree['shoes'].id}",
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["subcategoriesUpdated"] == 2
        assert data["productsUpdated"] == 4

        shoes = db_session.get(Category, category_tree["shoes"].id)
        assert shoes.is_active is False
        assert shoes.deleted_at is not None
        active = db_session.scalars(select(Product.name).where(Product.is_active.is_(True))).all()
        assert active == ["Tote"]

    def test_create_requires_admin(self, client, user_auth_headers):
        response = client.post("/api/categories", headers=user_auth_headers, json={"name": "Nope"})
        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"
