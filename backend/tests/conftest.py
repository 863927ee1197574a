"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from shared.infrastructure.db import get_db
from shared.security.auth import sign_jwt
from shared.security.password import hash_password
from rest_api.models import Base, Catalog, Category, Product, Supplier, User


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Users and auth
# =============================================================================


@pytest.fixture
def seed_admin_user(db_session):
    """Create an admin user for testing authenticated endpoints."""
    user = User(
        email="admin@test.com",
        password=hash_password("testpass123"),
        first_name="Test",
        last_name="Admin",
        role="admin",
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def seed_regular_user(db_session):
    """Create a non-admin user."""
    user = User(
        email="shopper@test.com",
        password=hash_password("shopper123"),
        first_name="Test",
        last_name="Shopper",
        role="user",
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(client, seed_admin_user):
    """Get admin authentication headers via the login endpoint."""
    response = client.post(
        "/api/auth/login",
        json={"email": "admin@test.com", "password": "testpass123"},
    )
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_auth_headers(seed_regular_user):
    """Headers for an authenticated user without the admin role."""
    token = sign_jwt({
        "sub": str(seed_regular_user.id),
        "email": seed_regular_user.email,
        "role": "user",
    })
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Catalog data
# =============================================================================


@pytest.fixture
def seed_supplier(db_session):
    supplier = Supplier(name="Cape Footwear Co", country="South Africa")
    db_session.add(supplier)
    db_session.commit()
    db_session.refresh(supplier)
    return supplier


@pytest.fixture
def seed_catalog(db_session, seed_supplier):
    catalog = Catalog(supplier_id=seed_supplier.id, name="Summer Collection")
    db_session.add(catalog)
    db_session.commit()
    db_session.refresh(catalog)
    return catalog


@pytest.fixture
def category_tree(db_session, seed_catalog):
    """
    Shoes (level 0) with children Sneakers and Boots, plus a sibling
    top-level category Bags. Products:

    - Loafer: directly in Shoes
    - Runner, Trainer: in Sneakers
    - Chelsea: in Boots
    - Tote: in Bags
    """
    shoes = Category(name="Shoes", slug="shoes", level=0, display_order=1)
    bags = Category(name="Bags", slug="bags", level=0, display_order=2)
    db_session.add_all([shoes, bags])
    db_session.flush()

    sneakers = Category(parent_id=shoes.id, name="Sneakers", slug="sneakers", level=1, display_order=1)
    boots = Category(parent_id=shoes.id, name="Boots", slug="boots", level=1, display_order=2)
    db_session.add_all([sneakers, boots])
    db_session.flush()

    def product(name: str, category: Category) -> Product:
        return Product(
            name=name,
            slug=name.lower(),
            sku=f"SKU-{name.upper()}",
            price=500.0,
            category_id=category.id,
            catalog_id=seed_catalog.id,
        )

    products = {
        "loafer": product("Loafer", shoes),
        "runner": product("Runner", sneakers),
        "trainer": product("Trainer", sneakers),
        "chelsea": product("Chelsea", boots),
        "tote": product("Tote", bags),
    }
    db_session.add_all(products.values())
    db_session.commit()

    return {
        "shoes": shoes,
        "bags": bags,
        "sneakers": sneakers,
        "boots": boots,
        **products,
    }
