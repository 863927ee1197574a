"""
Seed data for development and testing.
Creates the admin account and a small sample catalog. Idempotent.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Catalog, Category, Product, Supplier, User
from shared.config.constants import CategoryLevel, Roles
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.infrastructure.db import safe_commit
from shared.security.password import hash_password

logger = get_logger(__name__)


SEED_AUDIT_EMAIL = "seed@system"


def seed_admin(db: Session) -> User:
    """Create the configured admin account if it does not exist yet."""
    email = settings.seed_admin_email.lower()
    user = db.scalar(select(User).where(User.email == email))
    if user:
        return user

    user = User(
        email=email,
        password=hash_password(settings.seed_admin_password),
        first_name="Store",
        last_name="Admin",
        role=Roles.ADMIN,
        created_by_email=SEED_AUDIT_EMAIL,
    )
    db.add(user)
    db.flush()
    logger.info("Seeded admin user", user_id=user.id)
    return user


def seed_catalog(db: Session) -> None:
    """
    One supplier with one catalog, a Shoes > Sneakers category pair and a
    couple of products. Skipped when any category exists.
    """
    if db.scalar(select(Category.id).limit(1)):
        logger.info("Catalog already seeded, skipping")
        return

    supplier = Supplier(
        name="Cape Footwear Co",
        contact_name="Thandi Nkosi",
        email="orders@capefootwear.co.za",
        city="Cape Town",
        country=settings.default_country,
        created_by_email=SEED_AUDIT_EMAIL,
    )
    db.add(supplier)
    db.flush()

    catalog = Catalog(
        supplier_id=supplier.id,
        name="Summer Collection",
        description="Warm-weather footwear",
        created_by_email=SEED_AUDIT_EMAIL,
    )
    shoes = Category(
        name="Shoes",
        slug="shoes",
        level=CategoryLevel.PARENT,
        display_order=1,
        created_by_email=SEED_AUDIT_EMAIL,
    )
    db.add_all([catalog, shoes])
    db.flush()

    sneakers = Category(
        parent_id=shoes.id,
        name="Sneakers",
        slug="sneakers",
        level=CategoryLevel.CHILD,
        display_order=1,
        created_by_email=SEED_AUDIT_EMAIL,
    )
    db.add(sneakers)
    db.flush()

    db.add_all([
        Product(
            category_id=shoes.id,
            catalog_id=catalog.id,
            name="Leather Loafer",
            slug="leather-loafer",
            sku="CFC-LOAF-001",
            price=899.0,
            stock_quantity=12,
            created_by_email=SEED_AUDIT_EMAIL,
        ),
        Product(
            category_id=sneakers.id,
            catalog_id=catalog.id,
            name="Canvas Runner",
            slug="canvas-runner",
            sku="CFC-RUN-001",
            price=649.0,
            sale_price=549.0,
            stock_quantity=30,
            is_featured=True,
            created_by_email=SEED_AUDIT_EMAIL,
        ),
    ])
    db.flush()
    logger.info("Seeded sample catalog", supplier_id=supplier.id, catalog_id=catalog.id)


def seed(db: Session) -> None:
    """Seed everything and commit once."""
    seed_admin(db)
    seed_catalog(db)
    safe_commit(db)
