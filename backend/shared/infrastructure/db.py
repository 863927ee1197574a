"""
Database configuration and session management.
Uses SQLAlchemy 2.0 patterns.
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from shared.config.settings import DATABASE_URL, settings


def _calculate_pool_size() -> int:
    """
    Calculate pool size based on CPU cores.
    Formula: (2 * CPU cores) + 1, capped at 20.
    """
    cores = os.cpu_count() or 4
    return min(cores * 2 + 1, 20)


def _engine_options(url: str) -> dict[str, Any]:
    """Engine keyword arguments appropriate for the configured backend."""
    if url.startswith("sqlite"):
        # Single shared connection so in-memory databases survive across sessions
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": _calculate_pool_size(),
        "max_overflow": 15,
        "pool_timeout": 30,  # Wait max 30s for connection from pool
        "pool_recycle": 1800,  # Recycle connections after 30 minutes
        "connect_args": {"connect_timeout": 10},
    }


engine = create_engine(
    DATABASE_URL,
    echo=settings.database_echo,
    **_engine_options(DATABASE_URL),
)

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.scalars(select(Item)).all()

    The session is automatically closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI.

    Usage:
        with get_db_context() as db:
            db.scalars(select(Item)).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Commit with automatic rollback on failure.

    Raises the original exception after rolling back.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
