"""
Infrastructure module: database sessions and request correlation.

Provides:
- Database sessions and transactions (db.py)
- Correlation IDs for request tracing (correlation.py)
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    get_db_context,
    safe_commit,
)
from shared.infrastructure.correlation import (
    CorrelationIdMiddleware,
    CorrelationIdFilter,
    get_request_id,
)

__all__ = [
    # db
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "safe_commit",
    # correlation
    "CorrelationIdMiddleware",
    "CorrelationIdFilter",
    "get_request_id",
]
