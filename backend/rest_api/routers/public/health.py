"""
Health check endpoint for the REST API.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.config.logging import rest_api_logger as logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db


router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Service status with a database ping.
    Returns 503 Service Unavailable if the database cannot be reached.
    """
    checks = {
        "service": "rest-api",
        "environment": settings.environment,
    }
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check: database unreachable", error=str(e))
        return JSONResponse(
            status_code=503,
            content={**checks, "status": "unhealthy", "database": "unreachable"},
        )
    return {**checks, "status": "healthy", "database": "ok"}
