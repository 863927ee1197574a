"""
CORS (Cross-Origin Resource Sharing) configuration.
Configures allowed origins, methods, and headers for the API.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings


# Default origins for development (admin dashboard and storefront dev servers)
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",  # Storefront
    "http://localhost:5173",  # Vite default (admin dashboard)
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]

ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

ALLOWED_HEADERS = [
    "Authorization",
    "Content-Type",
    "X-Request-ID",
    "X-Requested-With",
    "Accept",
    "Accept-Language",
    "Cache-Control",
]


def get_cors_origins() -> list[str]:
    """
    Get CORS origins based on environment.

    In production: Uses ALLOWED_ORIGINS from settings (comma-separated).
    In development: Uses DEFAULT_CORS_ORIGINS.
    """
    if settings.allowed_origins:
        return [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    return DEFAULT_CORS_ORIGINS


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware on the FastAPI application."""
    # Short preflight cache in development so origin changes apply immediately
    max_age = 0 if settings.environment == "development" else 600

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=["X-Request-ID"],
        max_age=max_age,
    )
