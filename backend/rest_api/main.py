"""
Storefront back-office REST API.

Serves the catalog (suppliers, catalogs, categories, products) and the admin
operations that change it, including the visibility cascades.
"""

from fastapi import FastAPI

from shared.config.settings import settings
from shared.security.rate_limit import limiter
from rest_api.core.cors import configure_cors
from rest_api.core.exception_handlers import register_exception_handlers
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.admin import router as admin_router
from rest_api.routers.auth import router as auth_router
from rest_api.routers.public import catalog_router, health_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront REST API",
        description="Catalog back-office API",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Rate limiting
    app.state.limiter = limiter

    register_exception_handlers(app)
    register_middlewares(app)
    configure_cors(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(catalog_router)
    app.include_router(admin_router)

    return app


app = create_app()


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=settings.environment == "development",
    )
