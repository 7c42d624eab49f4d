"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from .errors import register_exception_handlers
from .middleware.auth import IdentityResolutionMiddleware
from .routes import health
from modules.auth.routes import router as auth_router
from modules.auth.sessions import resolve_session_secret
from modules.users.routes import router as users_router
from modules.products.routes import router as products_router
from modules.pricing.routes import router as pricing_router
from modules.projects.routes import router as projects_router
from modules.services.routes import router as services_router
from modules.team.routes import router as team_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    settings = get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Validates the session secret at startup: a production deployment
    without SESSION_SECRET refuses to start.
    """
    # Startup
    settings = get_settings()
    resolve_session_secret(settings)
    logger.info(f"Starting {settings.app_name} ({settings.environment}) on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    configure_logging()
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Accounts, catalog and team directory API for the Atelier site",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    register_exception_handlers(app)

    # Identity resolution runs inside CORS so preflight requests skip it
    app.add_middleware(IdentityResolutionMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api", tags=["auth"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(products_router, prefix="/api/products", tags=["products"])
    app.include_router(pricing_router, prefix="/api/pricing", tags=["pricing"])
    app.include_router(projects_router, prefix="/api/projects", tags=["projects"])
    app.include_router(services_router, prefix="/api/services", tags=["services"])
    app.include_router(team_router, prefix="/api/team", tags=["team"])

    return app


# Application instance for uvicorn
app = create_app()
