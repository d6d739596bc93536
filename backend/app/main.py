"""Rental Marketplace - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings
from app.core.database import Database
from app.core.env_validation import load_settings_or_exit, validate_environment
from app.core.exceptions import register_exception_handlers
from app.core.logging import configure_logging
from app.routers import (
    users_router,
    buildings_router,
    properties_router,
    booking_requests_router,
    preferences_router,
    matching_router,
    tenant_cv_router,
    shortlist_router,
)

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build an application bound to one settings object and one database."""
    if settings is None:
        # Hard-fails (exit 1) if required configuration is missing
        settings = load_settings_or_exit()
    else:
        validate_environment(settings)

    configure_logging(settings.log_level)
    database = Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        if settings.db_create_all:
            await database.create_all()
        logger.info(f"[STARTUP] {settings.app_name} ready")
        yield
        await database.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Rental marketplace: property listings, buildings, booking requests, tenant CVs and preference matching.",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.database = database

    # In production, wildcard (*) is blocked by env_validation.py
    logger.info(f"[STARTUP] CORS configured with origins: {settings.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # API v1 routers
    app.include_router(users_router, prefix=settings.api_v1_prefix)
    app.include_router(buildings_router, prefix=settings.api_v1_prefix)
    app.include_router(properties_router, prefix=settings.api_v1_prefix)
    app.include_router(booking_requests_router, prefix=settings.api_v1_prefix)
    app.include_router(preferences_router, prefix=settings.api_v1_prefix)
    app.include_router(matching_router, prefix=settings.api_v1_prefix)
    app.include_router(tenant_cv_router, prefix=settings.api_v1_prefix)
    app.include_router(shortlist_router, prefix=settings.api_v1_prefix)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": settings.app_name}

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": settings.app_name,
            "version": APP_VERSION,
            "docs": "/docs" if settings.debug else "Disabled in production",
        }

    return app
