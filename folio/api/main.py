"""
Folio API Application Entry Point

FastAPI application setup with routers, middleware and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────┐
│                           FOLIO API                             │
├─────────────────────────────────────────────────────────────────┤
│   Middleware:   CORS → Request context → Error handlers         │
│                              │                                  │
│                              ▼                                  │
│   Routers:      Health │ Documents │ Admin                      │
│                              │                                  │
│                              ▼                                  │
│   Dependencies: Database │ Auth (JWT) │ DocumentService         │
└─────────────────────────────────────────────────────────────────┘

Usage:
======
    uvicorn folio.api.main:app --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio.config.settings import settings
from folio.shared.db import init_db, close_db
from folio.shared.core.logging import logger
from folio.api.middleware import setup_exception_handlers, setup_request_context
from folio.api.routes import register_routes


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup verifies the database connection; shutdown disposes the pool.
    """
    logger.info(
        "Starting Folio API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )
    await init_db()
    logger.info("Folio API started successfully")

    yield

    logger.info("Shutting down Folio API")
    await close_db()
    logger.info("Folio API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Document lifecycle backend: drafts, review, publication and slugs",
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    setup_request_context(app)

    # Added last so it wraps everything, including error responses
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS & ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)
    register_routes(app)

    return app


app = create_application()
