"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live  → Health check endpoints
    /documents              → Author and public document endpoints
    /admin                  → Review queue and dashboard stats

Usage:
======
    from folio.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from folio.api.handlers import (
    admin_handler,
    document_handler,
    health_handler,
)


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    app.include_router(
        document_handler.router,
        prefix="/documents",
        tags=["Documents"],
    )

    app.include_router(
        admin_handler.router,
        prefix="/admin",
        tags=["Admin"],
    )
