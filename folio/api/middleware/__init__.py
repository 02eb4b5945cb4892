"""
API Middleware

Custom middleware for the FastAPI application.

Components:
===========
- error_handler: Global exception handling
- request_context: Per-request logging context

Usage:
======
    from folio.api.middleware import setup_exception_handlers, setup_request_context

    app = FastAPI()
    setup_exception_handlers(app)
    setup_request_context(app)
"""

from folio.api.middleware.error_handler import setup_exception_handlers
from folio.api.middleware.request_context import setup_request_context

__all__ = [
    "setup_exception_handlers",
    "setup_request_context",
]
