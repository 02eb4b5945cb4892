"""
API Handlers

Route handlers for the Folio API.

Handlers follow the pattern:
- Parse HTTP requests
- Call DocumentService with the resolved principal
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from folio.api.handlers import (
    admin_handler,
    document_handler,
    health_handler,
)

__all__ = [
    "admin_handler",
    "document_handler",
    "health_handler",
]
