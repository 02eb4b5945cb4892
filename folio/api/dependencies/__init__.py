"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: CurrentUser, OptionalUser, CurrentAdmin
- Services: get_document_service(), DocumentServiceDep
- Pagination: get_pagination()

Usage:
======
    from folio.api.dependencies import CurrentUser, DocumentServiceDep

    @router.delete("/{document_id}")
    async def remove(document_id: UUID, user: CurrentUser, service: DocumentServiceDep):
        await service.remove(user, document_id)
"""

from folio.api.dependencies.database import (
    get_db,
    DbSession,
)
from folio.api.dependencies.auth import (
    get_current_user,
    get_optional_user,
    get_current_admin,
    CurrentUser,
    OptionalUser,
    CurrentAdmin,
)
from folio.api.dependencies.services import (
    get_document_service,
    DocumentServiceDep,
)
from folio.api.dependencies.pagination import get_pagination

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_current_user",
    "get_optional_user",
    "get_current_admin",
    "CurrentUser",
    "OptionalUser",
    "CurrentAdmin",
    # Services
    "get_document_service",
    "DocumentServiceDep",
    # Pagination
    "get_pagination",
]
