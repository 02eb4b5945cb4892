"""
Service Dependencies

FastAPI dependencies for service injection.

Services are created per request and only hold the request's session, so
no state is shared between requests.

Usage:
======
    from folio.api.dependencies.services import DocumentServiceDep

    @router.post("/{document_id}/publish")
    async def publish(document_id: UUID, user: CurrentUser, service: DocumentServiceDep):
        await service.publish(user, document_id)
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from folio.api.dependencies.database import get_db
from folio.shared.services.document_service import DocumentService


async def get_document_service(
    db: AsyncSession = Depends(get_db),
) -> DocumentService:
    """Dependency to get a DocumentService bound to the request session."""
    return DocumentService(db)


DocumentServiceDep = Annotated[DocumentService, Depends(get_document_service)]
