"""
Admin Handler

Review queue and dashboard endpoints. Every route requires an admin
principal (CurrentAdmin); the service checks again before acting.

Reviewers never see who wrote a document: the queue and review
projections carry no author fields.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from folio.api.dependencies import CurrentAdmin, DocumentServiceDep, get_pagination
from folio.shared.core.exceptions import DocumentNotFoundError
from folio.shared.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta, PaginationParams
from folio.shared.schemas.document import (
    AdminReviewDocument,
    AdminStatsResponse,
    PendingDocumentListItem,
    RejectDocumentRequest,
)
from folio.shared.services.stats_service import StatsSnapshot


router = APIRouter()


def _stats_response(snapshot: StatsSnapshot) -> AdminStatsResponse:
    return AdminStatsResponse(
        total_documents=snapshot.total_documents,
        building_count=snapshot.building_count,
        pending_count=snapshot.pending_count,
        published_count=snapshot.published_count,
    )


@router.get("/documents/pending", response_model=PaginatedResponse[PendingDocumentListItem])
async def list_pending_documents(
    admin: CurrentAdmin,
    service: DocumentServiceDep,
    pagination: PaginationParams = Depends(get_pagination),
):
    """Review queue, newest first."""
    result = await service.list_pending_for_admin(admin, page=pagination.page, page_size=pagination.per_page)
    return PaginatedResponse[PendingDocumentListItem](
        data=[PendingDocumentListItem.model_validate(doc) for doc in result.items],
        pagination=PaginationMeta.create(result.page, result.page_size, result.total),
    )


@router.get("/documents/{document_id}/review", response_model=AdminReviewDocument)
async def get_document_for_review(document_id: UUID, admin: CurrentAdmin, service: DocumentServiceDep):
    copy = await service.get_for_admin_review(admin, document_id)
    if copy is None:
        raise DocumentNotFoundError(document_id)
    return AdminReviewDocument.model_validate(copy)


@router.post("/documents/{document_id}/approve", response_model=MessageResponse)
async def approve_document(document_id: UUID, admin: CurrentAdmin, service: DocumentServiceDep):
    await service.approve(admin, document_id)
    return MessageResponse(message="Document approved and published")


@router.post("/documents/{document_id}/reject", response_model=MessageResponse)
async def reject_document(
    document_id: UUID,
    request: RejectDocumentRequest,
    admin: CurrentAdmin,
    service: DocumentServiceDep,
):
    await service.reject(admin, document_id, request.reason)
    return MessageResponse(message="Document returned to the author")


@router.get("/stats", response_model=AdminStatsResponse)
async def get_admin_stats(admin: CurrentAdmin, service: DocumentServiceDep):
    return _stats_response(await service.get_admin_stats(admin))


@router.post("/stats/rebuild", response_model=AdminStatsResponse)
async def rebuild_admin_stats(admin: CurrentAdmin, service: DocumentServiceDep):
    """Recount documents per status and overwrite the counters."""
    return _stats_response(await service.rebuild_stats(admin))
