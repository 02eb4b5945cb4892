"""
Document Handler

Author-facing and public document endpoints.

ARCHITECTURE:
=============
    Handler → DocumentService → Repositories → Models

Handlers only parse requests, call the service with the resolved principal
and shape responses. Status rules, slugs, redirects and counters are the
service's job; its DocumentError subclasses reach the client through the
global error handler.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from folio.api.dependencies import CurrentUser, DocumentServiceDep, OptionalUser, get_pagination
from folio.shared.models.enums import DocumentStatus
from folio.shared.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta, PaginationParams
from folio.shared.schemas.document import (
    CreateDocumentRequest,
    CreateDocumentResponse,
    DocumentListItem,
    DocumentResponse,
    EvictionPreviewResponse,
    PublishedDocumentListItem,
    PublishedDocumentResponse,
    SlugLookupResponse,
    UpdateContentRequest,
    UpdateCoverImageRequest,
    UpdateMetadataRequest,
    UpdateTitleRequest,
    UpdateTitleResponse,
    UpdateTypeRequest,
)
from folio.shared.core.exceptions import NotFoundError
from folio.shared.services.document_service import UNSET


router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════════
# CREATE & LIST
# ═══════════════════════════════════════════════════════════════════════════════


@router.post(
    "",
    response_model=CreateDocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_document(
    request: CreateDocumentRequest,
    current_user: CurrentUser,
    service: DocumentServiceDep,
):
    """Create a building document owned by the caller."""
    created = await service.create(
        current_user,
        title=request.title,
        type=request.type,
        content=request.content,
    )
    return CreateDocumentResponse(document_id=created.document_id, slug=created.slug)


@router.get("", response_model=PaginatedResponse[DocumentListItem])
async def list_my_documents(
    current_user: CurrentUser,
    service: DocumentServiceDep,
    pagination: PaginationParams = Depends(get_pagination),
    status_filter: Optional[DocumentStatus] = Query(None, alias="status"),
):
    """The caller's documents, newest first."""
    result = await service.list_for_author(
        current_user,
        status=status_filter,
        page=pagination.page,
        page_size=pagination.per_page,
    )
    return PaginatedResponse[DocumentListItem](
        data=[DocumentListItem.model_validate(doc) for doc in result.items],
        pagination=PaginationMeta.create(result.page, result.page_size, result.total),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PUBLIC READS
# ═══════════════════════════════════════════════════════════════════════════════
#
# Registered before /{document_id} so "published" and "by-slug" are not
# parsed as ids.


@router.get("/published", response_model=PaginatedResponse[PublishedDocumentListItem])
async def list_published_documents(
    service: DocumentServiceDep,
    pagination: PaginationParams = Depends(get_pagination),
):
    result = await service.list_published(page=pagination.page, page_size=pagination.per_page)
    return PaginatedResponse[PublishedDocumentListItem](
        data=[PublishedDocumentListItem.model_validate(doc) for doc in result.items],
        pagination=PaginationMeta.create(result.page, result.page_size, result.total),
    )


@router.get("/published/{document_id}", response_model=PublishedDocumentResponse)
async def get_published_document(document_id: UUID, service: DocumentServiceDep):
    document = await service.get_published(document_id)
    return PublishedDocumentResponse.model_validate(document)


@router.get("/by-slug/{slug}", response_model=SlugLookupResponse)
async def get_document_by_slug(slug: str, current_user: OptionalUser, service: DocumentServiceDep):
    """
    Resolve a slug.

    Retired slugs answer with is_redirect=true and the current slug so the
    client can redirect.
    """
    lookup = await service.get_by_slug(current_user, slug)
    if lookup is None:
        raise NotFoundError("Document")
    return SlugLookupResponse(
        is_redirect=lookup.is_redirect,
        current_slug=lookup.current_slug,
        document_id=lookup.document_id,
        document=DocumentResponse.model_validate(lookup.document) if lookup.document else None,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# SINGLE DOCUMENT
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(document_id: UUID, current_user: OptionalUser, service: DocumentServiceDep):
    document = await service.get(current_user, document_id)
    return DocumentResponse.model_validate(document)


@router.get("/{document_id}/edit", response_model=DocumentResponse)
async def get_document_for_edit(document_id: UUID, current_user: CurrentUser, service: DocumentServiceDep):
    document = await service.get_for_edit(current_user, document_id)
    return DocumentResponse.model_validate(document)


@router.get("/{document_id}/slug-eviction", response_model=EvictionPreviewResponse)
async def preview_slug_eviction(document_id: UUID, current_user: CurrentUser, service: DocumentServiceDep):
    """Which old link the next rename would break, so the UI can ask first."""
    preview = await service.preview_slug_eviction(current_user, document_id)
    return EvictionPreviewResponse(would_delete=preview.would_delete, count=preview.count)


# ═══════════════════════════════════════════════════════════════════════════════
# DRAFT EDITS
# ═══════════════════════════════════════════════════════════════════════════════


@router.patch("/{document_id}/title", response_model=UpdateTitleResponse)
async def update_title(
    document_id: UUID,
    request: UpdateTitleRequest,
    current_user: CurrentUser,
    service: DocumentServiceDep,
):
    result = await service.update_title(
        current_user,
        document_id,
        request.title,
        confirm_slug_deletion=request.confirm_slug_deletion,
    )
    return UpdateTitleResponse(slug=result.slug, slug_deleted=result.slug_deleted)


@router.patch("/{document_id}/type", response_model=MessageResponse)
async def update_type(
    document_id: UUID,
    request: UpdateTypeRequest,
    current_user: CurrentUser,
    service: DocumentServiceDep,
):
    await service.update_type(current_user, document_id, request.type)
    return MessageResponse(message="Document type updated")


@router.patch("/{document_id}/content", response_model=MessageResponse)
async def update_content(
    document_id: UUID,
    request: UpdateContentRequest,
    current_user: CurrentUser,
    service: DocumentServiceDep,
):
    await service.update_content(current_user, document_id, request.content)
    return MessageResponse(message="Document content saved")


@router.patch("/{document_id}/cover-image", response_model=MessageResponse)
async def update_cover_image(
    document_id: UUID,
    request: UpdateCoverImageRequest,
    current_user: CurrentUser,
    service: DocumentServiceDep,
):
    await service.update_cover_image(current_user, document_id, request.cover_image_id)
    return MessageResponse(message="Cover image updated")


@router.patch("/{document_id}/metadata", response_model=UpdateTitleResponse)
async def update_metadata(
    document_id: UUID,
    request: UpdateMetadataRequest,
    current_user: CurrentUser,
    service: DocumentServiceDep,
):
    """Apply the fields present in the body; explicit nulls clear them."""
    sent = request.model_fields_set
    result = await service.update_metadata(
        current_user,
        document_id,
        title=request.title if "title" in sent else UNSET,
        cover_image_id=request.cover_image_id if "cover_image_id" in sent else UNSET,
        curation=(
            (request.curation.model_dump(mode="json") if request.curation else None)
            if "curation" in sent
            else UNSET
        ),
        references=(
            ([ref.model_dump(mode="json") for ref in request.references] if request.references else None)
            if "references" in sent
            else UNSET
        ),
        confirm_slug_deletion=request.confirm_slug_deletion,
    )
    return UpdateTitleResponse(slug=result.slug, slug_deleted=result.slug_deleted)


# ═══════════════════════════════════════════════════════════════════════════════
# LIFECYCLE
# ═══════════════════════════════════════════════════════════════════════════════


@router.post("/{document_id}/submit", response_model=MessageResponse)
async def submit_document(document_id: UUID, current_user: CurrentUser, service: DocumentServiceDep):
    await service.submit(current_user, document_id)
    return MessageResponse(message="Document submitted for review")


@router.post("/{document_id}/publish", response_model=MessageResponse)
async def publish_document(document_id: UUID, current_user: CurrentUser, service: DocumentServiceDep):
    await service.publish(current_user, document_id)
    return MessageResponse(message="Document published")


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_document(document_id: UUID, current_user: CurrentUser, service: DocumentServiceDep):
    await service.remove(current_user, document_id)
