"""
Document-related Pydantic schemas.

Projections:
============
    DocumentResponse            ← author's full view (get, get_for_edit)
    DocumentListItem            ← author's dashboard rows (no content)
    PendingDocumentListItem     ← admin queue rows (no author)
    AdminReviewDocument         ← admin review page (no author)
    PublishedDocumentListItem   ← public listing, with PublicAuthor
    PublishedDocumentResponse   ← public article, with PublicAuthor
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl, field_validator

from folio.shared.models.enums import DocumentStatus, DocumentType
from folio.shared.schemas.common import BaseSchema


# ═══════════════════════════════════════════════════════════════════════════════
# NESTED VALUES
# ═══════════════════════════════════════════════════════════════════════════════


class Curation(BaseModel):
    """Source a curated document comments on."""

    source_url: HttpUrl
    source_title: str = Field(min_length=1, max_length=500)
    source_author: Optional[str] = Field(None, max_length=255)
    spin: str = Field(min_length=1, description="The curator's take on the source")


class Reference(BaseModel):
    url: HttpUrl
    title: str = Field(min_length=1, max_length=500)
    author: Optional[str] = Field(None, max_length=255)


class PublicAuthor(BaseSchema):
    id: UUID
    name: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# REQUESTS
# ═══════════════════════════════════════════════════════════════════════════════


class CreateDocumentRequest(BaseModel):
    """Request to create a document."""

    title: str = Field("", max_length=500)
    type: DocumentType
    content: Optional[dict[str, Any]] = Field(None, description="Editor JSON")


class UpdateTitleRequest(BaseModel):
    title: str = Field(max_length=500)
    confirm_slug_deletion: bool = Field(
        False,
        description="Accept that the oldest redirect is deleted by this rename",
    )


class UpdateTypeRequest(BaseModel):
    type: DocumentType


class UpdateContentRequest(BaseModel):
    content: dict[str, Any]


class UpdateCoverImageRequest(BaseModel):
    cover_image_id: Optional[str] = Field(None, max_length=255)


class UpdateMetadataRequest(BaseModel):
    """
    Partial metadata update.

    Only fields present in the body are applied; an explicit null clears
    cover_image_id, curation or references.
    """

    title: Optional[str] = Field(None, max_length=500)
    cover_image_id: Optional[str] = Field(None, max_length=255)
    curation: Optional[Curation] = None
    references: Optional[list[Reference]] = None
    confirm_slug_deletion: bool = False

    @field_validator("title")
    @classmethod
    def _title_not_null(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            raise ValueError("title cannot be null")
        return value


class RejectDocumentRequest(BaseModel):
    reason: str = Field(min_length=1, max_length=5000)


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class CreateDocumentResponse(BaseModel):
    document_id: UUID
    slug: str


class UpdateTitleResponse(BaseModel):
    slug: str
    slug_deleted: Optional[str] = Field(
        None,
        description="Retired slug that stopped resolving because of this rename",
    )


class EvictionPreviewResponse(BaseModel):
    would_delete: Optional[str] = None
    count: int


class DocumentResponse(BaseSchema):
    """Full document as its author sees it."""

    id: UUID
    author_id: UUID
    title: str
    slug: str
    content: dict[str, Any]
    type: DocumentType
    status: DocumentStatus
    cover_image_id: Optional[str] = None
    curation: Optional[dict[str, Any]] = None
    references: Optional[list[dict[str, Any]]] = None
    rejection_reason: Optional[str] = None
    submitted_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class DocumentListItem(BaseSchema):
    id: UUID
    title: str
    slug: str
    type: DocumentType
    status: DocumentStatus
    cover_image_id: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PendingDocumentListItem(BaseSchema):
    """Admin queue row; deliberately without author fields."""

    id: UUID
    title: str
    type: DocumentType
    submitted_at: Optional[datetime] = None
    created_at: datetime


class AdminReviewDocument(BaseSchema):
    id: UUID
    title: str
    type: DocumentType
    content: dict[str, Any]
    curation: Optional[dict[str, Any]] = None
    references: Optional[list[dict[str, Any]]] = None
    cover_image_id: Optional[str] = None
    submitted_at: Optional[datetime] = None
    created_at: datetime


class PublishedDocumentListItem(BaseSchema):
    id: UUID
    title: str
    slug: str
    type: DocumentType
    cover_image_id: Optional[str] = None
    published_at: Optional[datetime] = None
    author: PublicAuthor


class PublishedDocumentResponse(PublishedDocumentListItem):
    content: dict[str, Any]
    curation: Optional[dict[str, Any]] = None
    references: Optional[list[dict[str, Any]]] = None


class SlugLookupResponse(BaseModel):
    """
    Result of resolving a slug.

    For a retired slug, is_redirect is true and current_slug names where
    the document lives now; document is omitted.
    """

    is_redirect: bool = False
    current_slug: Optional[str] = None
    document_id: Optional[UUID] = None
    document: Optional[DocumentResponse] = None


class AdminStatsResponse(BaseModel):
    total_documents: int
    building_count: int
    pending_count: int
    published_count: int
