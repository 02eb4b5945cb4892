"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schemas, pagination, message and health responses
- document: Document requests and read projections

Usage:
======
    from folio.shared.schemas.document import CreateDocumentRequest, DocumentResponse
    from folio.shared.schemas.common import PaginatedResponse, PaginationMeta
"""

from folio.shared.schemas.common import (
    BaseSchema,
    PaginationParams,
    PaginationMeta,
    PaginatedResponse,
    MessageResponse,
    HealthResponse,
)
from folio.shared.schemas.document import (
    Curation,
    Reference,
    PublicAuthor,
    CreateDocumentRequest,
    UpdateTitleRequest,
    UpdateTypeRequest,
    UpdateContentRequest,
    UpdateCoverImageRequest,
    UpdateMetadataRequest,
    RejectDocumentRequest,
    CreateDocumentResponse,
    UpdateTitleResponse,
    EvictionPreviewResponse,
    DocumentResponse,
    DocumentListItem,
    PendingDocumentListItem,
    AdminReviewDocument,
    PublishedDocumentListItem,
    PublishedDocumentResponse,
    SlugLookupResponse,
    AdminStatsResponse,
)

__all__ = [
    "BaseSchema",
    "PaginationParams",
    "PaginationMeta",
    "PaginatedResponse",
    "MessageResponse",
    "HealthResponse",
    "Curation",
    "Reference",
    "PublicAuthor",
    "CreateDocumentRequest",
    "UpdateTitleRequest",
    "UpdateTypeRequest",
    "UpdateContentRequest",
    "UpdateCoverImageRequest",
    "UpdateMetadataRequest",
    "RejectDocumentRequest",
    "CreateDocumentResponse",
    "UpdateTitleResponse",
    "EvictionPreviewResponse",
    "DocumentResponse",
    "DocumentListItem",
    "PendingDocumentListItem",
    "AdminReviewDocument",
    "PublishedDocumentListItem",
    "PublishedDocumentResponse",
    "SlugLookupResponse",
    "AdminStatsResponse",
]
