"""
Folio SQLAlchemy Models

Model Hierarchy:
================
    Author
       └── documents (Document[])
              └── slug_redirects (SlugRedirect[], via document_id)

    DocumentStats (singleton, id = 1)

Models Overview:
================
- Base: Declarative base, timestamp mixin, portable JSON type
- Author: Public profile mapped from an auth identity
- Document: The writing and its lifecycle state
- SlugRedirect: Retired slugs that still resolve to a document
- DocumentStats: Per-status counters for the admin dashboard

Usage:
======
    from folio.shared.models import Document, DocumentStatus

    pending = await repo.list_by_status(DocumentStatus.PENDING)
"""

from folio.shared.models.base import Base, TimestampMixin, JSONType
from folio.shared.models.enums import DocumentStatus, DocumentType
from folio.shared.models.author import Author
from folio.shared.models.document import Document
from folio.shared.models.slug_redirect import SlugRedirect
from folio.shared.models.document_stats import DocumentStats, STATS_ROW_ID

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    "JSONType",
    # Enums
    "DocumentStatus",
    "DocumentType",
    # Models
    "Author",
    "Document",
    "SlugRedirect",
    "DocumentStats",
    "STATS_ROW_ID",
]
