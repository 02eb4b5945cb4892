"""
Document Entity Model

A piece of writing moving through building → pending → published.

Slug Rules:
===========
- `slug` is unique across all documents at all times
- A slug retired by a rename lives on in slug_redirects and stays taken
- Only changed through the title/content edit paths while status = building

SAMPLE DOCUMENT RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                 │ 550e8400-e29b-41d4-a716-446655440000                    │
│ author_id          │ 660e8400-e29b-41d4-a716-446655440000                    │
│ title              │ "Why Slugs Matter"                                      │
│ slug               │ "why-slugs-matter"                                      │
│ type               │ "curated"                                               │
│ status             │ "pending"                                               │
│ curation           │ {"source_url": "https://...", "spin": "..."}            │
│ submission_history │ [1718000000000, 1718090000000]                          │
│ rejection_reason   │ null                                                    │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from folio.shared.models.base import Base, JSONType, TimestampMixin
from folio.shared.models.enums import DocumentStatus, DocumentType


if TYPE_CHECKING:
    from folio.shared.models.author import Author


def _enum_values(enum_cls: type) -> list[str]:
    return [member.value for member in enum_cls]


class Document(Base, TimestampMixin):
    """
    Document model.

    Attributes:
        id: Unique identifier, generated before the slug so the slug can
            carry its last four characters
        author_id: Owning author
        title: Display title; valid iff not blank and not "untitled"
        slug: Unique URL identifier ([a-z0-9-], max 200)
        content: Rich-text JSON tree (opaque except for heading/text lookups)
        type: own | curated | inspiration
        status: building | pending | published
        cover_image_id: Opaque blob storage reference
        curation: {source_url, source_title, source_author?, spin}
        references: [{url, title, author?}]
        published_at / submitted_at: Lifecycle timestamps
        rejection_reason: Set by reject, cleared by the next submit
        submission_history: Epoch-ms timestamps of recent submissions
    """

    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_author_status", "author_id", "status"),
        Index("ix_documents_status_created_at", "status", "created_at"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("authors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )

    slug: Mapped[str] = mapped_column(
        String(200),
        unique=True,
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # BODY
    # ═══════════════════════════════════════════════════════════════════════════

    content: Mapped[dict[str, Any]] = mapped_column(
        JSONType,
        nullable=False,
        default=dict,
    )

    type: Mapped[DocumentType] = mapped_column(
        SQLEnum(DocumentType, name="document_type", values_callable=_enum_values),
        nullable=False,
        default=DocumentType.OWN,
    )

    cover_image_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    curation: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSONType,
        nullable=True,
    )

    references: Mapped[Optional[list[dict[str, Any]]]] = mapped_column(
        JSONType,
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # LIFECYCLE
    # ═══════════════════════════════════════════════════════════════════════════

    status: Mapped[DocumentStatus] = mapped_column(
        SQLEnum(DocumentStatus, name="document_status", values_callable=_enum_values),
        nullable=False,
        default=DocumentStatus.BUILDING,
        index=True,
    )

    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    submitted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    rejection_reason: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Reassign, never mutate in place: plain JSON columns do not track
    # list mutations.
    submission_history: Mapped[list[int]] = mapped_column(
        JSONType,
        nullable=False,
        default=list,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="documents",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, slug={self.slug}, status={self.status.value})>"
