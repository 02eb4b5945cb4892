"""
Author Entity Model

Public profile of a user who writes documents.

Created lazily the first time a user creates a document. The auth provider
owns identity; this table only maps an identity to a public profile.

SAMPLE AUTHOR RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ "user_2b7Qx..." (auth provider subject)                    │
│ name             │ "Ada Lovelace"                                            │
│ avatar_url       │ null                                                      │
│ bio              │ null                                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from folio.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from folio.shared.models.document import Document


class Author(Base, TimestampMixin):
    """
    Author model.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Auth provider identity (unique)
        name: Display name ("Anonymous" when the provider has none)
        avatar_url: Optional avatar
        bio: Optional short biography

    Relationships:
        documents: Documents written by this author
    """

    __tablename__ = "authors"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PUBLIC PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="Anonymous",
    )

    avatar_url: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    bio: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    documents: Mapped[list["Document"]] = relationship(
        "Document",
        back_populates="author",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, user_id={self.user_id})>"
