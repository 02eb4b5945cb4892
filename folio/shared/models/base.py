"""
Base Model Classes

The declarative base and the timestamp mixin shared by all Folio models.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← created_at / updated_at

Column Types:
=============
JSONType stores JSON as JSONB on PostgreSQL and as plain JSON elsewhere
(SQLite in tests), so one model definition serves both.

Usage:
======
    from folio.shared.models.base import Base, TimestampMixin, JSONType

    class Author(Base, TimestampMixin):
        __tablename__ = "authors"
        id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


JSONType = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


class TimestampMixin:
    """
    Mixin that adds timestamp tracking to models.

    - created_at: set on INSERT
    - updated_at: set on INSERT, refreshed by SQLAlchemy on UPDATE

    Services pass explicit values from their injected clock; the defaults
    cover rows written outside a service (migrations, scripts).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=_utcnow,
        nullable=False,
    )
