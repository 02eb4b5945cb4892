"""
DocumentStats Entity Model

Singleton row (id = 1) holding per-status document counts, so the admin
dashboard reads three integers instead of scanning documents.

Every status-changing write updates this row in the same transaction, so
building_count + pending_count + published_count equals the number of
live documents.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from folio.shared.models.base import Base
from folio.shared.models.enums import DocumentStatus


STATS_ROW_ID = 1


class DocumentStats(Base):
    """Per-status counters for all live documents."""

    __tablename__ = "document_stats"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        default=STATS_ROW_ID,
        autoincrement=False,
    )

    building_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pending_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    published_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def get_count(self, status: DocumentStatus) -> int:
        return getattr(self, f"{status.value}_count")

    def set_count(self, status: DocumentStatus, value: int) -> None:
        setattr(self, f"{status.value}_count", value)

    @property
    def total(self) -> int:
        return self.building_count + self.pending_count + self.published_count

    def __repr__(self) -> str:
        return (
            f"<DocumentStats(building={self.building_count}, "
            f"pending={self.pending_count}, published={self.published_count})>"
        )
