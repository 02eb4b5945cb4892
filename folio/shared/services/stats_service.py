"""
Stats Service

Maintains the per-status counters in the document_stats singleton.

Write Rules:
============
- Every status change calls increment / decrement / transfer in the same
  transaction as the document write, after the document row is locked and
  before the document row is changed.
- The singleton is locked FOR UPDATE for the read-modify-write.
- Counters never go below zero.

Cold Start:
===========
If the singleton does not exist yet, the first writer creates it from an
indexed per-status count of the documents table (taken before the writer's
own document change) and then applies its delta. Readers never create it:
get_stats() falls back to the same count without writing.

Usage:
======
    from folio.shared.services.stats_service import StatsService

    stats = StatsService(db)
    await stats.transfer(DocumentStatus.BUILDING, DocumentStatus.PENDING)
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from folio.shared.core.logging import get_logger
from folio.shared.models.document_stats import DocumentStats
from folio.shared.models.enums import DocumentStatus
from folio.shared.repositories.document_repository import DocumentRepository
from folio.shared.repositories.document_stats_repository import DocumentStatsRepository
from folio.shared.utils.clock import Clock, utc_now


logger = get_logger("folio.stats")


@dataclass
class StatsSnapshot:
    """Counter values as returned to callers."""

    building_count: int
    pending_count: int
    published_count: int

    @property
    def total_documents(self) -> int:
        return self.building_count + self.pending_count + self.published_count

    @classmethod
    def from_counts(cls, counts: dict[DocumentStatus, int]) -> "StatsSnapshot":
        return cls(
            building_count=counts.get(DocumentStatus.BUILDING, 0),
            pending_count=counts.get(DocumentStatus.PENDING, 0),
            published_count=counts.get(DocumentStatus.PUBLISHED, 0),
        )

    @classmethod
    def from_row(cls, row: DocumentStats) -> "StatsSnapshot":
        return cls(
            building_count=row.building_count,
            pending_count=row.pending_count,
            published_count=row.published_count,
        )


class StatsService:
    """Read and maintain the document counters."""

    def __init__(self, session: AsyncSession, clock: Clock = utc_now) -> None:
        self.session = session
        self.clock = clock
        self.stats_repo = DocumentStatsRepository(session)
        self.document_repo = DocumentRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITES
    # ═══════════════════════════════════════════════════════════════════════════

    async def increment(self, status: DocumentStatus) -> None:
        await self._apply({status: 1})

    async def decrement(self, status: DocumentStatus) -> None:
        await self._apply({status: -1})

    async def transfer(self, old_status: DocumentStatus, new_status: DocumentStatus) -> None:
        """Move one document's worth of count between statuses."""
        if old_status == new_status:
            return
        await self._apply({old_status: -1, new_status: 1})

    async def _apply(self, deltas: dict[DocumentStatus, int]) -> None:
        row = await self._locked_row()
        for status, delta in deltas.items():
            row.set_count(status, max(0, row.get_count(status) + delta))
        row.updated_at = self.clock()
        await self.session.flush()

    async def _locked_row(self) -> DocumentStats:
        row = await self.stats_repo.get_for_update()
        if row is not None:
            return row

        counts = await self.document_repo.count_by_status()
        logger.warning(
            "Stats row missing, backfilled from document counts",
            **{f"{status.value}_count": total for status, total in counts.items()},
        )
        return await self.stats_repo.create_singleton(counts, self.clock())

    # ═══════════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_stats(self) -> StatsSnapshot:
        """
        Current counters.

        O(1) read of the singleton; only before the singleton exists does
        this fall back to counting documents per status.
        """
        row: Optional[DocumentStats] = await self.stats_repo.get_singleton()
        if row is not None:
            return StatsSnapshot.from_row(row)
        return StatsSnapshot.from_counts(await self.document_repo.count_by_status())

    # ═══════════════════════════════════════════════════════════════════════════
    # REPAIR
    # ═══════════════════════════════════════════════════════════════════════════

    async def rebuild(self) -> StatsSnapshot:
        """
        Recount documents per status and overwrite the singleton.

        Consistency repair for counters that drifted (manual SQL, restores).
        """
        row = await self._locked_row()
        counts = await self.document_repo.count_by_status()
        before = StatsSnapshot.from_row(row)
        for status, total in counts.items():
            row.set_count(status, total)
        row.updated_at = self.clock()
        await self.session.flush()

        after = StatsSnapshot.from_row(row)
        logger.info(
            "Stats rebuilt",
            drift=before != after,
            building_count=after.building_count,
            pending_count=after.pending_count,
            published_count=after.published_count,
        )
        return after
