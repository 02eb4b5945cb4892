"""
DocumentStats repository for data access.

Only one row exists (id = STATS_ROW_ID). Writers lock it with
get_for_update(); readers use get() and tolerate one transaction of
staleness.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from folio.shared.core.logging import get_logger
from folio.shared.models.document_stats import STATS_ROW_ID, DocumentStats
from folio.shared.models.enums import DocumentStatus
from folio.shared.repositories.base import BaseRepository


logger = get_logger("folio.stats")


class DocumentStatsRepository(BaseRepository[DocumentStats]):
    """Repository for the DocumentStats singleton."""

    def __init__(self, session: AsyncSession):
        super().__init__(DocumentStats, session)

    async def get_singleton(self) -> Optional[DocumentStats]:
        return await self.get(STATS_ROW_ID)

    async def get_for_update(self) -> Optional[DocumentStats]:
        stmt = (
            select(DocumentStats)
            .where(DocumentStats.id == STATS_ROW_ID)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_singleton(self, counts: dict[DocumentStatus, int], now: datetime) -> DocumentStats:
        """
        Insert the singleton with the given counts and return it locked.

        Runs in a savepoint: when a concurrent transaction inserted the row
        first, the unique key rejects ours and the existing row is used.
        """
        try:
            async with self.session.begin_nested():
                self.session.add(
                    DocumentStats(
                        id=STATS_ROW_ID,
                        building_count=counts.get(DocumentStatus.BUILDING, 0),
                        pending_count=counts.get(DocumentStatus.PENDING, 0),
                        published_count=counts.get(DocumentStatus.PUBLISHED, 0),
                        updated_at=now,
                    )
                )
        except IntegrityError:
            # Another transaction inserted the singleton first; lock theirs below
            logger.info("Stats row created concurrently, using existing row")
        stats = await self.get_for_update()
        if stats is None:
            raise RuntimeError("document_stats singleton missing after insert")
        return stats
