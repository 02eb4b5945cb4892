"""
Base Repository

Generic base repository with the CRUD operations every entity shares.
Entity-specific repositories inherit from it and add their own queries.

What This Provides:
===================
- get(id)        → Fetch single record by primary key
- list()         → List records with pagination and filtering
- count()        → Count records with filtering
- create()       → Create new record
- delete()       → Hard delete record

Generic Type Pattern:
=====================
    class DocumentRepository(BaseRepository[Document]):
        def __init__(self, session: AsyncSession):
            super().__init__(Document, session)

    repo = DocumentRepository(db)
    document = await repo.get(id)  # Returns Document

flush() vs commit():
====================
Repository methods only flush(). The transaction belongs to the request
(get_db() commits or rolls back), so a service can combine writes to
several repositories and have them succeed or fail together.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from folio.shared.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: Any) -> Optional[ModelType]:
        """
        Get a single record by primary key.

        SQL Generated:
            SELECT * FROM documents WHERE id = '550e8400-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 100,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        order_desc: bool = True,
    ) -> list[ModelType]:
        """
        List records with pagination, equality filters and ordering.

        SQL Generated:
            SELECT * FROM documents WHERE status = 'pending'
            ORDER BY created_at DESC
            OFFSET 20 LIMIT 20
        """
        query = self._apply_filters(select(self.model), filters)

        if order_by and hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            query = query.order_by(order_field.desc() if order_desc else order_field)

        query = query.offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, filters: Optional[dict[str, Any]] = None) -> int:
        """Count records without loading them."""
        query = self._apply_filters(select(sql_count()).select_from(self.model), filters)
        result = await self.session.execute(query)
        return result.scalar() or 0

    def _apply_filters(self, query: Any, filters: Optional[dict[str, Any]]) -> Any:
        for field, value in (filters or {}).items():
            if hasattr(self.model, field):
                query = query.where(getattr(self.model, field) == value)
        return query

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance, flushes the INSERT and refreshes it so generated
        keys and server defaults are populated.
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete(self, instance: ModelType) -> None:
        """Hard delete an already loaded record."""
        await self.session.delete(instance)
        await self.session.flush()
