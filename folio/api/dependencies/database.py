"""
Database Dependency

FastAPI dependency for database sessions.

The session is committed when the handler returns and rolled back when it
raises; one request is one transaction.

Usage:
======
    from folio.api.dependencies.database import DbSession

    @router.get("/documents")
    async def list_documents(db: DbSession):
        ...
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from folio.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield the request's session (commit on success, rollback on error).

    Tests override this dependency to bind the app to their own engine.
    """
    async for session in _get_db():
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]
