"""
Database Module

Database connectivity and session management for Folio.

Architecture Overview:
======================
    FastAPI Route
        │  Dependency Injection: get_db()
        ▼
    AsyncSession (one per request, commit on success, rollback on error)
        │  passed to services, which build their repositories
        ▼
    Repositories
        - AuthorRepository
        - DocumentRepository
        - SlugRedirectRepository
        - DocumentStatsRepository
        │
        ▼
    PostgreSQL

Usage in FastAPI:
=================
    from fastapi import Depends
    from folio.shared.db import get_db

    @router.get("/documents/{document_id}")
    async def get_document(document_id: UUID, db: AsyncSession = Depends(get_db)):
        ...
"""

from folio.shared.db.session import (
    get_db,
    init_db,
    close_db,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "AsyncSessionLocal",
    "engine",
]
