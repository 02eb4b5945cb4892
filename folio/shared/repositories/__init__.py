"""
Repositories Package

Data access layer. Each repository wraps one model and only flushes; the
request transaction in get_db() decides commit or rollback.

Usage:
======
    from folio.shared.repositories import DocumentRepository

    repo = DocumentRepository(db)
    document = await repo.get_for_update(document_id)
"""

from folio.shared.repositories.base import BaseRepository
from folio.shared.repositories.author_repository import AuthorRepository
from folio.shared.repositories.document_repository import DocumentRepository
from folio.shared.repositories.slug_redirect_repository import (
    SlugRedirectRepository,
    select_eviction,
)
from folio.shared.repositories.document_stats_repository import DocumentStatsRepository

__all__ = [
    "BaseRepository",
    "AuthorRepository",
    "DocumentRepository",
    "SlugRedirectRepository",
    "select_eviction",
    "DocumentStatsRepository",
]
