"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories
and domain rules.

Service Pattern:
================
    Handler → DocumentService → Repository → Database
                   ├── document_lifecycle      (status transition table)
                   ├── SubmissionRateLimiter   (sliding window)
                   ├── SlugRedirectService     (bounded redirect history)
                   └── StatsService            (per-status counters)

Services should:
- Contain business logic and validation
- Coordinate multiple repositories if needed
- Only flush; get_db() owns commit and rollback
- NOT handle HTTP concerns (that's for handlers)

Usage:
======
    from folio.shared.services import DocumentService

    service = DocumentService(db)
    await service.submit(principal, document_id)
"""

from folio.shared.services.auth_service import AuthService, Principal
from folio.shared.services.document_lifecycle import DocumentAction, can_transition, check_transition
from folio.shared.services.submission_rate_limiter import SubmissionRateLimiter
from folio.shared.services.slug_redirect_service import EvictionPreview, SlugRedirectService
from folio.shared.services.stats_service import StatsService, StatsSnapshot
from folio.shared.services.document_service import DocumentService

__all__ = [
    "AuthService",
    "Principal",
    "DocumentAction",
    "can_transition",
    "check_transition",
    "SubmissionRateLimiter",
    "EvictionPreview",
    "SlugRedirectService",
    "StatsService",
    "StatsSnapshot",
    "DocumentService",
]
