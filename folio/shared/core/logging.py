"""
Logging Configuration

Structured logging setup using structlog.

Log Output:
===========
Development:
    2024-01-15 10:30:00 [info     ] document_submitted   document_id=550e8400-... pending_count=4

Production (JSON):
    {"timestamp": "...", "level": "info", "event": "document_submitted", "document_id": "550e8400-..."}

Usage:
======
    from folio.shared.core.logging import logger, get_logger, log_context

    logger.info("Document created", document_id=str(document.id), slug=document.slug)

    stats_logger = get_logger("folio.stats")
    stats_logger.warning("Stats row missing, backfilled from document counts")

    # Bind request-scoped values for every later log line
    log_context(request_id=request_id, user_id=principal.user_id)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from folio.config.settings import settings


def setup_logging() -> None:
    """
    Configure structlog on top of the standard library logger.

    Development gets the colored console renderer; every other environment
    renders JSON lines with exception info formatted inline.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development:
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, optionally named for filtering."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Bind key-value pairs to every subsequent log call in this context.

    Values live in contextvars, so concurrent requests do not see each
    other's context.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Drop all bound context variables (end of request)."""
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("folio")
