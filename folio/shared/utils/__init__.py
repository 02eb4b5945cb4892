"""
Utilities Package

Contents:
=========
- slug: Title → slug conversion and uniqueness strategy
- content: Title validity and rich-text helpers
- clock: Injectable time source
- security: JWT verification

Usage:
======
    from folio.shared.utils.slug import generate_unique_slug
    from folio.shared.utils.content import is_valid_title
"""

from folio.shared.utils.security import SecurityUtils
from folio.shared.utils.clock import Clock, utc_now, to_epoch_ms
from folio.shared.utils.content import (
    is_valid_title,
    extract_first_heading,
    has_content,
)
from folio.shared.utils.slug import (
    generate_slug,
    generate_slug_with_id,
    generate_unique_slug,
    get_short_id,
    extract_short_id,
)

__all__ = [
    "SecurityUtils",
    "Clock",
    "utc_now",
    "to_epoch_ms",
    "is_valid_title",
    "extract_first_heading",
    "has_content",
    "generate_slug",
    "generate_slug_with_id",
    "generate_unique_slug",
    "get_short_id",
    "extract_short_id",
]
