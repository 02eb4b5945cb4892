"""
Slug Utilities

Turn document titles into URL-safe slugs.

Slug Format:
============
- Characters: [a-z0-9-]
- No leading or trailing hyphen, no doubled hyphens
- At most 200 characters
- Short ID: last 4 characters of the document id, lowercased

    "Café & Bar"            →  "cafe-bar"
    "Straße"                →  "strasse"
    "Hello! World @ 2024"   →  "hello-world-2024"
    duplicate "My Article"  →  "my-article-f456"
    "" or "!!!"             →  "untitled-f456"

Usage:
======
    from folio.shared.utils.slug import generate_unique_slug

    slug = await generate_unique_slug(title, document.id, repo.slug_taken)
"""

import inspect
import re
from typing import Any, Awaitable, Callable, Union

from unidecode import unidecode


MAX_SLUG_LENGTH = 200
SHORT_ID_LENGTH = 4

_REMOVED_PUNCTUATION = re.compile(r"[*+~.()'\"!:@]")
_DISALLOWED = re.compile(r"[^a-z0-9\s_-]")
_SEPARATORS = re.compile(r"[\s_-]+")
_SHORT_ID = re.compile(r"^[a-z0-9]{4}$", re.IGNORECASE)

SlugExistsCheck = Callable[[str], Union[bool, Awaitable[bool]]]


def generate_slug(title: str) -> str:
    """
    Convert a title to a slug, or "" when nothing slug-worthy remains.

    Non-ASCII text is transliterated with Unidecode (é → e, ß → ss,
    Привет → Privet); characters with no ASCII form are dropped.
    """
    if not title or not title.strip():
        return ""

    slug = unidecode(title).lower()
    slug = _REMOVED_PUNCTUATION.sub("", slug)
    slug = _DISALLOWED.sub("", slug)
    slug = _SEPARATORS.sub("-", slug).strip("-")

    return slug[:MAX_SLUG_LENGTH].rstrip("-")


def get_short_id(document_id: Any) -> str:
    """Last four characters of a document id."""
    return str(document_id)[-SHORT_ID_LENGTH:].lower()


def generate_slug_with_id(title: str, document_id: Any) -> str:
    """Slug with the short id appended, for guaranteed uniqueness."""
    slug = generate_slug(title)
    short_id = get_short_id(document_id)

    if not slug:
        return f"untitled-{short_id}"
    # "document" is reserved for the empty-title fallback of older clients
    if slug == "document":
        return f"doc-{short_id}"
    return f"{slug}-{short_id}"


def extract_short_id(slug: str) -> str:
    """Trailing short id of a suffixed slug, or "" when there is none."""
    parts = slug.split("-")
    if len(parts) < 2:
        return ""
    candidate = parts[-1]
    return candidate if _SHORT_ID.match(candidate) else ""


async def generate_unique_slug(
    title: str,
    document_id: Any,
    slug_exists: SlugExistsCheck,
) -> str:
    """
    Bare slug when free, suffixed slug when taken.

    The first document titled "My Article" gets "my-article"; later ones get
    "my-article-{short_id}". Empty slugs always get the untitled form and
    skip the lookup.

    Args:
        title: Document title
        document_id: Id of the document the slug is for
        slug_exists: Predicate, sync or async, telling whether a slug is taken
    """
    base = generate_slug(title)
    if not base:
        return f"untitled-{get_short_id(document_id)}"

    taken = slug_exists(base)
    if inspect.isawaitable(taken):
        taken = await taken

    if not taken:
        return base
    return generate_slug_with_id(title, document_id)
