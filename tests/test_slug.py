"""Tests for slug generation."""

import re
import uuid

import pytest

from folio.shared.utils.slug import (
    MAX_SLUG_LENGTH,
    extract_short_id,
    generate_slug,
    generate_slug_with_id,
    generate_unique_slug,
    get_short_id,
)


DOC_ID = uuid.UUID("550e8400-e29b-41d4-a716-44665544f456")


@pytest.mark.parametrize(
    "title, expected",
    [
        ("My First Article", "my-first-article"),
        ("Café & Bar", "cafe-bar"),
        ("Hello! World @ 2024", "hello-world-2024"),
        ("  spaced   out  ", "spaced-out"),
        ("under_score--dash", "under-score-dash"),
        ("e.g. (this) one's", "eg-this-ones"),
        ("", ""),
        ("   ", ""),
        ("!!!", ""),
        ("???", ""),
        ("Straße", "strasse"),
        ("Привет мир", "privet-mir"),
    ],
)
def test_generate_slug(title, expected):
    assert generate_slug(title) == expected


def test_generate_slug_transliterates_greek():
    slug = generate_slug("Ελληνικά")

    assert slug
    assert re.fullmatch(r"[a-z]+", slug)


def test_generate_slug_truncates_without_trailing_hyphen():
    title = "a" * 199 + " b"
    slug = generate_slug(title)

    assert len(slug) <= MAX_SLUG_LENGTH
    assert not slug.endswith("-")


def test_short_id_is_last_four_lowercased():
    assert get_short_id(DOC_ID) == "f456"
    assert get_short_id("ABCDEF") == "cdef"


def test_slug_with_id():
    assert generate_slug_with_id("My Article", DOC_ID) == "my-article-f456"
    assert generate_slug_with_id("", DOC_ID) == "untitled-f456"
    assert generate_slug_with_id("Document", DOC_ID) == "doc-f456"


def test_extract_short_id():
    assert extract_short_id("my-article-f456") == "f456"
    assert extract_short_id("my-article") == ""
    assert extract_short_id("article") == ""


async def test_unique_slug_is_bare_when_free():
    slug = await generate_unique_slug("My Article", DOC_ID, lambda s: False)
    assert slug == "my-article"


async def test_unique_slug_is_suffixed_when_taken():
    slug = await generate_unique_slug("My Article", DOC_ID, lambda s: s == "my-article")
    assert slug == "my-article-f456"


async def test_unique_slug_accepts_async_predicate():
    async def taken(slug):
        return True

    assert await generate_unique_slug("My Article", DOC_ID, taken) == "my-article-f456"


async def test_unique_slug_empty_title_skips_lookup():
    def explode(slug):
        raise AssertionError("lookup should not run")

    assert await generate_unique_slug("!!!", DOC_ID, explode) == "untitled-f456"
