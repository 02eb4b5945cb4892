"""Tests for title validity and content helpers."""

import pytest

from folio.shared.utils.content import extract_first_heading, has_content, is_valid_title


def heading(text, level=1):
    return {"type": "heading", "attrs": {"level": level}, "content": [{"type": "text", "text": text}]}


def paragraph(text):
    return {"type": "paragraph", "content": [{"type": "text", "text": text}]}


def doc(*nodes):
    return {"type": "doc", "content": list(nodes)}


@pytest.mark.parametrize(
    "title, valid",
    [
        ("My Article", True),
        ("", False),
        ("   ", False),
        (None, False),
        ("untitled", False),
        ("  UnTiTlEd  ", False),
        ("Untitled draft", True),
    ],
)
def test_is_valid_title(title, valid):
    assert is_valid_title(title) is valid


def test_first_heading_is_found_depth_first():
    content = doc(
        paragraph("intro"),
        {"type": "blockquote", "content": [heading("Nested", level=2)]},
        heading("Later"),
    )
    assert extract_first_heading(content) == "Nested"


def test_heading_levels_beyond_three_are_ignored():
    assert extract_first_heading(doc(heading("Small", level=4))) is None


def test_empty_headings_are_skipped():
    content = doc(heading("   "), heading("Real"))
    assert extract_first_heading(content) == "Real"


def test_heading_is_truncated():
    assert len(extract_first_heading(doc(heading("x" * 300)))) == 200


def test_no_heading():
    assert extract_first_heading(doc(paragraph("text"))) is None
    assert extract_first_heading({}) is None
    assert extract_first_heading(None) is None


def test_has_content():
    assert has_content(doc(paragraph("hello")))
    assert not has_content(doc(paragraph("   ")))
    assert not has_content(doc())
    assert not has_content(None)
