"""
Content Helpers

Title validation and lookups into rich-text editor JSON.

The editor stores a tree of nodes:

    {"type": "doc", "content": [
        {"type": "heading", "attrs": {"level": 1},
         "content": [{"type": "text", "text": "My First Heading"}]},
        {"type": "paragraph", "content": [{"type": "text", "text": "Body"}]}
    ]}

Nothing else in the backend looks inside content.
"""

from typing import Any, Optional


MAX_TITLE_LENGTH = 200
HEADING_LEVELS = (1, 2, 3)


def is_valid_title(title: Optional[str]) -> bool:
    """A title is valid unless it is blank or "untitled" (any case)."""
    if title is None:
        return False
    normalized = title.strip().lower()
    return normalized != "" and normalized != "untitled"


def _node_text(node: dict[str, Any]) -> str:
    text = node.get("text") or ""
    for child in node.get("content") or []:
        text += _node_text(child)
    return text


def _find_heading(node: dict[str, Any]) -> Optional[str]:
    attrs = node.get("attrs") or {}
    if node.get("type") == "heading" and attrs.get("level") in HEADING_LEVELS:
        text = _node_text(node).strip()
        if text:
            return text[:MAX_TITLE_LENGTH].strip()

    for child in node.get("content") or []:
        found = _find_heading(child)
        if found:
            return found
    return None


def extract_first_heading(content: Optional[dict[str, Any]]) -> Optional[str]:
    """
    Text of the first non-empty h1-h3 heading, depth-first.

    Returns None when there is no such heading. Headings with no text are
    skipped, and the result is truncated to 200 characters.
    """
    if not content or not content.get("content"):
        return None
    return _find_heading(content)


def has_content(content: Optional[dict[str, Any]]) -> bool:
    """True if any node in the tree carries non-whitespace text."""
    if not content:
        return False
    text = content.get("text")
    if text and text.strip():
        return True
    return any(has_content(child) for child in content.get("content") or [])
