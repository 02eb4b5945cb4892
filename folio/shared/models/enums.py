"""
Enums used across the application.
"""

from enum import Enum


class DocumentType(str, Enum):
    """What kind of writing a document is."""

    OWN = "own"
    CURATED = "curated"  # Commentary on someone else's piece; needs curation data
    INSPIRATION = "inspiration"


class DocumentStatus(str, Enum):
    """
    Lifecycle state.

        building ──submit──► pending ──approve──► published
           ▲                    │
           └──────reject────────┘
        building ──publish────────────────────► published
    """

    BUILDING = "building"
    PENDING = "pending"
    PUBLISHED = "published"
