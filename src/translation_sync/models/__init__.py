"""Data models and enums for the translation sync system."""

from .enums import MarkerKind, SectionStatus
from .document import Document, Heading, Section
from .attributes import HeadingAttributes
from .staleness import StalenessReport

__all__ = [
    # Enums
    "MarkerKind",
    "SectionStatus",
    # Document models
    "Document",
    "Heading",
    "Section",
    "HeadingAttributes",
    # Comparison models
    "StalenessReport",
]
