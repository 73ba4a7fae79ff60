"""Revision comparison for the translation sync system."""

from .staleness import StalenessComparator, compare

__all__ = [
    "StalenessComparator",
    "compare",
]
