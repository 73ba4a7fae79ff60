"""Enumerations for the translation sync system."""

from enum import Enum


class SectionStatus(Enum):
    """Outcome of comparing one section between two source revisions."""
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    UNKNOWN = "unknown"  # no counterpart in the prior revision, or no id

    @classmethod
    def from_verdict(cls, verdict) -> "SectionStatus":
        """Map an optional boolean verdict onto a status."""
        if verdict is None:
            return cls.UNKNOWN
        return cls.UNCHANGED if verdict else cls.CHANGED


class MarkerKind(Enum):
    """Version markers carried in heading attribute blocks."""
    TRANSLATED = "translated"
    VERSION = "version"
