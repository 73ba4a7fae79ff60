"""Staleness comparison data models for the translation sync system."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .enums import SectionStatus


@dataclass
class StalenessReport:
    """
    Result of comparing two revisions of a source document section by section.

    ``verdicts`` maps heading id to True when the section is unchanged and to
    False when it changed. Ids without a verdict are unknown and must never be
    treated as either.
    """
    current_version: str
    prior_version: str
    verdicts: Dict[str, bool] = field(default_factory=dict)
    missing: List[Warning] = field(default_factory=list)
    unidentified_lines: List[int] = field(default_factory=list)
    duplicate_ids: List[str] = field(default_factory=list)
    diffs: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.verdicts is None:
            self.verdicts = {}
        if self.missing is None:
            self.missing = []
        if self.unidentified_lines is None:
            self.unidentified_lines = []
        if self.duplicate_ids is None:
            self.duplicate_ids = []
        if self.diffs is None:
            self.diffs = {}

    def status(self, section_id: Optional[str]) -> SectionStatus:
        """Status of a section id; unknown if there is no verdict."""
        if not section_id:
            return SectionStatus.UNKNOWN
        return SectionStatus.from_verdict(self.verdicts.get(section_id))

    @property
    def unchanged_ids(self) -> List[str]:
        return [sid for sid, unchanged in self.verdicts.items() if unchanged]

    @property
    def changed_ids(self) -> List[str]:
        return [sid for sid, unchanged in self.verdicts.items() if not unchanged]
