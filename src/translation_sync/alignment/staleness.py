"""Staleness comparator implementation for the translation sync system.

This module implements the IStalenessComparator interface: sections of the
current revision are matched to the prior revision by heading id and their raw
lines are compared exactly.
"""

import difflib
import logging
from typing import Dict, List, Optional, Sequence

from ..interfaces.comparator import IStalenessComparator
from ..models.document import Document, Section
from ..models.staleness import StalenessReport
from ..parsers.exceptions import SectionNotFoundWarning


logger = logging.getLogger(__name__)


def _occurrences(sections: Sequence[Section]) -> Dict[str, List[Section]]:
    """Group sections by heading id, keeping document order."""
    grouped: Dict[str, List[Section]] = {}
    for section in sections:
        grouped.setdefault(section.heading.id, []).append(section)
    return grouped


class StalenessComparator(IStalenessComparator):
    """
    Compares two revisions of a document section by section.

    Equality is exact: order, whitespace and line endings all count. A
    section whose id does not exist in the prior revision, or whose heading
    has no id, gets no verdict.
    """

    def __init__(self, context_lines: int = 3):
        """
        Initialize the comparator.

        Args:
            context_lines: Context lines in the diffs logged for changed sections.
        """
        self._context_lines = context_lines

    def compare(
        self,
        current: Document,
        prior: Document,
        prior_path: Optional[str] = None,
    ) -> StalenessReport:
        """
        Compare two revisions of the same document.

        Args:
            current: The current revision.
            prior: The revision the translations were last synced against.
            prior_path: Optional path of the prior revision, for messages.

        Returns:
            StalenessReport with one verdict per matched id.
        """
        report = StalenessReport(
            current_version=current.version,
            prior_version=prior.version,
        )
        prior_by_id = _occurrences(prior.sections)

        for section_id, sections in _occurrences(current.sections).items():
            if not section_id:
                report.unidentified_lines.extend(s.heading.line for s in sections)
                logger.warning(
                    f"{len(sections)} heading(s) without id (lines "
                    f"{', '.join(str(s.heading.line) for s in sections)}); "
                    "their translation status is unknown"
                )
                continue

            prior_sections = prior_by_id.get(section_id)
            if prior_sections is None:
                warning = SectionNotFoundWarning(
                    section_id, sections[0].heading.line, prior_path
                )
                report.missing.append(warning)
                logger.warning(str(warning))
                continue

            if len(sections) > 1 or len(prior_sections) > 1:
                report.duplicate_ids.append(section_id)
                logger.warning(
                    f"heading id {section_id!r} is not unique "
                    f"({len(sections)} current, {len(prior_sections)} prior); "
                    "comparing occurrence by occurrence"
                )

            unchanged = self._occurrences_unchanged(sections, prior_sections)
            report.verdicts[section_id] = unchanged
            if not unchanged:
                diff = self._diff(section_id, sections, prior_sections)
                report.diffs[section_id] = diff
                logger.info(f"changed (-prior +current):\n{diff}")

        logger.info(
            f"Compared {len(current.sections)} sections: "
            f"{len(report.unchanged_ids)} unchanged, {len(report.changed_ids)} changed, "
            f"{len(report.missing)} not found"
        )
        return report

    @staticmethod
    def _occurrences_unchanged(
        sections: Sequence[Section], prior_sections: Sequence[Section]
    ) -> bool:
        if len(sections) != len(prior_sections):
            return False
        return all(
            current.lines == prior.lines
            for current, prior in zip(sections, prior_sections)
        )

    def _diff(
        self,
        section_id: str,
        sections: Sequence[Section],
        prior_sections: Sequence[Section],
    ) -> str:
        prior_lines = [line for s in prior_sections for line in s.lines]
        current_lines = [line for s in sections for line in s.lines]
        return "\n".join(
            difflib.unified_diff(
                prior_lines,
                current_lines,
                fromfile=f"prior#{section_id}",
                tofile=f"current#{section_id}",
                n=self._context_lines,
                lineterm="",
            )
        )


def compare(current: Document, prior: Document) -> Dict[str, bool]:
    """Convenience function returning only the verdict map."""
    return StalenessComparator().compare(current, prior).verdicts
