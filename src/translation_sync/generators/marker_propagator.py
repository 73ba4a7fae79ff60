"""Version marker propagation into translated documents."""

import logging
import re
from typing import Mapping, Optional

from ..interfaces.parser import IDocumentSegmenter
from ..interfaces.propagator import IMarkerPropagator, PropagationResult
from ..models.enums import MarkerKind
from ..parsers.exceptions import MissingTitleError
from ..parsers.markdown import find_attribute_block
from ..parsers.segmenter import DocumentSegmenter, encode_source, join_lines


logger = logging.getLogger(__name__)

_MARKER_PATTERNS = {
    kind: re.compile(r'(?<![\w:-])' + kind.value + r'="[^"]*"')
    for kind in MarkerKind
}


def validate_version(version: str) -> str:
    """Reject versions that cannot be written inside a quoted attribute value."""
    if any(char in version for char in '"\\\r\n'):
        raise ValueError(f"Invalid version string: {version!r}")
    return version


def replace_marker(line: str, kind: MarkerKind, value: str) -> str:
    """
    Replace the value of one marker inside a line's attribute block.

    Only the first ``kind="..."`` inside the trailing ``{...}`` block changes;
    heading text and every other attribute keep their exact bytes.

    Args:
        line: A raw heading line.
        kind: Marker to rewrite.
        value: New marker value.

    Returns:
        The rewritten line, or ``line`` unchanged if it has no such marker.
    """
    block = find_attribute_block(line)
    if block is None:
        return line
    inside = line[block.start:block.end]
    replaced = _MARKER_PATTERNS[kind].sub(
        lambda _: f'{kind.value}="{value}"', inside, count=1
    )
    return line[:block.start] + replaced + line[block.end:]


class MarkerPropagator(IMarkerPropagator):
    """
    Advances ``translated`` stamps of unchanged sections in a translation.

    Sections that changed, or that have no verdict, keep their old stamp; a
    stale stamp is what tells a translator the section needs work. The title
    heading's ``version`` always tracks the current source version.
    """

    def __init__(self, segmenter: Optional[IDocumentSegmenter] = None):
        self._segmenter = segmenter or DocumentSegmenter()

    def propagate(
        self,
        translation: bytes,
        verdicts: Mapping[str, bool],
        current_version: str,
    ) -> PropagationResult:
        """
        Rewrite the version markers of a translated document.

        Args:
            translation: Raw contents of the translated file.
            verdicts: Heading id to "section unchanged" verdicts.
            current_version: Version of the current source document.

        Returns:
            PropagationResult holding the rewritten buffer.

        Raises:
            MissingTitleError: If the translation has no headings.
            ParseError: If the translation cannot be parsed.
            ValueError: If ``current_version`` cannot be written as a marker.
        """
        version = validate_version(current_version)
        doc = self._segmenter.segment(translation)
        if not doc.has_title:
            raise MissingTitleError(
                message="document has no headings",
                details={"expected": "a title heading carrying version=\"...\""},
            )

        lines = list(doc.lines)
        result = PropagationResult(content=translation)

        for heading in doc.headings[1:]:
            if not heading.translated:
                continue
            # no id means no verdict: leave the stamp for a human
            if not heading.id or verdicts.get(heading.id) is not True:
                result.stale_ids.append(heading.id)
                continue
            idx = heading.line - 1
            new_line = replace_marker(lines[idx], MarkerKind.TRANSLATED, version)
            if new_line != lines[idx]:
                logger.info(f"  updating heading {heading.id!r} (up-to-date)")
                lines[idx] = new_line
                result.updated_ids.append(heading.id)

        title_idx = doc.title.line - 1
        new_title = replace_marker(lines[title_idx], MarkerKind.VERSION, version)
        if new_title != lines[title_idx]:
            lines[title_idx] = new_title
            result.title_updated = True
        elif not _MARKER_PATTERNS[MarkerKind.VERSION].search(lines[title_idx]):
            logger.warning(
                f"title heading on line {doc.title.line} has no version marker"
            )

        result.content = encode_source(join_lines(lines, doc.line_endings))
        return result


def propagate(
    translation: bytes,
    verdicts: Mapping[str, bool],
    current_version: str,
) -> bytes:
    """Convenience function returning only the rewritten buffer."""
    return MarkerPropagator().propagate(translation, verdicts, current_version).content
