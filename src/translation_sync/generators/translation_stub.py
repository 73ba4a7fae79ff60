"""Stamping of a freshly copied translation with placeholder markers."""

import logging
from typing import Optional

from ..interfaces.parser import IDocumentSegmenter
from ..models.enums import MarkerKind
from ..parsers.exceptions import MarkerExistsError
from ..parsers.markdown import find_attribute_block
from ..parsers.segmenter import DocumentSegmenter, encode_source, join_lines


logger = logging.getLogger(__name__)

PLACEHOLDER_VERSION = "TODO"


def add_marker(line: str, kind: MarkerKind, value: str) -> str:
    """
    Add ``kind="value"`` to a heading line.

    The marker goes before the closing brace of an existing attribute block,
    or into a new block appended to the line.
    """
    marker = f'{kind.value}="{value}"'
    body = line.rstrip("\r")
    ending = line[len(body):]
    block = find_attribute_block(body)
    if block is None:
        return f"{body.rstrip()} {{{marker}}}{ending}"
    closing = block.end - 1
    inner = body[block.start + 1:closing]
    separator = " " if inner.strip() else ""
    return body[:closing].rstrip() + separator + marker + body[closing:] + ending


class TranslationStubber:
    """
    Prepares a copy of the source document for translation.

    Every heading except the title gets ``translated="TODO"`` so that the
    rendered page flags each section as not yet translated.
    """

    def __init__(
        self,
        segmenter: Optional[IDocumentSegmenter] = None,
        placeholder: str = PLACEHOLDER_VERSION,
    ):
        self._segmenter = segmenter or DocumentSegmenter()
        self._placeholder = placeholder

    def stamp(self, source: bytes) -> bytes:
        """
        Add placeholder ``translated`` markers to every non-title heading.

        Args:
            source: Raw contents of the new translation.

        Returns:
            The stamped buffer.

        Raises:
            MarkerExistsError: If a heading already has a ``translated`` marker.
            ParseError: If the document cannot be parsed.
        """
        doc = self._segmenter.segment(source)
        lines = list(doc.lines)
        for heading in doc.headings[1:]:
            idx = heading.line - 1
            if heading.translated or f"{MarkerKind.TRANSLATED.value}=" in lines[idx]:
                raise MarkerExistsError(
                    message="document already contains translated= markers",
                    location=f"line {heading.line}",
                )
            lines[idx] = add_marker(lines[idx], MarkerKind.TRANSLATED, self._placeholder)
            logger.debug(f"stamped heading {heading.id!r} on line {heading.line}")
        logger.info(f"Stamped {max(len(doc.headings) - 1, 0)} headings")
        return encode_source(join_lines(lines, doc.line_endings))


def stamp_translation(source: bytes) -> bytes:
    """Convenience function to stamp a new translation."""
    return TranslationStubber().stamp(source)
