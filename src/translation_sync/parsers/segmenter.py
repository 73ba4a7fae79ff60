"""Segmentation of markdown documents into heading-anchored sections."""

import logging
import re
from pathlib import Path
from typing import List, Sequence, Tuple

from ..interfaces.parser import IDocumentSegmenter
from ..models.document import Document, Heading, Section
from .exceptions import ParseError
from .heading_extractor import ExtractedHeading, HeadingExtractor
from .line_index import LINE_BREAK_PATTERN, LineIndex
from .markdown import DEFAULT_MARKDOWN_CONFIG, MarkdownConfig, build_markdown


logger = logging.getLogger(__name__)

ENCODING = "utf-8"
# surrogateescape lets arbitrary bytes survive a decode/encode round trip
ENCODING_ERRORS = "surrogateescape"

_LINE_BREAK_RE = re.compile(f"({LINE_BREAK_PATTERN})")


def decode_source(source: bytes) -> str:
    return source.decode(ENCODING, ENCODING_ERRORS)


def encode_source(text: str) -> bytes:
    return text.encode(ENCODING, ENCODING_ERRORS)


def split_lines(text: str) -> Tuple[List[str], List[str]]:
    """
    Split text into lines on the same breaks as :class:`LineIndex`.

    The ``\\r`` of a ``\\r\\n`` pair stays part of its line. A lone ``\\r``
    ends its line like ``\\n`` does.

    Returns:
        ``(lines, endings)`` of equal length, where ``endings[i]`` is the
        break that followed ``lines[i]`` (empty for the last line), so that
        :func:`join_lines` restores the text exactly.
    """
    parts = _LINE_BREAK_RE.split(text)
    return parts[0::2], parts[1::2] + [""]


def join_lines(lines: Sequence[str], endings: Sequence[str]) -> str:
    return "".join(line + ending for line, ending in zip(lines, endings))


def build_sections(
    headings: Sequence[Heading],
    lines: Sequence[str],
    trailing_newline: bool,
) -> List[Section]:
    """
    Pair each heading with the lines up to the next heading.

    Args:
        headings: Headings in document order.
        lines: All raw lines of the buffer.
        trailing_newline: Whether the buffer ends with a line ending. If so,
            the empty string after it is not part of any section.

    Returns:
        One Section per heading.
    """
    body_end = len(lines) - 1 if trailing_newline else len(lines)
    sections = []
    for idx, heading in enumerate(headings):
        if idx < len(headings) - 1:
            end = headings[idx + 1].line - 1
        else:
            end = body_end
        sections.append(Section(heading=heading, lines=tuple(lines[heading.line:end])))
    return sections


class DocumentSegmenter(IDocumentSegmenter):
    """
    Markdown segmenter built on the configured markdown-it parser.

    Parses the buffer, extracts headings with their source lines, and
    partitions the raw lines into one section per heading.
    """

    def __init__(self, config: MarkdownConfig = DEFAULT_MARKDOWN_CONFIG):
        self._config = config

    def segment(self, source: bytes) -> Document:
        """
        Segment a markdown buffer.

        Args:
            source: Raw file contents.

        Returns:
            Document view of the buffer.

        Raises:
            ParseError: If the markdown parser fails.
            InternalError: If a heading cannot be mapped to a source line.
        """
        text = decode_source(source)
        try:
            tokens = build_markdown(self._config).parse(text)
        except Exception as e:
            raise ParseError(
                message=f"Failed to parse markdown: {str(e)}",
                details={"original_error": str(e)},
            ) from e

        index = LineIndex(source)
        extracted = HeadingExtractor(source, index).extract(tokens)
        lines, endings = split_lines(text)
        return self._build_document(extracted, lines, endings)

    def segment_file(self, file_path: str) -> Document:
        """
        Read and segment a markdown file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ParseError: If the markdown parser fails.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        try:
            return self.segment(path.read_bytes())
        except ParseError as e:
            raise e.with_file(str(path))

    def _build_document(
        self,
        extracted: Sequence[ExtractedHeading],
        lines: List[str],
        endings: List[str],
    ) -> Document:
        headings: Tuple[Heading, ...] = tuple(e.heading for e in extracted)
        # the document version is declared on the title heading only
        version = extracted[0].attributes.version if extracted else ""
        # a buffer ending in a line break leaves one empty string after it
        trailing_newline = len(lines) > 1 and lines[-1] == ""
        sections = build_sections(headings, lines, trailing_newline)
        logger.debug(
            f"Segmented document: {len(headings)} headings, {len(lines)} lines, "
            f"version {version!r}"
        )
        return Document.build(
            version=version,
            headings=headings,
            sections=tuple(sections),
            lines=tuple(lines),
            line_endings=tuple(endings),
        )


def segment(source: bytes, config: MarkdownConfig = DEFAULT_MARKDOWN_CONFIG) -> Document:
    """Convenience function to segment a markdown buffer."""
    return DocumentSegmenter(config).segment(source)
