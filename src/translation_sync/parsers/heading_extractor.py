"""Heading extraction from a parsed markdown token stream."""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from markdown_it.token import Token

from ..models.attributes import HeadingAttributes
from ..models.document import Heading
from .exceptions import InternalError
from .line_index import LineIndex


logger = logging.getLogger(__name__)

# Characters that precede the heading text on its first line.
_ATX_PREFIX = b" \t#"
_SETEXT_PREFIX = b" \t"


@dataclass(frozen=True)
class ExtractedHeading:
    """A heading together with the full typed attribute set it was read from."""
    heading: Heading
    attributes: HeadingAttributes


def heading_text(inline: Token) -> str:
    """Plain text of a heading's inline token, markup removed."""
    parts = []
    for child in inline.children or []:
        if child.type in ("text", "code_inline"):
            parts.append(child.content)
        elif child.type in ("softbreak", "hardbreak"):
            parts.append(" ")
    return "".join(parts).strip()


class HeadingExtractor:
    """
    Walks a token stream and yields one Heading per heading token.

    Line provenance comes from the byte offset of the heading's first text
    segment, resolved through a LineIndex over the raw buffer.
    """

    def __init__(self, source: bytes, index: LineIndex):
        self._source = source
        self._index = index

    def extract(self, tokens: Sequence[Token]) -> List[ExtractedHeading]:
        """
        Extract headings in document order.

        Args:
            tokens: Token stream produced by the markdown parser for the same
                buffer the LineIndex was built from.

        Returns:
            Extracted headings, title first.

        Raises:
            InternalError: If a heading's line cannot be resolved.
        """
        result = []
        for idx, token in enumerate(tokens):
            if token.type != "heading_open":
                continue
            attributes = HeadingAttributes.from_token(token)
            inline = tokens[idx + 1] if idx + 1 < len(tokens) else None
            text = heading_text(inline) if inline is not None else ""
            line = self._resolve_line(token, text)
            if not attributes.id:
                logger.debug(f"heading {text!r} on line {line} has no id")
            heading = Heading(
                line=line,
                id=attributes.id,
                translated=attributes.translated,
                text=text,
            )
            result.append(ExtractedHeading(heading=heading, attributes=attributes))
        return result

    def _resolve_line(self, token: Token, text: str) -> int:
        if not token.map:
            raise InternalError(
                message="cannot resolve line for heading",
                location=f"heading {text!r}",
                details={"reason": "parser reported no source map"},
            )
        try:
            offset = self._segment_offset(token.map[0] + 1, token.markup)
            return self._index.offset_to_line(offset)
        except InternalError as e:
            raise InternalError(
                message="cannot resolve line for heading",
                location=f"heading {text!r}",
                details={"reason": e.message, "map": list(token.map)},
            ) from e

    def _segment_offset(self, line: int, markup: str) -> int:
        """Byte offset where the heading text starts on ``line``."""
        start = self._index.line_start(line)
        end = self._index.line_end(line)
        raw = self._source[start:end]
        prefix = _ATX_PREFIX if markup.startswith("#") else _SETEXT_PREFIX
        return start + (len(raw) - len(raw.lstrip(prefix)))
