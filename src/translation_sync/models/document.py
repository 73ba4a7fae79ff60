"""Document-related data models for the translation sync system."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class Heading:
    """
    A heading with its source provenance and translation stamp.

    Attributes:
        line: 1-based source line on which the heading text begins.
        id: Stable identifier (explicit ``#id`` or generated from the text).
            May be empty.
        translated: Source version this heading's translation was last
            synced with, or an empty string.
        text: Plain heading text without the attribute block.
    """
    line: int
    id: str
    translated: str = ""
    text: str = ""


@dataclass(frozen=True)
class Section:
    """
    The raw lines owned by one heading.

    ``lines`` excludes the heading line itself and stops before the next
    heading's line (or at the end of the document).
    """
    heading: Heading
    lines: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Document:
    """
    Segmented view of a markdown buffer.

    Computed once from an immutable buffer and never mutated. Rewriting the
    underlying file makes the view stale.

    ``line_endings[i]`` is the break that followed ``lines[i]`` in the buffer
    (``"\\n"`` or a lone ``"\\r"``; empty for the last line).
    """
    version: str = ""
    headings: Tuple[Heading, ...] = ()
    sections: Tuple[Section, ...] = ()
    lines: Tuple[str, ...] = ()
    line_endings: Tuple[str, ...] = ()
    headings_by_id: Mapping[str, Heading] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )
    sections_by_id: Mapping[str, Section] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )

    @classmethod
    def build(
        cls,
        version: str,
        headings: Tuple[Heading, ...],
        sections: Tuple[Section, ...],
        lines: Tuple[str, ...],
        line_endings: Optional[Tuple[str, ...]] = None,
    ) -> "Document":
        """
        Create a Document and its id lookups (last write wins).

        Without ``line_endings`` every line but the last is taken to end in
        ``\\n``.
        """
        if line_endings is None:
            line_endings = ("\n",) * (len(lines) - 1) + ("",) if lines else ()
        headings_by_id = {h.id: h for h in headings}
        sections_by_id = {s.heading.id: s for s in sections}
        return cls(
            version=version,
            headings=tuple(headings),
            sections=tuple(sections),
            lines=tuple(lines),
            line_endings=tuple(line_endings),
            headings_by_id=MappingProxyType(headings_by_id),
            sections_by_id=MappingProxyType(sections_by_id),
        )

    @property
    def title(self) -> Heading:
        """The first heading of the document."""
        return self.headings[0]

    @property
    def has_title(self) -> bool:
        return len(self.headings) > 0
