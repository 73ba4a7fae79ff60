"""JSON serialization of segmented documents."""

import json
from typing import Any

from ..models.document import Document, Heading, Section


class DocumentSerializer:
    """
    Handles serialization of Document structures.

    Lookups by id are derived data and are not written.
    """

    @staticmethod
    def serialize(doc: Document) -> str:
        """
        Serialize a Document to JSON string.

        Args:
            doc: The Document to serialize.

        Returns:
            JSON string representation of the document.
        """
        return json.dumps(
            DocumentSerializer._doc_to_dict(doc),
            ensure_ascii=False,
            indent=2
        )

    @staticmethod
    def _doc_to_dict(doc: Document) -> dict[str, Any]:
        """Convert Document to dictionary."""
        return {
            "version": doc.version,
            "sections": [DocumentSerializer._section_to_dict(s) for s in doc.sections],
            "lines": list(doc.lines),
        }

    @staticmethod
    def _section_to_dict(section: Section) -> dict[str, Any]:
        """Convert Section to dictionary."""
        return {
            "heading": DocumentSerializer._heading_to_dict(section.heading),
            "lines": list(section.lines),
        }

    @staticmethod
    def _heading_to_dict(heading: Heading) -> dict[str, Any]:
        """Convert Heading to dictionary."""
        return {
            "line": heading.line,
            "id": heading.id,
            "translated": heading.translated,
            "text": heading.text,
        }


def serialize_document(doc: Document) -> str:
    """Convenience function to serialize a Document."""
    return DocumentSerializer.serialize(doc)
