"""Document segmenter interface for the translation sync system."""

from abc import ABC, abstractmethod

from ..models.document import Document


class IDocumentSegmenter(ABC):
    """
    Abstract interface for document segmentation.

    Implementations turn a markdown buffer into a Document: headings with
    source lines, and the raw lines each heading owns.
    """

    @abstractmethod
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
        pass

    @abstractmethod
    def segment_file(self, file_path: str) -> Document:
        """
        Read and segment a markdown file.

        Args:
            file_path: Path to the markdown file.

        Returns:
            Document view of the file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ParseError: If the markdown parser fails.
        """
        pass
