"""Markdown parsing and segmentation for the translation sync system."""

from .line_index import LineIndex
from .markdown import (
    DEFAULT_MARKDOWN_CONFIG,
    AttributeBlock,
    MarkdownConfig,
    build_markdown,
    find_attribute_block,
)
from .heading_extractor import HeadingExtractor
from .segmenter import DocumentSegmenter, segment
from .serialization import DocumentSerializer, serialize_document
from .exceptions import (
    ParseError,
    InternalError,
    MissingTitleError,
    MarkerExistsError,
    SectionNotFoundWarning,
    ErrorHandler,
)

__all__ = [
    "LineIndex",
    "DEFAULT_MARKDOWN_CONFIG",
    "AttributeBlock",
    "MarkdownConfig",
    "build_markdown",
    "find_attribute_block",
    "HeadingExtractor",
    "DocumentSegmenter",
    "segment",
    "DocumentSerializer",
    "serialize_document",
    "ParseError",
    "InternalError",
    "MissingTitleError",
    "MarkerExistsError",
    "SectionNotFoundWarning",
    "ErrorHandler",
]
