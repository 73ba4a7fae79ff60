"""HTML rendering of documents with version and translation annotations."""

from .annotator import annotations_plugin, numeric_version_to_human
from .view_renderer import HtmlPageRenderer, load_template

__all__ = [
    "annotations_plugin",
    "numeric_version_to_human",
    "HtmlPageRenderer",
    "load_template",
]
