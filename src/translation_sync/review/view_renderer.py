"""HTML page rendering for markdown documents and their translations."""

import logging
from functools import partial
from pathlib import Path
from typing import Optional, Union

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from ..config.models import SyncConfiguration
from ..parsers.exceptions import MissingTitleError, ParseError
from ..parsers.markdown import build_markdown
from ..parsers.segmenter import DocumentSegmenter, decode_source, encode_source
from ..storage import atomic_write_bytes
from .annotator import annotations_plugin


logger = logging.getLogger(__name__)


def load_template(path: Union[str, Path]) -> Template:
    """
    Load a Jinja2 template file.

    Args:
        path: Template file. Its directory becomes the loader root, so the
            template may include or extend siblings.

    Returns:
        The compiled template.
    """
    path = Path(path)
    env = Environment(
        loader=FileSystemLoader(str(path.parent)),
        autoescape=select_autoescape(['html', 'xml']),
        keep_trailing_newline=True,
    )
    return env.get_template(path.name)


class HtmlPageRenderer:
    """
    Renders markdown documents to HTML pages.

    The page is an optional header template, the converted markdown with
    version and translation status annotations, and an optional footer
    template.
    """

    def __init__(
        self,
        config: Optional[SyncConfiguration] = None,
        header_template: Optional[Template] = None,
        footer_template: Optional[Template] = None,
    ):
        """
        Initialize the page renderer.

        Args:
            config: System configuration (parser options and link settings).
            header_template: Rendered before the content with ``title`` set
                to the text of the document's title heading.
            footer_template: Rendered after the content.
        """
        self.config = config or SyncConfiguration()
        self.header_template = header_template
        self.footer_template = footer_template
        self._segmenter = DocumentSegmenter(self.config.markdown)

    def render(self, source: bytes, basename: str) -> str:
        """
        Render a markdown buffer to an HTML page.

        Args:
            source: Raw markdown.
            basename: Document file name without extension, used in links.

        Returns:
            The HTML page.

        Raises:
            MissingTitleError: If a header template is set and the document
                has no headings.
            ParseError: If the document cannot be parsed or rendered.
        """
        parts = []
        if self.header_template is not None:
            doc = self._segmenter.segment(source)
            if not doc.has_title:
                raise MissingTitleError(message="document has no title heading for the header")
            parts.append(self.header_template.render(title=doc.title.text))

        md = build_markdown(
            self.config.markdown,
            plugins=[partial(annotations_plugin, render=self.config.render, basename=basename)],
        )
        try:
            parts.append(md.render(decode_source(source)))
        except Exception as e:
            raise ParseError(
                message=f"Failed to render markdown: {str(e)}",
                details={"original_error": str(e)},
            ) from e

        if self.footer_template is not None:
            parts.append(self.footer_template.render())
        return "".join(parts)

    def render_file(self, file_path: Union[str, Path]) -> Path:
        """
        Render a markdown file to ``<stem>.html`` next to it.

        Args:
            file_path: Path of the markdown file.

        Returns:
            Path of the written HTML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ParseError: If the document cannot be parsed or rendered.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        try:
            html = self.render(path.read_bytes(), path.stem)
        except ParseError as e:
            raise e.with_file(str(path))
        output_path = atomic_write_bytes(path.with_suffix(".html"), encode_source(html))
        logger.info(f"Rendered {path} to {output_path}")
        return output_path
