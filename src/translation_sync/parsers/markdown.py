"""Markdown parser configuration and the heading attribute extension.

The parser is built from an immutable ``MarkdownConfig`` every time it is
needed, so segmentation and rendering never share a parser or a token stream.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from mdit_py_plugins.anchors import anchors_plugin
from mdit_py_plugins.attrs.parse import ParseError as AttributeSyntaxError
from mdit_py_plugins.attrs.parse import parse as parse_attribute_block

from ..models.attributes import ATTRIBUTES_META_KEY

# Only these attributes end up on the rendered heading element; version
# markers are bookkeeping.
HTML_HEADING_ATTRIBUTES = ("id", "class")

_SLUG_STRIP_RE = re.compile(r"[^\w\- ]", re.UNICODE)
_SLUG_SPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class MarkdownConfig:
    """
    Parser and renderer options used for every parse and render call.

    Attributes:
        preset: markdown-it preset the parser starts from.
        tables: Enable GFM table syntax.
        strikethrough: Enable GFM ``~~strikethrough~~``.
        hard_breaks: Render soft line breaks as ``<br />``.
        xhtml: Emit XHTML-style void elements.
        html: Allow raw HTML in the source.
        auto_heading_ids: Generate heading ids from heading text.
        heading_attributes: Parse trailing ``{#id key="value"}`` blocks.
        max_heading_level: Deepest heading level that gets an automatic id.
    """
    preset: str = "commonmark"
    tables: bool = True
    strikethrough: bool = True
    hard_breaks: bool = True
    xhtml: bool = True
    html: bool = True
    auto_heading_ids: bool = True
    heading_attributes: bool = True
    max_heading_level: int = 6

    def to_dict(self) -> Dict[str, Any]:
        return {
            "preset": self.preset,
            "tables": self.tables,
            "strikethrough": self.strikethrough,
            "hard_breaks": self.hard_breaks,
            "xhtml": self.xhtml,
            "html": self.html,
            "auto_heading_ids": self.auto_heading_ids,
            "heading_attributes": self.heading_attributes,
            "max_heading_level": self.max_heading_level,
        }


DEFAULT_MARKDOWN_CONFIG = MarkdownConfig()


@dataclass(frozen=True)
class AttributeBlock:
    """A ``{...}`` attribute block found at the end of a piece of text."""
    start: int
    end: int
    attributes: Dict[str, str]


def find_attribute_block(text: str) -> Optional[AttributeBlock]:
    """
    Locate the attribute block that terminates ``text``.

    The block is the right-most ``{`` that parses as an attribute block and is
    followed only by whitespace (or an ATX closing sequence).

    Args:
        text: Heading content or a raw heading line.

    Returns:
        The block's span and parsed attributes, or None if there is none.
    """
    start = text.rfind("{")
    while start != -1:
        try:
            closing, attributes = parse_attribute_block(text[start:])
        except AttributeSyntaxError:
            pass
        else:
            end = start + closing + 1
            if not text[end:].strip(" \t\r\n#"):
                return AttributeBlock(start=start, end=end, attributes=attributes)
        start = text.rfind("{", 0, start)
    return None


def slugify(title: str) -> str:
    """Generate a heading id: lower case, spaces to dashes, punctuation dropped."""
    slug = _SLUG_STRIP_RE.sub("", title.strip().lower())
    return _SLUG_SPACE_RE.sub("-", slug)


def _strip_heading_attributes(state: StateCore) -> None:
    """Move trailing attribute blocks from heading text onto heading tokens."""
    tokens = state.tokens
    for idx, token in enumerate(tokens):
        if token.type != "heading_open" or idx + 1 >= len(tokens):
            continue
        inline = tokens[idx + 1]
        if inline.type != "inline":
            continue
        block = find_attribute_block(inline.content)
        if block is None:
            continue
        token.meta[ATTRIBUTES_META_KEY] = dict(block.attributes)
        inline.content = inline.content[:block.start].rstrip()


def _apply_heading_attributes(state: StateCore) -> None:
    """Expose id and class on the heading element; explicit ids win."""
    for token in state.tokens:
        if token.type != "heading_open":
            continue
        attributes = token.meta.get(ATTRIBUTES_META_KEY) or {}
        for name in HTML_HEADING_ATTRIBUTES:
            if attributes.get(name):
                token.attrSet(name, attributes[name])
        if not token.attrGet("id"):
            token.attrs.pop("id", None)


def heading_attributes_plugin(md: MarkdownIt) -> None:
    """
    Parse ``{#id .class key="value"}`` at the end of heading text.

    The block is removed from the heading text before inline parsing, so it
    never reaches the output or the automatic id. It must be registered after
    the anchors plugin so that explicit ids override generated ones.
    """
    md.core.ruler.after("block", "heading_attributes", _strip_heading_attributes)
    md.core.ruler.push("heading_attributes_apply", _apply_heading_attributes)


def build_markdown(
    config: MarkdownConfig = DEFAULT_MARKDOWN_CONFIG,
    plugins: Iterable[Callable[[MarkdownIt], None]] = (),
) -> MarkdownIt:
    """
    Create a markdown-it parser for ``config``.

    Args:
        config: Parser options.
        plugins: Extra plugins applied last (e.g. renderer annotations).

    Returns:
        A new MarkdownIt instance.
    """
    md = MarkdownIt(
        config.preset,
        {
            "breaks": config.hard_breaks,
            "xhtmlOut": config.xhtml,
            "html": config.html,
        },
    )
    extensions = []
    if config.tables:
        extensions.append("table")
    if config.strikethrough:
        extensions.append("strikethrough")
    if extensions:
        md.enable(extensions)
    if config.auto_heading_ids:
        md.use(anchors_plugin, max_level=config.max_heading_level, slug_func=slugify)
    if config.heading_attributes:
        md.use(heading_attributes_plugin)
    for plugin in plugins:
        md.use(plugin)
    return md
