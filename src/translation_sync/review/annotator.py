"""Rendering annotations for version and translation status of headings.

A core rule inserts two synthetic token kinds into the parsed stream:

- ``since_version``: an inline child of the heading, rendered inside the
  heading element, for headings that declare when they were introduced;
- ``translation_status``: a block right after the heading, for headings that
  carry a ``translated`` stamp.

The token stream belongs to a single render call and is discarded afterwards.
"""

from typing import List, Optional

from jinja2 import DictLoader, Environment, select_autoescape
from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from ..config.models import RenderConfiguration
from ..models.attributes import HeadingAttributes

SINCE_VERSION = "since_version"
TRANSLATION_STATUS = "translation_status"

_TEMPLATES = {
    "since_version.html": (
        '<span class="introduced">since {{ product }} v{{ version }}</span>'
    ),
    # the space after "what changed?</a>)" is part of the published markup
    "translation_status.html": (
        "<i>\n"
        "Out-of-date! This section’s translation was last updated for {{ product }} v{{ version }}\n"
        '(<a href="{{ history_url }}">what changed?</a>) \n'
        '(<a href="{{ edit_url }}">contribute</a>)\n'
        "</i>\n"
    ),
}

_environment = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=select_autoescape(["html", "xml"]),
    keep_trailing_newline=True,
)


def numeric_version_to_human(version: str) -> str:
    """``4_18`` becomes ``4.18``."""
    return version.replace("_", ".")


def _annotate_headings(state: StateCore) -> None:
    tokens = state.tokens
    annotated: List[Token] = []
    idx = 0
    while idx < len(tokens):
        token = tokens[idx]
        annotated.append(token)
        idx += 1
        if token.type != "heading_open":
            continue
        attributes = HeadingAttributes.from_token(token)

        inline = tokens[idx] if idx < len(tokens) and tokens[idx].type == "inline" else None
        if attributes.introduced and inline is not None:
            inline.children = list(inline.children or []) + [
                Token(
                    SINCE_VERSION, "span", 0,
                    meta={"version": attributes.introduced},
                )
            ]

        if not attributes.translated:
            continue
        # copy through heading_close, then add the status block after it
        while idx < len(tokens):
            annotated.append(tokens[idx])
            idx += 1
            if annotated[-1].type == "heading_close":
                break
        annotated.append(
            Token(
                TRANSLATION_STATUS, "i", 0,
                map=token.map,
                level=token.level,
                block=True,
                meta={"version": attributes.translated},
            )
        )
    state.tokens[:] = annotated


def annotations_plugin(
    md: MarkdownIt,
    render: Optional[RenderConfiguration] = None,
    basename: str = "",
) -> None:
    """
    Register the heading annotation rule and the renderers for its tokens.

    Must be applied after the heading attribute plugin.

    Args:
        md: Parser to extend.
        render: Product name and repository links.
        basename: Document file name without extension, used in links.
    """
    settings = render or RenderConfiguration()

    def render_since_version(self, tokens, idx, options, env):
        return _environment.get_template("since_version.html").render(
            product=settings.product_name,
            version=numeric_version_to_human(tokens[idx].meta["version"]),
        )

    def render_translation_status(self, tokens, idx, options, env):
        return _environment.get_template("translation_status.html").render(
            product=settings.product_name,
            version=numeric_version_to_human(tokens[idx].meta["version"]),
            history_url=settings.history_url(basename),
            edit_url=settings.edit_url(basename),
        )

    md.core.ruler.push("heading_annotations", _annotate_headings)
    md.add_render_rule(SINCE_VERSION, render_since_version)
    md.add_render_rule(TRANSLATION_STATUS, render_translation_status)
