"""
tl8: keep translated markdown documents in sync with their source.

Usage:
  tl8 flag [OPTIONS] DOCUMENT --old-path PRIOR
  tl8 new [OPTIONS] DOCUMENT
  tl8 render [OPTIONS] DOCUMENT...
  tl8 segment [OPTIONS] DOCUMENT

Examples:
  tl8 flag docs/userguide --old-path /tmp/userguide.orig -v
  tl8 flag docs/userguide --old-path /tmp/userguide.orig --locale fr --dry-run
  tl8 new docs/fr/userguide
  tl8 render docs/userguide docs/fr/userguide --header-template header.html
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from jinja2 import TemplateError

from translation_sync.config.config_manager import ConfigurationManager
from translation_sync.config.models import ConfigurationError, SyncConfiguration
from translation_sync.parsers.exceptions import ParseError
from translation_sync.parsers.segmenter import DocumentSegmenter, encode_source
from translation_sync.parsers.serialization import serialize_document
from translation_sync.pipeline import TranslationSyncPipeline

app = typer.Typer(help=__doc__, no_args_is_help=True)

logger = logging.getLogger(__name__)

_HANDLED_ERRORS = (ParseError, ConfigurationError, TemplateError, OSError, ValueError)

CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="JSON configuration file (default: tl8.json next to the document)"
)
VERBOSE_OPTION = typer.Option(
    0,
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG)",
)


def setup_logging(verbose: int):
    """Set up logging based on verbosity level."""
    if verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:  # verbose >= 2
        level = logging.DEBUG

    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def load_configuration(config: Optional[Path], document: Path) -> SyncConfiguration:
    """Load ``config``, or ``tl8.json`` from the document's directory if present."""
    manager = ConfigurationManager()
    if config is not None:
        result = manager.load(config)
    else:
        result = manager.load_from_directory(document.parent)
    for warning in result.warnings:
        logger.warning(warning)
    if manager.is_loaded:
        logger.debug(f"configuration: {manager.to_dict()}")
    return manager.configuration


def fail(error: Exception) -> None:
    """Print ``error`` and exit with status 1."""
    if isinstance(error, ConfigurationError) and error.validation_result is not None:
        for message in error.validation_result.errors:
            typer.echo(f"config: {message}", err=True)
    typer.echo(f"error: {error}", err=True)
    raise typer.Exit(code=1)


@app.command("flag", help="Advance translated= stamps of sections unchanged since PRIOR.")
def flag(
    document: Path = typer.Argument(..., help="Current revision of the source document"),
    old_path: Path = typer.Option(
        ..., "--old-path", help="Revision the translations were last synced against"
    ),
    locale: Optional[List[str]] = typer.Option(
        None, "--locale", "-l", help="Only process these locale subdirectories"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Report what would be rewritten without writing"
    ),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    """Flag outdated sections in every translation of DOCUMENT."""
    setup_logging(verbose)
    try:
        pipeline = TranslationSyncPipeline(load_configuration(config, document))
        result = pipeline.flag(
            document, old_path, locales=locale or None, dry_run=dry_run or None
        )
    except _HANDLED_ERRORS as e:
        fail(e)
        return

    prefix = "would update" if result.dry_run else "updated"
    for path in result.updated:
        typer.echo(f"{prefix} {path}")
    for error in result.errors:
        typer.echo(f"warning: {error}", err=True)


@app.command("new", help="Stamp a new translation with translated=\"TODO\" markers.")
def new(
    document: Path = typer.Argument(..., help="Freshly copied translation to stamp in place"),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    """Prepare a translation copy so every section shows as untranslated."""
    setup_logging(verbose)
    try:
        TranslationSyncPipeline(load_configuration(config, document)).new(document)
    except _HANDLED_ERRORS as e:
        fail(e)


@app.command("render", help="Render markdown documents to <name>.html pages.")
def render(
    documents: List[Path] = typer.Argument(..., help="Markdown documents to render"),
    header_template: Optional[Path] = typer.Option(
        None, "--header-template", help="Jinja2 template printed before the content ({{ title }})"
    ),
    footer_template: Optional[Path] = typer.Option(
        None, "--footer-template", help="Jinja2 template printed after the content"
    ),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    """Render DOCUMENTS with version and translation status annotations."""
    setup_logging(verbose)
    try:
        pipeline = TranslationSyncPipeline(load_configuration(config, documents[0]))
        outputs = pipeline.render(documents, header_template, footer_template)
    except _HANDLED_ERRORS as e:
        fail(e)
        return
    for path in outputs:
        typer.echo(f"wrote {path}")


@app.command("segment", help="Print the heading-anchored sections of a document as JSON.")
def segment(
    document: Path = typer.Argument(..., help="Markdown document to segment"),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    """Dump headings, section lines and the document version."""
    setup_logging(verbose)
    try:
        configuration = load_configuration(config, document)
        doc = DocumentSegmenter(configuration.markdown).segment_file(str(document))
    except _HANDLED_ERRORS as e:
        fail(e)
        return
    # bytes, so undecodable input is written back as it was read
    typer.echo(encode_source(serialize_document(doc)))


if __name__ == "__main__":
    app()
