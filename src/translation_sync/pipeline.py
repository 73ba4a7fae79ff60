"""End-to-end workflows for the translation sync system.

This module wires the segmenter, comparator, marker propagator, stamper and
page renderer together into the three user-facing workflows: flagging stale
translations after a source edit, preparing a new translation, and rendering
documents to HTML.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .alignment.staleness import StalenessComparator
from .config.models import SyncConfiguration
from .generators.marker_propagator import MarkerPropagator
from .generators.translation_stub import TranslationStubber
from .interfaces.comparator import IStalenessComparator
from .interfaces.parser import IDocumentSegmenter
from .interfaces.propagator import IMarkerPropagator
from .models.staleness import StalenessReport
from .parsers.exceptions import ErrorHandler, ParseError
from .parsers.segmenter import DocumentSegmenter
from .review.view_renderer import HtmlPageRenderer, load_template
from .storage import atomic_write_bytes, discover_translations


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class SyncResult:
    """Result of flagging the translations of one document."""

    document_path: Path
    current_version: str
    report: StalenessReport
    updated: List[Path] = field(default_factory=list)
    unchanged: List[Path] = field(default_factory=list)
    skipped_locales: List[str] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def verdicts(self) -> Dict[str, bool]:
        return self.report.verdicts


class TranslationSyncPipeline:
    """
    Orchestrates the flag, new and render workflows.

    Components are created from the configuration unless injected.
    """

    def __init__(
        self,
        config: Optional[SyncConfiguration] = None,
        segmenter: Optional[IDocumentSegmenter] = None,
        comparator: Optional[IStalenessComparator] = None,
        propagator: Optional[IMarkerPropagator] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: System configuration.
            segmenter: Optional segmenter (created from the markdown config).
            comparator: Optional staleness comparator.
            propagator: Optional marker propagator.
        """
        self.config = config or SyncConfiguration()
        self._segmenter = segmenter or DocumentSegmenter(self.config.markdown)
        self._comparator = comparator or StalenessComparator()
        self._propagator = propagator or MarkerPropagator(self._segmenter)
        self._stubber = TranslationStubber(self._segmenter)

    def flag(
        self,
        document_path: PathLike,
        prior_path: PathLike,
        locales: Optional[Sequence[str]] = None,
        dry_run: Optional[bool] = None,
    ) -> SyncResult:
        """
        Propagate the staleness of a source edit into every translation.

        Translations are ``<subdir>/<name>`` next to the source document.
        Sections that did not change between ``prior_path`` and
        ``document_path`` get their ``translated`` stamp advanced to the
        current version; everything else keeps its stamp.

        Args:
            document_path: Current revision of the source document.
            prior_path: Revision the translations were last synced against.
            locales: Locale allow-list; defaults to the configured one.
            dry_run: Compute rewrites without writing; defaults to the
                configured value.

        Returns:
            SyncResult describing what was (or would be) rewritten.

        Raises:
            FileNotFoundError: If either revision does not exist.
            ParseError: If a source revision or a translation cannot be
                processed. Files written before the error stay written.
        """
        document_path = Path(document_path).resolve()
        flag_config = self.config.flag
        if locales:
            flag_config = replace(flag_config, locales=tuple(locales))
        if dry_run is not None:
            flag_config = replace(flag_config, dry_run=dry_run)

        handler = ErrorHandler(str(document_path))
        current = self._segmenter.segment_file(str(document_path))
        prior = self._segmenter.segment_file(str(prior_path))
        report = self._comparator.compare(current, prior, prior_path=str(prior_path))
        for warning in report.missing:
            handler.add_warning(str(warning))

        if not current.version:
            message = f"{document_path} has no version marker on its title heading"
            logger.warning(message)
            handler.add_warning(message)

        result = SyncResult(
            document_path=document_path,
            current_version=current.version,
            report=report,
            dry_run=flag_config.dry_run,
        )

        for translation in discover_translations(document_path):
            if not flag_config.includes(translation.locale):
                logger.debug(f"skipping locale {translation.locale}")
                result.skipped_locales.append(translation.locale)
                continue

            try:
                original = translation.path.read_bytes()
            except OSError as e:
                logger.warning(f"cannot read {translation.path}: {e}")
                handler.add_error(
                    ParseError(message=f"cannot read translation: {e}", file_path=str(translation.path))
                )
                result.skipped_locales.append(translation.locale)
                continue

            logger.info(f"processing translation {translation.path}")
            try:
                propagated = self._propagator.propagate(original, report.verdicts, current.version)
            except ParseError as e:
                raise e.with_file(str(translation.path))

            for stale_id in propagated.stale_ids:
                logger.info(f"  keeping heading {stale_id!r} ({report.status(stale_id).value})")
            if not propagated.changed:
                result.unchanged.append(translation.path)
                continue
            if flag_config.dry_run:
                logger.info(f"would update {translation.path} (dry run)")
            else:
                atomic_write_bytes(translation.path, propagated.content)
            result.updated.append(translation.path)

        result.errors = list(handler.errors)
        result.warnings = list(handler.warnings)
        logger.debug(f"flag summary: {handler.get_summary()}")
        return result

    def new(self, document_path: PathLike) -> Path:
        """
        Stamp a freshly copied translation with ``translated="TODO"`` markers.

        The file is rewritten in place.

        Raises:
            FileNotFoundError: If the file does not exist.
            MarkerExistsError: If the document already has markers.
        """
        path = Path(document_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {document_path}")
        try:
            stamped = self._stubber.stamp(path.read_bytes())
        except ParseError as e:
            raise e.with_file(str(path))
        atomic_write_bytes(path, stamped)
        logger.info(f"Stamped {path}")
        return path

    def render(
        self,
        document_paths: Iterable[PathLike],
        header_template: Optional[PathLike] = None,
        footer_template: Optional[PathLike] = None,
    ) -> List[Path]:
        """
        Render markdown files to HTML pages next to them.

        Args:
            document_paths: Markdown files to render.
            header_template: Optional Jinja2 template printed before the
                content, with ``title`` in its context.
            footer_template: Optional Jinja2 template printed after the content.

        Returns:
            Paths of the written HTML files.
        """
        renderer = HtmlPageRenderer(
            self.config,
            header_template=load_template(header_template) if header_template else None,
            footer_template=load_template(footer_template) if footer_template else None,
        )
        return [renderer.render_file(path) for path in document_paths]
