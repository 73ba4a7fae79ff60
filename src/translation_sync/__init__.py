"""
Translation Sync

Keeps translated copies of a versioned markdown document in sync with their
source by tracking, per heading, which source version a translation matches.
"""

__version__ = "0.1.0"

# Export main components
from .models.document import Document, Heading, Section
from .models.enums import MarkerKind, SectionStatus
from .models.staleness import StalenessReport
from .parsers import (
    DocumentSegmenter,
    MarkdownConfig,
    ParseError,
    InternalError,
    MissingTitleError,
    MarkerExistsError,
    SectionNotFoundWarning,
    segment,
)
from .alignment import StalenessComparator, compare
from .generators import (
    MarkerPropagator,
    PropagationResult,
    TranslationStubber,
    propagate,
    stamp_translation,
)
from .review import HtmlPageRenderer
from .config import (
    ConfigurationManager,
    SyncConfiguration,
    ConfigurationError,
    ValidationResult,
)
from .pipeline import SyncResult, TranslationSyncPipeline

__all__ = [
    "Document",
    "Heading",
    "Section",
    "MarkerKind",
    "SectionStatus",
    "StalenessReport",
    "DocumentSegmenter",
    "MarkdownConfig",
    "ParseError",
    "InternalError",
    "MissingTitleError",
    "MarkerExistsError",
    "SectionNotFoundWarning",
    "segment",
    "StalenessComparator",
    "compare",
    "MarkerPropagator",
    "PropagationResult",
    "TranslationStubber",
    "propagate",
    "stamp_translation",
    "HtmlPageRenderer",
    "ConfigurationManager",
    "SyncConfiguration",
    "ConfigurationError",
    "ValidationResult",
    "SyncResult",
    "TranslationSyncPipeline",
]
