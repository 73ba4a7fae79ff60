"""Data models for configuration management."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..parsers.markdown import MarkdownConfig


class ConfigurationType(Enum):
    """Sections of the configuration file."""
    MARKDOWN = "markdown"
    RENDER = "render"
    FLAG = "flag"


@dataclass(frozen=True)
class RenderConfiguration:
    """
    Settings for the annotations added to rendered pages.

    Links in the translation status block point at
    ``{repository_url}/commits/{branch}/{docs_dir}/{basename}`` and the
    matching ``/edit/`` view.
    """
    product_name: str = "i3"
    repository_url: str = "https://github.com/i3/i3"
    branch: str = "next"
    docs_dir: str = "docs"

    def document_path(self, basename: str) -> str:
        """Repository-relative path of a document, as used in links."""
        if self.docs_dir:
            return f"{self.docs_dir.strip('/')}/{basename}"
        return basename

    def history_url(self, basename: str) -> str:
        return f"{self.repository_url.rstrip('/')}/commits/{self.branch}/{self.document_path(basename)}"

    def edit_url(self, basename: str) -> str:
        return f"{self.repository_url.rstrip('/')}/edit/{self.branch}/{self.document_path(basename)}"


@dataclass(frozen=True)
class FlagConfiguration:
    """
    Settings for propagating staleness verdicts into translations.

    Attributes:
        locales: If non-empty, only these locale subdirectories are processed.
        dry_run: Compute rewrites without writing files.
    """
    locales: tuple = ()
    dry_run: bool = False

    def includes(self, locale: str) -> bool:
        return not self.locales or locale in self.locales


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one."""
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings
        )


class ConfigurationError(Exception):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, validation_result: Optional[ValidationResult] = None):
        super().__init__(message)
        self.message = message
        self.validation_result = validation_result


@dataclass(frozen=True)
class SyncConfiguration:
    """
    Complete system configuration.

    Aggregates parser, rendering and flag settings into a single immutable
    value that is passed to every component.
    """
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)
    render: RenderConfiguration = field(default_factory=RenderConfiguration)
    flag: FlagConfiguration = field(default_factory=FlagConfiguration)
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            ConfigurationType.MARKDOWN.value: self.markdown.to_dict(),
            ConfigurationType.RENDER.value: {
                "product_name": self.render.product_name,
                "repository_url": self.render.repository_url,
                "branch": self.render.branch,
                "docs_dir": self.render.docs_dir,
            },
            ConfigurationType.FLAG.value: {
                "locales": list(self.flag.locales),
                "dry_run": self.flag.dry_run,
            },
        }
