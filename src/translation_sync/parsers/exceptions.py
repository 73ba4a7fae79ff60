"""Custom exceptions for document segmentation and marker rewriting."""

from dataclasses import dataclass, field
from typing import Optional, Any


@dataclass
class ParseError(Exception):
    """
    Base exception for document processing errors.

    Raised directly when the underlying markdown parser fails. Provides
    detailed error information including file path, location, and
    additional context for debugging and user feedback.

    Attributes:
        message: Human-readable error description.
        file_path: Path to the file that caused the error.
        location: Specific location within the file (line, byte offset).
        details: Additional error details.
    """
    message: str
    file_path: Optional[str] = None
    location: Optional[str] = None
    details: Optional[dict] = field(default_factory=dict)

    def __post_init__(self):
        if self.details is None:
            self.details = {}
        super().__init__(str(self))

    def __str__(self) -> str:
        parts = [self.message]
        if self.file_path:
            parts.append(f"File: {self.file_path}")
        if self.location:
            parts.append(f"Location: {self.location}")
        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "file_path": self.file_path,
            "location": self.location,
            "details": self.details,
        }

    def with_file(self, file_path: str) -> "ParseError":
        """Attach a file path to an error raised from an in-memory buffer."""
        if not self.file_path:
            self.file_path = str(file_path)
            self.args = (str(self),)
        return self


@dataclass
class InternalError(ParseError):
    """
    Exception raised when a heading cannot be mapped back to a source line.

    This indicates the markdown parser and the line index disagree about
    the buffer. It is an invariant violation, not a user error.
    """


@dataclass
class MissingTitleError(ParseError):
    """
    Exception raised when a document has no headings at all.

    Every document is expected to start with a title heading that carries
    the document version.
    """


@dataclass
class MarkerExistsError(ParseError):
    """
    Exception raised when stamping a translation that already has markers.
    """


class SectionNotFoundWarning(UserWarning):
    """
    A section of the current revision has no counterpart in the prior one.

    Never raised. Collected and logged by the comparator; the section's id is
    left out of the verdict map.
    """

    def __init__(self, section_id: str, line: int, prior_path: Optional[str] = None):
        self.section_id = section_id
        self.line = line
        self.prior_path = prior_path
        message = f"section {section_id!r} (line {line}) not found in prior revision"
        if prior_path:
            message += f" {prior_path}"
        super().__init__(message)


class ErrorHandler:
    """
    Utility class for collecting recoverable problems while processing files.

    Fatal errors propagate as exceptions; warnings are gathered here so the
    caller can report them after a run.
    """

    def __init__(self, file_path: Optional[str] = None):
        self.file_path = file_path
        self.errors: list[ParseError] = []
        self.warnings: list[str] = []

    def add_error(self, error: ParseError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def add_warning(self, message: str, location: Optional[str] = None) -> None:
        """Add a warning message."""
        warning = f"{message}"
        if location:
            warning += f" (at {location})"
        self.warnings.append(warning)

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of all errors and warnings."""
        return {
            "file_path": self.file_path,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "errors": [e.to_dict() for e in self.errors],
            "warnings": self.warnings,
        }
