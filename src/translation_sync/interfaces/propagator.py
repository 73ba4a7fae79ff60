"""Marker propagator interface for the translation sync system."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Mapping


@dataclass
class PropagationResult:
    """
    Result of rewriting the version markers of one translation.

    Attributes:
        content: The complete rewritten buffer.
        updated_ids: Ids whose ``translated`` stamp was advanced.
        title_updated: Whether the title's ``version`` marker changed.
        stale_ids: Stamped ids left untouched because they changed or have
            no verdict.
    """
    content: bytes
    updated_ids: List[str] = field(default_factory=list)
    title_updated: bool = False
    stale_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.updated_ids is None:
            self.updated_ids = []
        if self.stale_ids is None:
            self.stale_ids = []

    @property
    def changed(self) -> bool:
        return self.title_updated or bool(self.updated_ids)


class IMarkerPropagator(ABC):
    """
    Abstract interface for propagating staleness verdicts into translations.
    """

    @abstractmethod
    def propagate(
        self,
        translation: bytes,
        verdicts: Mapping[str, bool],
        current_version: str,
    ) -> PropagationResult:
        """
        Rewrite the version markers of a translated document.

        Args:
            translation: Raw contents of the translated file.
            verdicts: Heading id to "section unchanged" verdicts.
            current_version: Version of the current source document.

        Returns:
            PropagationResult holding the rewritten buffer.

        Raises:
            MissingTitleError: If the translation has no headings.
            ParseError: If the translation cannot be parsed.
        """
        pass
