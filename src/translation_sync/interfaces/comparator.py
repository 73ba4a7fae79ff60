"""Staleness comparator interface for the translation sync system."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.document import Document
from ..models.staleness import StalenessReport


class IStalenessComparator(ABC):
    """
    Abstract interface for section-by-section revision comparison.

    Implementations decide, per heading id, whether the section's raw lines
    are identical between the current and the prior revision of a document.
    """

    @abstractmethod
    def compare(
        self,
        current: Document,
        prior: Document,
        prior_path: Optional[str] = None,
    ) -> StalenessReport:
        """
        Compare two revisions of the same document.

        Args:
            current: The current revision.
            prior: The revision the translations were last synced against.
            prior_path: Optional path of the prior revision, for messages.

        Returns:
            StalenessReport with one verdict per matched id.
        """
        pass
