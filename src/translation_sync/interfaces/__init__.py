"""Abstract interfaces for the translation sync system."""

from .parser import IDocumentSegmenter
from .comparator import IStalenessComparator
from .propagator import IMarkerPropagator, PropagationResult

__all__ = [
    "IDocumentSegmenter",
    "IStalenessComparator",
    "IMarkerPropagator",
    "PropagationResult",
]
