"""Rewriting of version markers in translated documents."""

from .marker_propagator import MarkerPropagator, propagate, replace_marker
from .translation_stub import TranslationStubber, add_marker, stamp_translation
from ..interfaces.propagator import PropagationResult

__all__ = [
    "MarkerPropagator",
    "propagate",
    "replace_marker",
    "TranslationStubber",
    "add_marker",
    "stamp_translation",
    "PropagationResult",
]
