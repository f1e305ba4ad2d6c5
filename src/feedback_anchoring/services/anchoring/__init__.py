"""Anchor validation - fuzzy check of stored offsets against current text."""

from feedback_anchoring.services.anchoring.similarity import levenshtein_distance, similarity
from feedback_anchoring.services.anchoring.validator import (
    AnchorValidation,
    classify_similarity,
    validate_anchor,
    validate_anchors,
)

__all__ = [
    "AnchorValidation",
    "classify_similarity",
    "levenshtein_distance",
    "similarity",
    "validate_anchor",
    "validate_anchors",
]
