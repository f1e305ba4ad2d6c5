"""Segmentation - overlap resolution and paragraph slicing for rendering."""

from feedback_anchoring.services.segmentation.builder import (
    SEVERITY_PRIORITY,
    build_segments,
    filter_renderable,
    severity_priority,
)
from feedback_anchoring.services.segmentation.paragraphs import line_ranges, split_into_paragraphs

__all__ = [
    "SEVERITY_PRIORITY",
    "build_segments",
    "filter_renderable",
    "line_ranges",
    "severity_priority",
    "split_into_paragraphs",
]
