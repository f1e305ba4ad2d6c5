"""Render-ready text segments and paragraphs.

Segments partition a text with no gaps and no overlaps. Each carries at most
one winning annotation. Paragraphs are per-line slices of the segment list.
"""

from __future__ import annotations

from dataclasses import dataclass

from feedback_anchoring.models.annotation import AnchorStatus, Severity


@dataclass(frozen=True)
class TextSegment:
    """Contiguous slice of text assigned to at most one annotation.

    Attributes:
        text: The slice itself.
        annotation_id: Winning annotation id, or None for plain text.
        severity: Winning annotation's severity (None when plain or unset).
        char_offset: Absolute start position of the slice in the source text.
        anchor_status: Winning annotation's anchor status, or None for plain text.
    """

    text: str
    annotation_id: str | None
    severity: Severity | None
    char_offset: int
    anchor_status: AnchorStatus | None = None

    @property
    def end_offset(self) -> int:
        """Absolute end position (exclusive)."""
        return self.char_offset + len(self.text)

    @property
    def is_annotated(self) -> bool:
        return self.annotation_id is not None


@dataclass(frozen=True)
class Paragraph:
    """One line of the source text with its segments.

    An empty line has no segments; the renderer substitutes a placeholder.
    """

    index: int
    segments: tuple[TextSegment, ...] = ()
    start_offset: int = 0
    end_offset: int = 0

    @property
    def text(self) -> str:
        return "".join(seg.text for seg in self.segments)

    @property
    def is_empty(self) -> bool:
        return not self.segments
