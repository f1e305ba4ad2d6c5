"""Segment builder - slices text into non-overlapping, render-ready segments.

Algorithm:
1. Keep annotations that are anchored (valid or drifted) with a well-formed
   range: 0 <= start < end <= len(text). Everything else is dropped silently.
2. Collect a start and an end boundary per annotation, sorted by position;
   at equal positions starts sort before ends.
3. Sweep left to right with the set of active annotations. Before applying
   each boundary, emit the segment [cursor, boundary) owned by the highest
   priority active annotation (error > warning > suggestion; no severity
   ranks as suggestion).
4. Text after the last boundary is emitted unannotated.

Equal-priority ties go to the annotation that became active first; among
annotations starting at the same offset, input order decides.

Post-condition: "".join(seg.text for seg in segments) == text.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from feedback_anchoring.models.annotation import AnchorStatus, AnnotatedRange, Severity
from feedback_anchoring.models.segment import TextSegment

logger = logging.getLogger(__name__)

SEVERITY_PRIORITY: Final[dict[Severity, int]] = {
    Severity.ERROR: 3,
    Severity.WARNING: 2,
    Severity.SUGGESTION: 1,
}

_RENDERABLE_STATUSES: Final[frozenset[AnchorStatus]] = frozenset(
    {AnchorStatus.VALID, AnchorStatus.DRIFTED}
)


def severity_priority(severity: Severity | None) -> int:
    """Overlap priority for a severity; missing severity ranks as suggestion."""
    if severity is None:
        return SEVERITY_PRIORITY[Severity.SUGGESTION]
    return SEVERITY_PRIORITY.get(severity, SEVERITY_PRIORITY[Severity.SUGGESTION])


@dataclass(frozen=True)
class _Boundary:
    position: int
    is_start: bool
    order: int
    annotation: AnnotatedRange

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.position, 0 if self.is_start else 1)


def _is_well_formed(annotation: AnnotatedRange, text_length: int) -> bool:
    start = annotation.start_offset
    end = annotation.end_offset
    if not isinstance(start, int) or not isinstance(end, int):
        return False
    return 0 <= start < end <= text_length


def filter_renderable(
    annotations: Iterable[AnnotatedRange],
    text_length: int,
) -> list[AnnotatedRange]:
    """Keep anchored annotations whose range fits the text."""
    kept: list[AnnotatedRange] = []
    for annotation in annotations:
        if annotation.anchor_status not in _RENDERABLE_STATUSES:
            continue
        if not _is_well_formed(annotation, text_length):
            logger.debug(
                "Dropping malformed range for %s: [%s, %s) in text of length %d",
                annotation.id,
                annotation.start_offset,
                annotation.end_offset,
                text_length,
            )
            continue
        kept.append(annotation)
    return kept


def _pick_winner(active: dict[int, AnnotatedRange]) -> AnnotatedRange | None:
    """Highest priority active annotation; first activated wins ties."""
    best: AnnotatedRange | None = None
    best_priority = -1
    for annotation in active.values():
        priority = severity_priority(annotation.severity)
        if priority > best_priority:
            best = annotation
            best_priority = priority
    return best


def _segment(text: str, start: int, end: int, owner: AnnotatedRange | None) -> TextSegment:
    return TextSegment(
        text=text[start:end],
        annotation_id=owner.id if owner else None,
        severity=owner.severity if owner else None,
        char_offset=start,
        anchor_status=owner.anchor_status if owner else None,
    )


def build_segments(text: str, annotations: Iterable[AnnotatedRange]) -> list[TextSegment]:
    """Partition text into segments, each owned by at most one annotation.

    Args:
        text: The text being rendered.
        annotations: Ranges with anchor statuses, offsets relative to text.

    Returns:
        Contiguous, non-overlapping segments covering the whole text. Empty
        text yields a single empty plain segment.
    """
    text = text or ""
    renderable = filter_renderable(annotations, len(text))
    if not renderable:
        return [_segment(text, 0, len(text), None)]

    boundaries: list[_Boundary] = []
    for order, annotation in enumerate(renderable):
        start = int(annotation.start_offset or 0)
        end = int(annotation.end_offset or 0)
        boundaries.append(_Boundary(start, True, order, annotation))
        boundaries.append(_Boundary(end, False, order, annotation))
    boundaries.sort(key=lambda b: b.sort_key)

    segments: list[TextSegment] = []
    # Keyed by input order; dict iteration order is activation order.
    active: dict[int, AnnotatedRange] = {}
    cursor = 0

    for boundary in boundaries:
        if boundary.position > cursor:
            segments.append(_segment(text, cursor, boundary.position, _pick_winner(active)))
            cursor = boundary.position

        if boundary.is_start:
            active[boundary.order] = boundary.annotation
        else:
            active.pop(boundary.order, None)

    if cursor < len(text):
        segments.append(_segment(text, cursor, len(text), None))

    return segments
