"""JSON-ready payloads for rendered submissions (camelCase wire shape)."""

from __future__ import annotations

from typing import Any

from feedback_anchoring.models.annotation import AnchorStatus
from feedback_anchoring.models.segment import Paragraph, TextSegment
from feedback_anchoring.services.review.session import RenderedAnswer, ReviewSession


def segment_to_dict(segment: TextSegment) -> dict[str, Any]:
    return {
        "text": segment.text,
        "annotationId": segment.annotation_id,
        "severity": segment.severity.value if segment.severity else None,
        "charOffset": segment.char_offset,
        "anchorStatus": segment.anchor_status.value if segment.anchor_status else None,
    }


def paragraph_to_dict(paragraph: Paragraph) -> dict[str, Any]:
    return {
        "index": paragraph.index,
        "startOffset": paragraph.start_offset,
        "endOffset": paragraph.end_offset,
        "segments": [segment_to_dict(seg) for seg in paragraph.segments],
    }


def rendered_answer_to_dict(answer: RenderedAnswer) -> dict[str, Any]:
    return {
        "index": answer.index,
        "paragraphs": [paragraph_to_dict(p) for p in answer.paragraphs],
    }


def statuses_to_dict(statuses: dict[str, AnchorStatus]) -> dict[str, str]:
    return {annotation_id: status.value for annotation_id, status in statuses.items()}


def session_to_dict(session: ReviewSession) -> dict[str, Any]:
    """Full render of a loaded session."""
    return {
        "anchorStatuses": statuses_to_dict(session.anchor_statuses),
        "answers": [rendered_answer_to_dict(a) for a in session.render()],
        "unanchoredIds": session.unanchored_ids(),
    }
