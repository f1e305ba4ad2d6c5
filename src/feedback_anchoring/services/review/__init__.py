"""Review session - multi-answer submissions, rendering and comment anchoring."""

from feedback_anchoring.services.review.selection import (
    CommentAnchor,
    anchor_from_selection,
    answer_start_offsets,
)
from feedback_anchoring.services.review.session import (
    AnswerRange,
    RenderedAnswer,
    ReviewSession,
    ReviewSessionError,
    compute_answer_ranges,
    localize_annotations,
)

__all__ = [
    "AnswerRange",
    "CommentAnchor",
    "RenderedAnswer",
    "ReviewSession",
    "ReviewSessionError",
    "anchor_from_selection",
    "answer_start_offsets",
    "compute_answer_ranges",
    "localize_annotations",
]
