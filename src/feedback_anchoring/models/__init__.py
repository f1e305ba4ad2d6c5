"""Feedback anchoring models - annotations, anchor statuses and render segments."""

from feedback_anchoring.models.annotation import (
    AnchorStatus,
    AnnotatedRange,
    Annotation,
    CommentVisibility,
    FeedbackItem,
    FeedbackItemType,
    Severity,
    TeacherComment,
)
from feedback_anchoring.models.segment import Paragraph, TextSegment

__all__ = [
    "AnchorStatus",
    "AnnotatedRange",
    "Annotation",
    "CommentVisibility",
    "FeedbackItem",
    "FeedbackItemType",
    "Paragraph",
    "Severity",
    "TeacherComment",
    "TextSegment",
]
