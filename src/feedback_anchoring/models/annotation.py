"""Annotation models - feedback items and teacher comments anchored to text.

Both kinds share a minimal common shape consumed by anchor validation and
segmentation: id, optional character offsets, optional snippet captured at
creation time, and optional severity. Kind-specific fields (suggested fix,
author, visibility) never reach the core.

Offsets are deliberately unconstrained here: stale or nonsensical offsets
must flow through to anchor validation, which classifies them instead of
rejecting them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Severity(StrEnum):
    """Severity of a feedback item; drives overlap resolution."""

    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"


class AnchorStatus(StrEnum):
    """Derived state of an annotation's anchor against the current text.

    NO_ANCHOR: offsets absent; general comment, never highlighted.
    VALID: text at offsets matches the stored snippet (or no snippet to check).
    DRIFTED: partial match; still highlighted but flagged.
    ORPHANED: anchor unreliable; not highlighted, card shows "anchor lost".
    """

    NO_ANCHOR = "no-anchor"
    VALID = "valid"
    DRIFTED = "drifted"
    ORPHANED = "orphaned"

    @property
    def is_anchored(self) -> bool:
        """True when the annotation may be drawn as a text highlight."""
        return self in (AnchorStatus.VALID, AnchorStatus.DRIFTED)


class FeedbackItemType(StrEnum):
    """Kind of AI feedback item."""

    GRAMMAR = "grammar"
    VOCABULARY = "vocabulary"
    COHERENCE = "coherence"
    SCORE_SUGGESTION = "score_suggestion"
    GENERAL = "general"


class CommentVisibility(StrEnum):
    """Who can see a teacher comment."""

    PRIVATE = "private"
    STUDENT_FACING = "student_facing"


class Annotation(BaseModel):
    """Common annotation shape shared by feedback items and teacher comments.

    Accepts both camelCase (wire) and snake_case field names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    id: Annotated[str, Field(description="Stable annotation identifier")]
    start_offset: Annotated[
        int | None,
        Field(default=None, description="Start character offset into the current text"),
    ]
    end_offset: Annotated[
        int | None,
        Field(default=None, description="End character offset (exclusive)"),
    ]
    original_context_snippet: Annotated[
        str | None,
        Field(default=None, description="Text at the offsets when the annotation was created"),
    ]
    severity: Annotated[
        Severity | None,
        Field(default=None, description="Overlap priority; None ranks as suggestion"),
    ]

    @property
    def has_offsets(self) -> bool:
        """True when both offsets are present."""
        return self.start_offset is not None and self.end_offset is not None


class FeedbackItem(Annotation):
    """AI-generated feedback attached to a span of student text."""

    type: Annotated[FeedbackItemType, Field(default=FeedbackItemType.GENERAL)]
    content: Annotated[str, Field(default="")]
    confidence: Annotated[float | None, Field(default=None, ge=0.0, le=1.0)]
    suggested_fix: Annotated[str | None, Field(default=None)]


class TeacherComment(Annotation):
    """Teacher-authored comment, optionally anchored to a span.

    Comments carry no severity, so they rank lowest in overlap resolution.
    """

    author_name: Annotated[str | None, Field(default=None)]
    content: Annotated[str, Field(default="")]
    visibility: Annotated[CommentVisibility, Field(default=CommentVisibility.PRIVATE)]
    created_at: Annotated[datetime | None, Field(default=None)]
    updated_at: Annotated[datetime | None, Field(default=None)]


@dataclass(frozen=True)
class AnnotatedRange:
    """An annotation range paired with its anchor status, ready for segmentation.

    Attributes:
        id: Annotation identifier.
        start_offset: Start offset into the text being segmented (may be None or malformed).
        end_offset: End offset, exclusive (may be None or malformed).
        severity: Annotation severity, or None.
        anchor_status: Result of anchor validation.
    """

    id: str
    start_offset: int | None
    end_offset: int | None
    severity: Severity | None
    anchor_status: AnchorStatus

    @classmethod
    def from_annotation(
        cls,
        annotation: Annotation,
        anchor_status: AnchorStatus,
        *,
        shift: int = 0,
    ) -> AnnotatedRange:
        """Build a range from an annotation, translating offsets by -shift."""
        start = annotation.start_offset
        end = annotation.end_offset
        return cls(
            id=annotation.id,
            start_offset=None if start is None else start - shift,
            end_offset=None if end is None else end - shift,
            severity=annotation.severity,
            anchor_status=anchor_status,
        )
