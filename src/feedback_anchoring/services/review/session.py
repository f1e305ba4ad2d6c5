"""Review session - one submission's text, annotations and highlight state.

A submission is a list of answers (essay texts or speaking transcripts).
Annotation offsets refer to the concatenated text, answers joined by the
configured separator (a blank line by default). The session:

- validates every anchor (feedback items and teacher comments) against the
  concatenated text,
- assigns each annotation to the answer that fully contains it and
  translates its offsets to answer-local ones (annotations straddling an
  answer boundary are not rendered),
- renders each answer to paragraphs of segments, memoized until the
  submission is replaced, so highlight changes never re-run segmentation,
- owns the HighlightStore and resets it whenever a submission is loaded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from feedback_anchoring.config import AnchoringConfig
from feedback_anchoring.models.annotation import (
    AnchorStatus,
    AnnotatedRange,
    Annotation,
    FeedbackItem,
    Severity,
    TeacherComment,
)
from feedback_anchoring.models.segment import Paragraph, TextSegment
from feedback_anchoring.services.anchoring.validator import validate_anchors
from feedback_anchoring.services.highlight.interaction import HighlightInteraction
from feedback_anchoring.services.highlight.scheduler import Scheduler
from feedback_anchoring.services.highlight.store import HighlightStore
from feedback_anchoring.services.review.selection import (
    CommentAnchor,
    anchor_from_selection,
    answer_start_offsets,
)
from feedback_anchoring.services.segmentation.builder import build_segments
from feedback_anchoring.services.segmentation.paragraphs import split_into_paragraphs

logger = logging.getLogger(__name__)


class ReviewSessionError(Exception):
    """Raised when a session is asked for an answer it does not have."""


@dataclass(frozen=True)
class AnswerRange:
    """Global [global_start, global_end) range of one answer."""

    index: int
    global_start: int
    global_end: int

    def contains(self, start: int, end: int) -> bool:
        return self.global_start <= start and end <= self.global_end


@dataclass(frozen=True)
class RenderedAnswer:
    """One answer rendered to paragraphs."""

    index: int
    text: str
    paragraphs: tuple[Paragraph, ...]


def compute_answer_ranges(answers: Sequence[str], separator: str) -> list[AnswerRange]:
    """Global range of every answer in the concatenated text."""
    starts = answer_start_offsets(answers, separator)
    return [
        AnswerRange(index=i, global_start=start, global_end=start + len(answer))
        for i, (start, answer) in enumerate(zip(starts, answers, strict=True))
    ]


def localize_annotations(
    annotations: Iterable[Annotation],
    statuses: dict[str, AnchorStatus],
    ranges: Sequence[AnswerRange],
) -> dict[int, list[AnnotatedRange]]:
    """Group annotations by containing answer with answer-local offsets.

    Annotations without offsets, or not fully inside a single answer, are
    left out.

    Args:
        annotations: Annotations with global offsets.
        statuses: Anchor status per annotation id.
        ranges: Answer ranges from compute_answer_ranges.

    Returns:
        Mapping of answer index to ranges ready for build_segments.
    """
    by_answer: dict[int, list[AnnotatedRange]] = {}
    for annotation in annotations:
        start = annotation.start_offset
        end = annotation.end_offset
        if start is None or end is None:
            continue

        owner = next((r for r in ranges if r.contains(start, end)), None)
        if owner is None:
            logger.debug("Annotation %s spans answer boundaries; not rendered", annotation.id)
            continue

        status = statuses.get(annotation.id, AnchorStatus.NO_ANCHOR)
        by_answer.setdefault(owner.index, []).append(
            AnnotatedRange.from_annotation(annotation, status, shift=owner.global_start)
        )
    return by_answer


class ReviewSession:
    """Review state for one submission at a time.

    Load a submission with load_submission(); replacing it recomputes anchor
    statuses, drops cached renders and clears the highlight.
    """

    def __init__(
        self,
        *,
        config: AnchoringConfig | None = None,
        scheduler: Scheduler | None = None,
        store: HighlightStore | None = None,
    ) -> None:
        """Initialize an empty session.

        Args:
            config: Anchoring configuration. Defaults to AnchoringConfig().
            scheduler: Timer source for the highlight store and interactions.
            store: Existing highlight store to own; created when omitted.
        """
        self._config = config or AnchoringConfig()
        self._scheduler = scheduler
        self._highlight = store or HighlightStore(self._config, scheduler)
        self._answers: list[str] = []
        self._text = ""
        self._annotations: list[Annotation] = []
        self._statuses: dict[str, AnchorStatus] = {}
        self._ranges: list[AnswerRange] = []
        self._by_answer: dict[int, list[AnnotatedRange]] = {}
        self._render_cache: dict[int, tuple[Paragraph, ...]] = {}

    @property
    def config(self) -> AnchoringConfig:
        return self._config

    @property
    def highlight(self) -> HighlightStore:
        return self._highlight

    @property
    def answers(self) -> list[str]:
        return list(self._answers)

    @property
    def text(self) -> str:
        """Concatenated submission text the stored offsets refer to."""
        return self._text

    @property
    def annotations(self) -> list[Annotation]:
        return list(self._annotations)

    @property
    def anchor_statuses(self) -> dict[str, AnchorStatus]:
        return dict(self._statuses)

    @property
    def answer_ranges(self) -> list[AnswerRange]:
        return list(self._ranges)

    def load_submission(
        self,
        answers: Sequence[str],
        feedback_items: Iterable[FeedbackItem] = (),
        teacher_comments: Iterable[TeacherComment] = (),
    ) -> dict[str, AnchorStatus]:
        """Replace the reviewed submission and its annotation set.

        Args:
            answers: Answer texts in question order.
            feedback_items: AI feedback items with global offsets.
            teacher_comments: Teacher comments with global offsets.

        Returns:
            Anchor status per annotation id.
        """
        self._answers = [answer or "" for answer in answers]
        self._text = self._config.answer_separator.join(self._answers)
        self._annotations = [*feedback_items, *teacher_comments]
        self._statuses = validate_anchors(self._annotations, self._text, config=self._config)
        self._ranges = compute_answer_ranges(self._answers, self._config.answer_separator)
        self._by_answer = localize_annotations(self._annotations, self._statuses, self._ranges)
        self._render_cache.clear()
        self._highlight.reset()

        anchored = sum(1 for status in self._statuses.values() if status.is_anchored)
        logger.info(
            "Loaded submission: %d answers, %d annotations (%d anchored)",
            len(self._answers),
            len(self._annotations),
            anchored,
        )
        return dict(self._statuses)

    def anchor_status(self, annotation_id: str) -> AnchorStatus:
        """Anchor status of an annotation; unknown ids are not anchored."""
        return self._statuses.get(annotation_id, AnchorStatus.NO_ANCHOR)

    def annotations_for_answer(self, answer_index: int) -> list[AnnotatedRange]:
        """Answer-local ranges for one answer (including non-renderable ones)."""
        return list(self._by_answer.get(answer_index, []))

    def render_answer(self, answer_index: int) -> tuple[Paragraph, ...]:
        """Paragraphs of segments for one answer, memoized per submission.

        The result is immutable and shared between calls.

        Raises:
            ReviewSessionError: If answer_index is out of range.
        """
        if not 0 <= answer_index < len(self._answers):
            raise ReviewSessionError(
                f"Answer index {answer_index} out of range for {len(self._answers)} answers"
            )

        cached = self._render_cache.get(answer_index)
        if cached is not None:
            return cached

        text = self._answers[answer_index]
        segments = build_segments(text, self._by_answer.get(answer_index, []))
        paragraphs = tuple(split_into_paragraphs(text, segments))
        self._render_cache[answer_index] = paragraphs
        return paragraphs

    def render(self) -> list[RenderedAnswer]:
        """Render every answer."""
        return [
            RenderedAnswer(index=i, text=text, paragraphs=self.render_answer(i))
            for i, text in enumerate(self._answers)
        ]

    def is_active(self, segment: TextSegment) -> bool:
        """True when the segment belongs to the highlighted annotation."""
        return segment.annotation_id is not None and (
            segment.annotation_id == self._highlight.current
        )

    def highlighted_severity(self) -> Severity | None:
        """Severity of the highlighted annotation, for connection-line styling."""
        current = self._highlight.current
        if current is None:
            return None
        for annotation in self._annotations:
            if annotation.id == current:
                return annotation.severity
        return None

    def unanchored_ids(self) -> list[str]:
        """Ids to list without a text link (general comments and lost anchors)."""
        return [
            annotation_id
            for annotation_id, status in self._statuses.items()
            if not status.is_anchored
        ]

    def interaction_for(self, annotation_id: str) -> HighlightInteraction:
        """Build the event handler for a card or span of this annotation."""
        return HighlightInteraction(
            annotation_id,
            self.anchor_status(annotation_id),
            self._highlight.writer,
            scheduler=self._scheduler,
            config=self._config,
        )

    def anchor_selection(
        self,
        answer_index: int,
        local_start: int,
        local_end: int,
    ) -> CommentAnchor | None:
        """Global anchor for a new comment from an answer-local selection."""
        return anchor_from_selection(
            self._answers,
            answer_index,
            local_start,
            local_end,
            separator=self._config.answer_separator,
        )

    def close(self) -> None:
        """Tear down the highlight store, cancelling any pending timer."""
        self._highlight.close()
        self._render_cache.clear()
        logger.info("Review session closed")

    def __enter__(self) -> ReviewSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
