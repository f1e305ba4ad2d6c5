"""Text selection to comment anchor conversion.

A selection is made inside one rendered answer, in answer-local offsets.
Stored comments use global offsets into the concatenated submission text,
plus the selected text as the snippet for later anchor validation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from feedback_anchoring.config import DEFAULT_ANSWER_SEPARATOR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommentAnchor:
    """Anchor data to persist with a new teacher comment.

    Attributes:
        start_offset: Global start offset into the concatenated text.
        end_offset: Global end offset (exclusive).
        original_context_snippet: Selected text, surrounding whitespace trimmed.
        answer_index: Answer the selection was made in.
    """

    start_offset: int
    end_offset: int
    original_context_snippet: str
    answer_index: int


def answer_start_offsets(
    answers: Sequence[str],
    separator: str = DEFAULT_ANSWER_SEPARATOR,
) -> list[int]:
    """Global start offset of each answer in the concatenated text."""
    starts: list[int] = []
    offset = 0
    for answer in answers:
        starts.append(offset)
        offset += len(answer) + len(separator)
    return starts


def anchor_from_selection(
    answers: Sequence[str],
    answer_index: int,
    local_start: int,
    local_end: int,
    *,
    separator: str = DEFAULT_ANSWER_SEPARATOR,
) -> CommentAnchor | None:
    """Convert an answer-local selection into a global comment anchor.

    Returns None (no anchor) when the answer index is unknown, the range is
    empty or inverted, the range leaves the answer, or only whitespace is
    selected.
    """
    if not 0 <= answer_index < len(answers):
        logger.debug("Rejected selection in unknown answer %d", answer_index)
        return None

    answer = answers[answer_index]
    if not 0 <= local_start < local_end <= len(answer):
        logger.debug(
            "Rejected selection [%d, %d) in answer %d of length %d",
            local_start,
            local_end,
            answer_index,
            len(answer),
        )
        return None

    snippet = answer[local_start:local_end].strip()
    if not snippet:
        return None

    base = answer_start_offsets(answers, separator)[answer_index]
    return CommentAnchor(
        start_offset=base + local_start,
        end_offset=base + local_end,
        original_context_snippet=snippet,
        answer_index=answer_index,
    )
