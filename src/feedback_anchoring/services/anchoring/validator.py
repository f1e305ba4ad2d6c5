"""Anchor validator - classifies stored offsets against the current text.

Classification (similarity of text at offsets vs. stored snippet):
- offsets missing          -> no-anchor
- no snippet stored        -> valid (offsets trusted)
- similarity >= 0.8        -> valid
- 0.5 <= similarity < 0.8  -> drifted
- similarity < 0.5         -> orphaned

Pure and total: never raises on malformed offsets. Must be re-run whenever
the current text changes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from feedback_anchoring.config import AnchoringConfig
from feedback_anchoring.models.annotation import AnchorStatus, Annotation
from feedback_anchoring.services.anchoring.similarity import similarity

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = AnchoringConfig()


@dataclass(frozen=True)
class AnchorValidation:
    """Result of validating one anchor.

    Attributes:
        anchor_status: Derived anchor status.
        text_at_offset: Current text at the stored offsets, None when not anchored.
        similarity: Similarity to the stored snippet, None when not compared.
    """

    anchor_status: AnchorStatus
    text_at_offset: str | None
    similarity: float | None = None


def _slice_text(text: str, start: int, end: int) -> str:
    """Slice with Python semantics; out-of-range bounds yield what remains."""
    try:
        return text[start:end]
    except TypeError:
        # Non-integer offsets from loosely typed callers.
        return ""


def classify_similarity(
    score: float,
    config: AnchoringConfig = _DEFAULT_CONFIG,
) -> AnchorStatus:
    """Map a similarity score to an anchor status using configured thresholds."""
    if score >= config.valid_threshold:
        return AnchorStatus.VALID
    if score >= config.drift_threshold:
        return AnchorStatus.DRIFTED
    return AnchorStatus.ORPHANED


def validate_anchor(
    start_offset: int | None,
    end_offset: int | None,
    original_snippet: str | None,
    current_text: str | None,
    *,
    config: AnchoringConfig = _DEFAULT_CONFIG,
) -> AnchorValidation:
    """Classify a stored anchor against the current text.

    Args:
        start_offset: Stored start offset, or None.
        end_offset: Stored end offset, or None.
        original_snippet: Text captured at creation time, or None to trust offsets.
        current_text: Current submission text.
        config: Threshold configuration.

    Returns:
        AnchorValidation with status and the text currently at the offsets.
    """
    if start_offset is None or end_offset is None:
        return AnchorValidation(anchor_status=AnchorStatus.NO_ANCHOR, text_at_offset=None)

    text_at_offset = _slice_text(current_text or "", start_offset, end_offset)

    if original_snippet is None:
        return AnchorValidation(anchor_status=AnchorStatus.VALID, text_at_offset=text_at_offset)

    score = similarity(text_at_offset, original_snippet)
    status = classify_similarity(score, config)
    logger.debug(
        "Anchor [%s, %s) classified %s (similarity=%.3f)",
        start_offset,
        end_offset,
        status.value,
        score,
    )
    return AnchorValidation(
        anchor_status=status,
        text_at_offset=text_at_offset,
        similarity=score,
    )


def validate_anchors(
    annotations: Iterable[Annotation],
    current_text: str | None,
    *,
    config: AnchoringConfig = _DEFAULT_CONFIG,
) -> dict[str, AnchorStatus]:
    """Validate every annotation against the same text.

    Args:
        annotations: Feedback items and/or teacher comments.
        current_text: Current submission text the offsets refer to.
        config: Threshold configuration.

    Returns:
        Mapping of annotation id to anchor status, in input order.
    """
    statuses: dict[str, AnchorStatus] = {}
    for annotation in annotations:
        result = validate_anchor(
            annotation.start_offset,
            annotation.end_offset,
            annotation.original_context_snippet,
            current_text,
            config=config,
        )
        statuses[annotation.id] = result.anchor_status
    return statuses
