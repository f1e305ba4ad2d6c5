"""Paragraph splitter - slices flat segments along newline boundaries.

Paragraph i covers the absolute range of line i of text.split("\\n"),
excluding the newline itself. Each segment overlapping that range
contributes a copy trimmed to the overlap, with char_offset set to the
overlap's absolute start. Empty lines produce paragraphs with no segments.

Kept separate from segmentation so the boundary sweep never depends on
paragraph count, and so line-break chopping is tested on its own.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence

from feedback_anchoring.models.segment import Paragraph, TextSegment


def line_ranges(text: str) -> list[tuple[int, int]]:
    """Absolute [start, end) range of every line, newline excluded."""
    ranges: list[tuple[int, int]] = []
    position = 0
    for line in text.split("\n"):
        ranges.append((position, position + len(line)))
        position += len(line) + 1
    return ranges


def split_into_paragraphs(text: str, segments: Sequence[TextSegment]) -> list[Paragraph]:
    """Group segments into per-line paragraphs.

    Args:
        text: The full text the segments were built from.
        segments: Segments from build_segments (absolute char offsets).

    Returns:
        One Paragraph per line, in order. Segment order within a paragraph
        follows the input order.
    """
    text = text or ""
    ordered = sorted(segments, key=lambda seg: seg.char_offset)
    paragraphs: list[Paragraph] = []
    first = 0

    for index, (line_start, line_end) in enumerate(line_ranges(text)):
        # Segments ending at or before this line can never overlap later lines.
        while first < len(ordered) and ordered[first].end_offset <= line_start:
            first += 1

        pieces: list[TextSegment] = []
        for seg in ordered[first:]:
            if seg.char_offset >= line_end:
                break
            overlap_start = max(seg.char_offset, line_start)
            overlap_end = min(seg.end_offset, line_end)
            if overlap_start < overlap_end:
                local_start = overlap_start - seg.char_offset
                local_end = overlap_end - seg.char_offset
                pieces.append(
                    dataclasses.replace(
                        seg,
                        text=seg.text[local_start:local_end],
                        char_offset=overlap_start,
                    )
                )

        paragraphs.append(
            Paragraph(
                index=index,
                segments=tuple(pieces),
                start_offset=line_start,
                end_offset=line_end,
            )
        )

    return paragraphs
