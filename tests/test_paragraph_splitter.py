"""Tests for the paragraph splitter.

Tests cover:
- One paragraph per line with absolute offsets
- Segments spanning newlines are sliced per line
- Empty lines, trailing newlines and empty text
- Unsorted input
"""

from __future__ import annotations

from feedback_anchoring.models.annotation import AnchorStatus, AnnotatedRange, Severity
from feedback_anchoring.models.segment import Paragraph, TextSegment
from feedback_anchoring.services.segmentation import (
    build_segments,
    line_ranges,
    split_into_paragraphs,
)


def _pieces(paragraph: Paragraph) -> list[tuple[str, str | None, int]]:
    return [(seg.text, seg.annotation_id, seg.char_offset) for seg in paragraph.segments]


class TestLineRanges:
    """Absolute line ranges."""

    def test_two_lines(self) -> None:
        """Newline is excluded from both ranges."""
        assert line_ranges("Hello\nworld") == [(0, 5), (6, 11)]

    def test_blank_line(self) -> None:
        """Blank line has an empty range."""
        assert line_ranges("a\n\nb") == [(0, 1), (2, 2), (3, 4)]

    def test_empty_text(self) -> None:
        """Empty text is one empty line."""
        assert line_ranges("") == [(0, 0)]


class TestSplitIntoParagraphs:
    """Paragraph grouping."""

    def test_plain_two_lines(self) -> None:
        """A plain segment is cut at the newline."""
        text = "Hello\nworld"
        paragraphs = split_into_paragraphs(text, build_segments(text, []))

        assert len(paragraphs) == 2
        assert _pieces(paragraphs[0]) == [("Hello", None, 0)]
        assert _pieces(paragraphs[1]) == [("world", None, 6)]
        assert (paragraphs[1].start_offset, paragraphs[1].end_offset) == (6, 11)
        assert [p.index for p in paragraphs] == [0, 1]

    def test_annotation_spanning_newline(self) -> None:
        """Each side of the newline keeps the annotation."""
        text = "Hello\nworld"
        segments = build_segments(
            text, [AnnotatedRange("a", 3, 8, Severity.ERROR, AnchorStatus.VALID)]
        )
        paragraphs = split_into_paragraphs(text, segments)

        assert _pieces(paragraphs[0]) == [("Hel", None, 0), ("lo", "a", 3)]
        assert _pieces(paragraphs[1]) == [("wo", "a", 6), ("rld", None, 8)]
        assert paragraphs[1].segments[0].severity == Severity.ERROR

    def test_empty_middle_paragraph(self) -> None:
        """A blank line yields an empty paragraph at its position."""
        text = "a\n\nb"
        paragraphs = split_into_paragraphs(text, build_segments(text, []))

        assert len(paragraphs) == 3
        assert paragraphs[1].is_empty
        assert (paragraphs[1].start_offset, paragraphs[1].end_offset) == (2, 2)
        assert paragraphs[2].text == "b"

    def test_trailing_newline(self) -> None:
        """A trailing newline adds an empty last paragraph."""
        text = "line\n"
        paragraphs = split_into_paragraphs(text, build_segments(text, []))
        assert [p.text for p in paragraphs] == ["line", ""]
        assert paragraphs[1].is_empty

    def test_empty_text(self) -> None:
        """Empty text is a single empty paragraph."""
        paragraphs = split_into_paragraphs("", build_segments("", []))
        assert len(paragraphs) == 1
        assert paragraphs[0].is_empty

    def test_newline_only_segment_dropped(self) -> None:
        """A segment that is just a newline contributes nothing."""
        text = "ab\ncd"
        segments = build_segments(
            text, [AnnotatedRange("nl", 2, 3, None, AnchorStatus.VALID)]
        )
        paragraphs = split_into_paragraphs(text, segments)

        assert _pieces(paragraphs[0]) == [("ab", None, 0)]
        assert _pieces(paragraphs[1]) == [("cd", None, 3)]

    def test_unsorted_input(self) -> None:
        """Segments are ordered by offset before slicing."""
        text = "ab\ncd"
        segments = [
            TextSegment("cd", "b", None, 3),
            TextSegment("ab\n", "a", None, 0),
        ]
        paragraphs = split_into_paragraphs(text, segments)

        assert _pieces(paragraphs[0]) == [("ab", "a", 0)]
        assert _pieces(paragraphs[1]) == [("cd", "b", 3)]

    def test_lines_rejoin_to_text(self) -> None:
        """Joining paragraph texts with newlines restores the text."""
        text = "The student\nwrote this\n\nessay."
        segments = build_segments(
            text,
            [
                AnnotatedRange("a", 4, 16, Severity.WARNING, AnchorStatus.VALID),
                AnnotatedRange("b", 14, 30, Severity.ERROR, AnchorStatus.DRIFTED),
            ],
        )
        paragraphs = split_into_paragraphs(text, segments)

        assert "\n".join(p.text for p in paragraphs) == text
        for paragraph in paragraphs:
            for seg in paragraph.segments:
                assert text[seg.char_offset : seg.end_offset] == seg.text
                assert "\n" not in seg.text
