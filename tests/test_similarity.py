"""Tests for normalized edit-distance similarity.

Tests cover:
- Identity, empty-string rules and symmetry
- Case and boundary-whitespace insensitivity
- Internal whitespace counted as edits
- Levenshtein distance on known pairs
"""

from __future__ import annotations

import pytest

from feedback_anchoring.services.anchoring.similarity import levenshtein_distance, similarity


class TestLevenshteinDistance:
    """Tests for the single-row edit distance."""

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("kitten", "sitting", 3),
            ("flaw", "lawn", 2),
            ("", "abc", 3),
            ("abc", "", 3),
            ("same", "same", 0),
            ("a", "b", 1),
        ],
    )
    def test_known_distances(self, a: str, b: str, expected: int) -> None:
        """Distance matches hand-computed values."""
        assert levenshtein_distance(a, b) == expected

    def test_distance_is_symmetric(self) -> None:
        """Swapping arguments does not change the distance."""
        assert levenshtein_distance("student wrote", "studxnt xrotx") == 3
        assert levenshtein_distance("studxnt xrotx", "student wrote") == 3


class TestSimilarity:
    """Tests for similarity()."""

    def test_identical_strings(self) -> None:
        """Identical non-empty strings score 1."""
        assert similarity("hello world", "hello world") == 1.0
        assert similarity("a", "a") == 1.0

    def test_both_empty(self) -> None:
        """Two empty strings are identical."""
        assert similarity("", "") == 1.0

    def test_whitespace_only_counts_as_empty(self) -> None:
        """Strings that trim to empty behave like empty strings."""
        assert similarity("   ", "") == 1.0
        assert similarity("  ", "x") == 0.0

    def test_one_empty(self) -> None:
        """Exactly one empty string scores 0."""
        assert similarity("", "hello") == 0.0
        assert similarity("hello", "") == 0.0

    def test_none_treated_as_empty(self) -> None:
        """Missing values normalize to the empty string."""
        assert similarity(None, None) == 1.0
        assert similarity(None, "text") == 0.0

    def test_case_insensitive(self) -> None:
        """Case differences are not edits."""
        assert similarity("Hello", "hello") == 1.0

    def test_boundary_whitespace_ignored(self) -> None:
        """Surrounding whitespace is trimmed before comparison."""
        assert similarity(" Hello ", "hello") == 1.0
        assert similarity("  hello  ", "hello") == 1.0

    def test_internal_whitespace_counts(self) -> None:
        """A doubled internal space is one edit."""
        score = similarity("hello  world", "hello world")
        assert score < 1.0
        assert score == pytest.approx(11 / 12)

    def test_single_character_difference(self) -> None:
        """One substitution in three characters."""
        assert similarity("cat", "bat") == pytest.approx(0.667, abs=0.001)
        assert similarity("a", "b") == 0.0

    def test_partial_overlap(self) -> None:
        """Shared prefix keeps similarity above half."""
        score = similarity("hello world", "hello earth")
        assert 0.5 < score < 1.0

    def test_completely_different(self) -> None:
        """No shared characters in place scores below half."""
        assert similarity("abcdef", "zyxwvu") < 0.5

    def test_long_similar_strings(self) -> None:
        """A small edit in a long sentence stays above 0.9."""
        a = "The quick brown fox jumps over the lazy dog"
        b = "The quick brown fox jumped over the lazy dog"
        assert similarity(a, b) > 0.9

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            ("student wrote", "studxnt xrotx"),
            ("climate", "Climate change"),
            ("essay", ""),
            ("abc", "cba"),
        ],
    )
    def test_symmetric(self, a: str, b: str) -> None:
        """similarity(a, b) == similarity(b, a)."""
        assert similarity(a, b) == similarity(b, a)

    def test_threshold_boundary_is_exact(self) -> None:
        """One edit in five characters is exactly 0.8."""
        assert similarity("abcde", "abcdx") == 0.8

    def test_result_in_unit_interval(self) -> None:
        """Scores never leave [0, 1]."""
        for a, b in [("a", "bbbbbbbb"), ("xyz", "x"), ("q", "q")]:
            assert 0.0 <= similarity(a, b) <= 1.0
