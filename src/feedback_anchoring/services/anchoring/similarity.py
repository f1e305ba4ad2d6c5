"""Normalized edit-distance similarity between two strings.

Both inputs are trimmed and lowercased before comparison, so boundary
whitespace and case never count as edits. Internal whitespace does.
"""

from __future__ import annotations


def _normalize(text: str | None) -> str:
    """Trim surrounding whitespace and lowercase."""
    if not text:
        return ""
    return text.strip().lower()


def levenshtein_distance(a: str, b: str) -> int:
    """Compute Levenshtein edit distance with a single DP row.

    Insertion, deletion and substitution each cost 1. Space is
    O(min(len(a), len(b))) since the shorter string indexes the row.

    Args:
        a: First string.
        b: Second string.

    Returns:
        Minimum number of single-character edits turning a into b.
    """
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    row = list(range(len(b) + 1))
    for i, ch_a in enumerate(a, start=1):
        diagonal = row[0]
        row[0] = i
        for j, ch_b in enumerate(b, start=1):
            above = row[j]
            cost = 0 if ch_a == ch_b else 1
            row[j] = min(above + 1, row[j - 1] + 1, diagonal + cost)
            diagonal = above
    return row[-1]


def similarity(a: str | None, b: str | None) -> float:
    """Return similarity in [0, 1] as 1 - distance / longer length.

    Two empty strings (after normalization) are identical (1.0); exactly one
    empty string scores 0.0.

    Args:
        a: First string.
        b: Second string.

    Returns:
        Similarity score, symmetric in its arguments.
    """
    norm_a = _normalize(a)
    norm_b = _normalize(b)

    if not norm_a and not norm_b:
        return 1.0
    if not norm_a or not norm_b:
        return 0.0

    distance = levenshtein_distance(norm_a, norm_b)
    longest = max(len(norm_a), len(norm_b))
    # (longest - d) / longest rounds once, keeping threshold boundaries exact.
    return (longest - distance) / longest
