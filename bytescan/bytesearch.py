"""Top-level routines for searching one, two or three bytes in a haystack."""

from __future__ import annotations

from bytescan.multi import Three, Two
from bytescan.single import Haystack, MatchIter, One


def memchr(needle: int, haystack: Haystack) -> int | None:
    """Return the offset of the first occurrence of needle, or None."""
    return One(needle).find(haystack)


def memrchr(needle: int, haystack: Haystack) -> int | None:
    """Return the offset of the last occurrence of needle, or None."""
    return One(needle).rfind(haystack)


def memchr2(needle1: int, needle2: int, haystack: Haystack) -> int | None:
    """Return the offset of the first occurrence of either needle, or None."""
    return Two(needle1, needle2).find(haystack)


def memrchr2(needle1: int, needle2: int, haystack: Haystack) -> int | None:
    """Return the offset of the last occurrence of either needle, or None."""
    return Two(needle1, needle2).rfind(haystack)


def memchr3(
    needle1: int, needle2: int, needle3: int, haystack: Haystack
) -> int | None:
    """Return the offset of the first occurrence of any needle, or None."""
    return Three(needle1, needle2, needle3).find(haystack)


def memrchr3(
    needle1: int, needle2: int, needle3: int, haystack: Haystack
) -> int | None:
    """Return the offset of the last occurrence of any needle, or None."""
    return Three(needle1, needle2, needle3).rfind(haystack)


def count(needle: int, haystack: Haystack) -> int:
    """Count all occurrences of needle in the haystack."""
    return One(needle).count(haystack)


def memchr_iter(needle: int, haystack: Haystack) -> MatchIter:
    """Return a double-ended iterator over all offsets of needle."""
    return One(needle).iter(haystack)


def memchr2_iter(needle1: int, needle2: int, haystack: Haystack) -> MatchIter:
    """Return a double-ended iterator over all offsets of either needle."""
    return Two(needle1, needle2).iter(haystack)


def memchr3_iter(
    needle1: int, needle2: int, needle3: int, haystack: Haystack
) -> MatchIter:
    """Return a double-ended iterator over all offsets of any needle."""
    return Three(needle1, needle2, needle3).iter(haystack)