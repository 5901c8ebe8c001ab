"""Fuzz entry points that drive the searchers with arbitrary input.

Each target splits its input into needles and a haystack, runs a search
to completion and returns the number of matches, or None when the input
is too short to hold the needles.
"""

from __future__ import annotations

from bytescan.bytesearch import memchr2_iter, memchr3_iter, memchr_iter
from bytescan.engines import Finder


def _split_substring(data: bytes) -> tuple[bytes, bytes]:
    split = max(data[0], 1) % len(data)
    return data[:split], data[split:]


def fuzz_memchr(data: bytes) -> int | None:
    """Count forward matches of data[0] in data[1:]."""
    if not data:
        return None
    return sum(1 for _ in memchr_iter(data[0], data[1:]))


def fuzz_memchr2(data: bytes) -> int | None:
    """Count forward matches of data[0] or data[1] in data[2:]."""
    if len(data) < 2:
        return None
    return sum(1 for _ in memchr2_iter(data[0], data[1], data[2:]))


def fuzz_memchr3(data: bytes) -> int | None:
    """Count forward matches of any of data[0:3] in data[3:]."""
    if len(data) < 3:
        return None
    return sum(1 for _ in memchr3_iter(data[0], data[1], data[2], data[3:]))


def fuzz_memrchr(data: bytes) -> int | None:
    """Count reverse matches of data[0] in data[1:]."""
    if not data:
        return None
    return sum(1 for _ in reversed(memchr_iter(data[0], data[1:])))


def fuzz_memrchr2(data: bytes) -> int | None:
    """Count reverse matches of data[0] or data[1] in data[2:]."""
    if len(data) < 2:
        return None
    return sum(1 for _ in reversed(memchr2_iter(data[0], data[1], data[2:])))


def fuzz_memrchr3(data: bytes) -> int | None:
    """Count reverse matches of any of data[0:3] in data[3:]."""
    if len(data) < 3:
        return None
    return sum(
        1 for _ in reversed(memchr3_iter(data[0], data[1], data[2], data[3:]))
    )


def fuzz_memmem(data: bytes) -> int | None:
    """Count forward substring matches, splitting data at an offset set by data[0]."""
    if len(data) < 2:
        return None
    needle, haystack = _split_substring(data)
    return sum(1 for _ in Finder(needle).find_iter(haystack))


def fuzz_memrmem(data: bytes) -> int | None:
    """Count reverse substring matches, splitting data like fuzz_memmem."""
    if len(data) < 2:
        return None
    needle, haystack = _split_substring(data)
    return sum(1 for _ in Finder(needle).rfind_iter(haystack))