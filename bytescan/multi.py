"""Find and iterate over occurrences of any of two or three bytes in a haystack."""

from __future__ import annotations

from dataclasses import dataclass

from bytescan.single import Haystack, MatchIter, _as_bytes, _check_byte, _check_range


def _first_of(
    data: bytes | bytearray, needles: tuple[int, ...], start: int, end: int
) -> int | None:
    _check_range(data, start, end)
    if start >= end:
        return None
    best: int | None = None
    for needle in needles:
        limit = end if best is None else best
        index = data.find(needle, start, limit)
        if index >= 0:
            best = index
    return best


def _last_of(
    data: bytes | bytearray, needles: tuple[int, ...], start: int, end: int
) -> int | None:
    _check_range(data, start, end)
    if start >= end:
        return None
    best: int | None = None
    for needle in needles:
        lower = start if best is None else best + 1
        index = data.rfind(needle, lower, end)
        if index >= 0:
            best = index
    return best


@dataclass(frozen=True)
class Two:
    """Finds all occurrences of either of two bytes in a haystack.

    Searching for ``a`` or ``b`` in ``afoobar`` reports offsets 0, 4 and 5.
    """

    needle1: int
    needle2: int

    def __post_init__(self) -> None:
        _check_byte(self.needle1, "needle1")
        _check_byte(self.needle2, "needle2")

    @property
    def _needles(self) -> tuple[int, ...]:
        return (self.needle1, self.needle2)

    def matches(self, byte: int) -> bool:
        """Return True when the given byte is one of the needles."""
        return byte == self.needle1 or byte == self.needle2

    def find(self, haystack: Haystack) -> int | None:
        """Return the offset of the first occurrence of either needle, or None."""
        data = _as_bytes(haystack)
        return self.find_raw(data, 0, len(data))

    def rfind(self, haystack: Haystack) -> int | None:
        """Return the offset of the last occurrence of either needle, or None."""
        data = _as_bytes(haystack)
        return self.rfind_raw(data, 0, len(data))

    def find_raw(self, haystack: Haystack, start: int, end: int) -> int | None:
        """Like find, but only within haystack[start:end].

        The offset returned is relative to the whole haystack. When
        start >= end, None is returned.
        """
        return _first_of(_as_bytes(haystack), self._needles, start, end)

    def rfind_raw(self, haystack: Haystack, start: int, end: int) -> int | None:
        """Like rfind, but only within haystack[start:end]."""
        return _last_of(_as_bytes(haystack), self._needles, start, end)

    def iter(self, haystack: Haystack) -> MatchIter:
        """Return a double-ended iterator over all match offsets."""
        return MatchIter(self, haystack)


@dataclass(frozen=True)
class Three:
    """Finds all occurrences of any of three bytes in a haystack.

    Searching for ``a``, ``b`` or ``o`` in ``afoobar`` reports offsets
    0, 2, 3, 4 and 5.
    """

    needle1: int
    needle2: int
    needle3: int

    def __post_init__(self) -> None:
        _check_byte(self.needle1, "needle1")
        _check_byte(self.needle2, "needle2")
        _check_byte(self.needle3, "needle3")

    @property
    def _needles(self) -> tuple[int, ...]:
        return (self.needle1, self.needle2, self.needle3)

    def matches(self, byte: int) -> bool:
        """Return True when the given byte is one of the needles."""
        return byte == self.needle1 or byte == self.needle2 or byte == self.needle3

    def find(self, haystack: Haystack) -> int | None:
        """Return the offset of the first occurrence of any needle, or None."""
        data = _as_bytes(haystack)
        return self.find_raw(data, 0, len(data))

    def rfind(self, haystack: Haystack) -> int | None:
        """Return the offset of the last occurrence of any needle, or None."""
        data = _as_bytes(haystack)
        return self.rfind_raw(data, 0, len(data))

    def find_raw(self, haystack: Haystack, start: int, end: int) -> int | None:
        """Like find, but only within haystack[start:end]."""
        return _first_of(_as_bytes(haystack), self._needles, start, end)

    def rfind_raw(self, haystack: Haystack, start: int, end: int) -> int | None:
        """Like rfind, but only within haystack[start:end]."""
        return _last_of(_as_bytes(haystack), self._needles, start, end)

    def iter(self, haystack: Haystack) -> MatchIter:
        """Return a double-ended iterator over all match offsets."""
        return MatchIter(self, haystack)