"""Find, count and iterate over occurrences of a single byte in a haystack."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol, Union

Haystack = Union[bytes, bytearray, memoryview]


def _check_byte(value: int, name: str = "needle") -> int:
    if not isinstance(value, int):
        raise TypeError(f"{name} must be an int, not {type(value).__name__}")
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be in range 0..=255, got {value}")
    return value


def _as_bytes(haystack: Haystack) -> bytes | bytearray:
    if isinstance(haystack, (bytes, bytearray)):
        return haystack
    return bytes(haystack)


def _check_range(haystack: bytes | bytearray, start: int, end: int) -> None:
    size = len(haystack)
    if not 0 <= start <= size:
        raise ValueError(f"start {start} is out of bounds for haystack of length {size}")
    if not 0 <= end <= size:
        raise ValueError(f"end {end} is out of bounds for haystack of length {size}")


class RawSearcher(Protocol):
    """A searcher that can look for matches within a window of a haystack."""

    def find_raw(self, haystack: Haystack, start: int, end: int) -> int | None: ...

    def rfind_raw(self, haystack: Haystack, start: int, end: int) -> int | None: ...


@dataclass(frozen=True)
class One:
    """Finds all occurrences of a single byte in a haystack."""

    needle: int

    def __post_init__(self) -> None:
        _check_byte(self.needle)

    def matches(self, byte: int) -> bool:
        """Return True when the given byte is the needle."""
        return byte == self.needle

    def find(self, haystack: Haystack) -> int | None:
        """Return the offset of the first occurrence of the needle, or None."""
        data = _as_bytes(haystack)
        return self.find_raw(data, 0, len(data))

    def rfind(self, haystack: Haystack) -> int | None:
        """Return the offset of the last occurrence of the needle, or None."""
        data = _as_bytes(haystack)
        return self.rfind_raw(data, 0, len(data))

    def count(self, haystack: Haystack) -> int:
        """Count all occurrences of the needle in the haystack."""
        data = _as_bytes(haystack)
        return self.count_raw(data, 0, len(data))

    def find_raw(self, haystack: Haystack, start: int, end: int) -> int | None:
        """Like find, but only within haystack[start:end].

        The offset returned is relative to the whole haystack. When
        start >= end, None is returned.
        """
        data = _as_bytes(haystack)
        _check_range(data, start, end)
        if start >= end:
            return None
        index = data.find(self.needle, start, end)
        return None if index < 0 else index

    def rfind_raw(self, haystack: Haystack, start: int, end: int) -> int | None:
        """Like rfind, but only within haystack[start:end]."""
        data = _as_bytes(haystack)
        _check_range(data, start, end)
        if start >= end:
            return None
        index = data.rfind(self.needle, start, end)
        return None if index < 0 else index

    def count_raw(self, haystack: Haystack, start: int, end: int) -> int:
        """Like count, but only within haystack[start:end]."""
        data = _as_bytes(haystack)
        _check_range(data, start, end)
        if start >= end:
            return 0
        return data.count(self.needle, start, end)

    def iter(self, haystack: Haystack) -> MatchIter:
        """Return a double-ended iterator over all match offsets."""
        return MatchIter(self, haystack)


class MatchIter:
    """A double-ended iterator over match offsets reported by a searcher.

    Items taken from the front and the back never overlap; once the two
    ends meet, the iterator stays exhausted.
    """

    __slots__ = ("_searcher", "_haystack", "_start", "_end")

    def __init__(self, searcher: RawSearcher, haystack: Haystack) -> None:
        self._searcher = searcher
        self._haystack = _as_bytes(haystack)
        self._start = 0
        self._end = len(self._haystack)

    def __iter__(self) -> MatchIter:
        return self

    def __next__(self) -> int:
        index = self._searcher.find_raw(self._haystack, self._start, self._end)
        if index is None:
            self._start = self._end
            raise StopIteration
        self._start = index + 1
        return index

    def next_back(self) -> int | None:
        """Return the next match from the back, or None when exhausted."""
        index = self._searcher.rfind_raw(self._haystack, self._start, self._end)
        if index is None:
            self._end = self._start
            return None
        self._end = index
        return index

    def __reversed__(self) -> Iterator[int]:
        while (index := self.next_back()) is not None:
            yield index

    def size_hint(self) -> tuple[int, int]:
        """Return lower and upper bounds on the number of remaining matches."""
        return 0, self._end - self._start

    def count(self) -> int:
        """Consume the iterator and return the number of remaining matches."""
        counter = getattr(self._searcher, "count_raw", None)
        if counter is None:
            return sum(1 for _ in self)
        total = counter(self._haystack, self._start, self._end)
        self._start = self._end
        return total