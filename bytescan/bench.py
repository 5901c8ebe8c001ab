"""Benchmark configuration, measurement loop and counting helpers."""

from __future__ import annotations

import re
import sys
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import BinaryIO, TextIO, TypeVar

T = TypeVar("T")

_UNSIGNED = re.compile(rb"\+?[0-9]+")
_U64_MAX = 2**64 - 1
_HEX = "0123456789abcdefABCDEF"


class BenchmarkError(Exception):
    """Raised for malformed benchmark input or unsuitable benchmark needles."""


def _parse_unsigned(raw: bytes, what: str) -> int:
    if not _UNSIGNED.fullmatch(raw):
        raise BenchmarkError(f"{what} {raw!r} is not a valid integer")
    value = int(raw)
    if value > _U64_MAX:
        raise BenchmarkError(f"{what} {raw!r} is too large")
    return value


def _to_str(value: bytes, key: str) -> str:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BenchmarkError(f"value for key '{key}' is not valid UTF-8") from exc


def unescape_bytes(text: str) -> bytes:
    r"""Turn an escaped string into bytes.

    Recognises \\, \0, \n, \r, \t and \xNN. Any other escape, and any
    incomplete one, is kept verbatim.
    """
    out = bytearray()
    chars = iter(text)
    for c in chars:
        if c != "\\":
            out += c.encode("utf-8")
            continue
        nxt = next(chars, None)
        if nxt is None:
            out += b"\\"
        elif nxt == "\\":
            out += b"\\"
        elif nxt == "0":
            out += b"\x00"
        elif nxt == "n":
            out += b"\n"
        elif nxt == "r":
            out += b"\r"
        elif nxt == "t":
            out += b"\t"
        elif nxt == "x":
            hi = next(chars, None)
            if hi is None:
                out += b"\\x"
            elif hi not in _HEX:
                out += b"\\x" + hi.encode("utf-8")
            else:
                lo = next(chars, None)
                if lo is None:
                    out += b"\\x" + hi.encode("utf-8")
                elif lo not in _HEX:
                    out += b"\\x" + (hi + lo).encode("utf-8")
                else:
                    out.append(int(hi + lo, 16))
        else:
            out += b"\\" + nxt.encode("utf-8")
    return bytes(out)


def read_klv(raw: bytes) -> Iterator[tuple[str, bytes]]:
    """Yield (key, value) pairs from a sequence of key:length:value items.

    Each item has the form ``key:len:value\\n``.
    """
    rest = bytes(raw)
    while rest:
        key_raw, sep, after = rest.partition(b":")
        if not sep:
            raise BenchmarkError(
                "failed to find first ':' in key-length-value item "
                f"where the next (at most) 80 bytes are: {rest[:80]!r}"
            )
        try:
            key = key_raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BenchmarkError(f"key {key_raw!r} is not valid UTF-8") from exc

        len_raw, sep, after = after.partition(b":")
        if not sep:
            raise BenchmarkError(
                f"failed to find second ':' in key-length-value item for key '{key}'"
            )
        try:
            len_raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BenchmarkError(
                f"length for key '{key}' is not valid UTF-8"
            ) from exc
        if not _UNSIGNED.fullmatch(len_raw):
            raise BenchmarkError(
                f"length '{len_raw.decode()}' for key '{key}' is not a valid integer"
            )
        length = int(len_raw)
        if len(after) < length:
            raise BenchmarkError(
                f"got length of {length} for key '{key}', "
                f"but only {len(after)} bytes remain"
            )
        value, rest = after[:length], after[length:]
        if not rest:
            raise BenchmarkError("expected trailing '\\n' after value, but got EOF")
        if rest[:1] != b"\n":
            raise BenchmarkError(f"expected '\\n' after value, but got {rest[:1]!r}")
        rest = rest[1:]
        yield key, value


@dataclass
class Benchmark:
    """A single benchmark configuration. Times are in nanoseconds."""

    name: str = ""
    model: str = ""
    needles: list[bytes] = field(default_factory=list)
    haystack: bytes = b""
    max_iters: int = 0
    max_warmup_iters: int = 0
    max_time_ns: int = 0
    max_warmup_time_ns: int = 0

    @classmethod
    def parse(cls, raw: bytes) -> Benchmark:
        """Build a configuration from raw key-length-value bytes."""
        config = cls()
        for key, value in read_klv(raw):
            config._set(key, value)
        return config

    @classmethod
    def from_stdin(cls, stream: BinaryIO | None = None) -> Benchmark:
        """Read the configuration from a binary stream, stdin by default."""
        source = sys.stdin.buffer if stream is None else stream
        return cls.parse(source.read())

    def _set(self, key: str, value: bytes) -> None:
        if key == "name":
            self.name = _to_str(value, key)
        elif key == "model":
            self.model = _to_str(value, key)
        elif key == "pattern":
            self.needles.append(unescape_bytes(_to_str(value, key)))
        elif key == "haystack":
            self.haystack = bytes(value)
        elif key == "max-iters":
            self.max_iters = _parse_unsigned(value, key)
        elif key == "max-warmup-iters":
            self.max_warmup_iters = _parse_unsigned(value, key)
        elif key == "max-time":
            self.max_time_ns = _parse_unsigned(value, key)
        elif key == "max-warmup-time":
            self.max_warmup_time_ns = _parse_unsigned(value, key)

    def one_needle(self) -> bytes:
        """Return the only needle, or raise if there is not exactly one."""
        if len(self.needles) != 1:
            raise BenchmarkError(
                f"benchmark only supports one needle, but {len(self.needles)} were found"
            )
        return self.needles[0]

    def one_needle_byte(self) -> int:
        """Return the only needle as a single byte."""
        needle = self.one_needle()
        if len(needle) != 1:
            raise BenchmarkError(
                f"needle must have length 1 (in bytes) but it has length {len(needle)}"
            )
        return needle[0]

    def _needle_bytes(self, n: int, word: str) -> tuple[int, ...]:
        if len(self.needles) != n:
            raise BenchmarkError(
                f"benchmark supports {word} needles, but {len(self.needles)} were found"
            )
        for ordinal, needle in zip(("first", "second", "third"), self.needles):
            if len(needle) != 1:
                raise BenchmarkError(
                    f"{ordinal} needle has length {len(needle)} but expected 1"
                )
        return tuple(needle[0] for needle in self.needles)

    def two_needle_bytes(self) -> tuple[int, int]:
        """Return exactly two single-byte needles."""
        n1, n2 = self._needle_bytes(2, "two")
        return n1, n2

    def three_needle_bytes(self) -> tuple[int, int, int]:
        """Return exactly three single-byte needles."""
        n1, n2, n3 = self._needle_bytes(3, "three")
        return n1, n2, n3


@dataclass(frozen=True)
class Sample:
    """One measured iteration: its duration in nanoseconds and its count."""

    duration_ns: int
    count: int


def run(b: Benchmark, bench: Callable[[], int]) -> list[Sample]:
    """Run bench repeatedly within the benchmark's limits and return samples."""
    return run_and_count(b, lambda result: result, bench)


def run_and_count(
    b: Benchmark, count: Callable[[T], int], bench: Callable[[], T]
) -> list[Sample]:
    """Like run, but derive each count from bench's result outside the timing."""
    warmup_start = time.perf_counter_ns()
    for _ in range(b.max_warmup_iters):
        count(bench())
        if time.perf_counter_ns() - warmup_start >= b.max_warmup_time_ns:
            break

    samples: list[Sample] = []
    run_start = time.perf_counter_ns()
    for _ in range(b.max_iters):
        bench_start = time.perf_counter_ns()
        result = bench()
        duration = time.perf_counter_ns() - bench_start
        samples.append(Sample(duration, int(count(result))))
        if time.perf_counter_ns() - run_start >= b.max_time_ns:
            break
    return samples


def count_memchr(
    haystack: bytes, needle: int, memchr: Callable[[bytes, int], int | None]
) -> int:
    """Count matches by calling a one-shot byte search repeatedly."""
    total = 0
    while (i := memchr(haystack, needle)) is not None:
        total += 1
        haystack = haystack[i + 1 :]
    return total


def count_memchr2(
    haystack: bytes,
    needle1: int,
    needle2: int,
    memchr2: Callable[[bytes, int, int], int | None],
) -> int:
    """Count matches by calling a one-shot two-byte search repeatedly."""
    total = 0
    while (i := memchr2(haystack, needle1, needle2)) is not None:
        total += 1
        haystack = haystack[i + 1 :]
    return total


def count_memchr3(
    haystack: bytes,
    needle1: int,
    needle2: int,
    needle3: int,
    memchr3: Callable[[bytes, int, int, int], int | None],
) -> int:
    """Count matches by calling a one-shot three-byte search repeatedly."""
    total = 0
    while (i := memchr3(haystack, needle1, needle2, needle3)) is not None:
        total += 1
        haystack = haystack[i + 1 :]
    return total


def count_memmem(
    haystack: bytes, needle: bytes, memmem: Callable[[bytes, bytes], int | None]
) -> int:
    """Count non-overlapping substring matches using a one-shot search."""
    total = 0
    while (i := memmem(haystack, needle)) is not None:
        total += 1
        nxt = i + len(needle)
        if nxt > len(haystack):
            break
        haystack = haystack[nxt:]
    return total


def count_memmem_str(
    haystack: str, needle: str, memmem: Callable[[str, str], int | None]
) -> int:
    """Count non-overlapping substring matches in text using a one-shot search."""
    total = 0
    while (i := memmem(haystack, needle)) is not None:
        total += 1
        nxt = i + len(needle)
        if nxt > len(haystack):
            break
        haystack = haystack[nxt:]
    return total


def write_samples(samples: list[Sample], out: TextIO | None = None) -> None:
    """Write one ``duration,count`` line per sample."""
    stream = sys.stdout if out is None else out
    for sample in samples:
        stream.write(f"{sample.duration_ns},{sample.count}\n")