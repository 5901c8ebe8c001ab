"""Substring finders and the benchmark engines built on this package's searchers."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version

from bytescan import bench
from bytescan.bench import Benchmark, BenchmarkError, Sample
from bytescan.bytesearch import (
    memchr,
    memchr2_iter,
    memchr3_iter,
    memchr_iter,
)
from bytescan.multi import Three, Two
from bytescan.single import Haystack, One, _as_bytes

EngineFn = Callable[[Benchmark], list[Sample]]

_USAGE = "Usage: runner [--quiet] (<engine-name> | --version)"


@dataclass(frozen=True)
class Finder:
    """A reusable searcher for a single substring needle."""

    needle: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "needle", bytes(self.needle))

    def find(self, haystack: Haystack) -> int | None:
        """Return the offset of the first occurrence of the needle, or None."""
        index = _as_bytes(haystack).find(self.needle)
        return None if index < 0 else index

    def rfind(self, haystack: Haystack) -> int | None:
        """Return the offset of the last occurrence of the needle, or None."""
        index = _as_bytes(haystack).rfind(self.needle)
        return None if index < 0 else index

    def find_iter(self, haystack: Haystack) -> Iterator[int]:
        """Yield the offsets of non-overlapping matches from left to right.

        An empty needle matches at every position, including the end.
        """
        data = _as_bytes(haystack)
        step = max(1, len(self.needle))
        pos = 0
        while pos <= len(data):
            index = data.find(self.needle, pos)
            if index < 0:
                return
            yield index
            pos = index + step

    def rfind_iter(self, haystack: Haystack) -> Iterator[int]:
        """Yield the offsets of non-overlapping matches from right to left."""
        data = _as_bytes(haystack)
        end = len(data)
        while True:
            index = data.rfind(self.needle, 0, end)
            if index < 0:
                return
            yield index
            if index == end:
                if end == 0:
                    return
                end -= 1
            else:
                end = index


def memmem_find(haystack: Haystack, needle: bytes) -> int | None:
    """Return the offset of the first occurrence of needle, or None."""
    return Finder(needle).find(haystack)


def memmem_rfind(haystack: Haystack, needle: bytes) -> int | None:
    """Return the offset of the last occurrence of needle, or None."""
    return Finder(needle).rfind(haystack)


def _count_slow(items: Iterable[int]) -> int:
    """Count by visiting every element, without any counting shortcut."""
    return sum(1 for _ in items)


def memchr_oneshot_count(b: Benchmark) -> list[Sample]:
    """Count a byte by repeated one-shot searches."""
    haystack = b.haystack
    needle = b.one_needle_byte()
    return bench.run(
        b, lambda: bench.count_memchr(haystack, needle, lambda h, n1: memchr(n1, h))
    )


def memchr_prebuilt_count(b: Benchmark) -> list[Sample]:
    """Count a byte by walking every match of an iterator."""
    haystack = b.haystack
    needle = b.one_needle_byte()
    return bench.run(b, lambda: _count_slow(memchr_iter(needle, haystack)))


def memchr_only_count(b: Benchmark) -> list[Sample]:
    """Count a byte using the iterator's dedicated counting routine."""
    haystack = b.haystack
    needle = b.one_needle_byte()
    return bench.run(b, lambda: memchr_iter(needle, haystack).count())


def memchr_fallback_count(b: Benchmark) -> list[Sample]:
    """Count a byte with a searcher built once, visiting each match."""
    haystack = b.haystack
    finder = One(b.one_needle_byte())
    return bench.run(b, lambda: _count_slow(finder.iter(haystack)))


def memchr_naive_count(b: Benchmark) -> list[Sample]:
    """Count a byte with a plain element-by-element scan."""
    haystack = b.haystack
    needle = b.one_needle_byte()

    def position(h: bytes, n1: int) -> int | None:
        return next((i for i, byte in enumerate(h) if byte == n1), None)

    return bench.run(b, lambda: bench.count_memchr(haystack, needle, position))


def memchr2_count(b: Benchmark) -> list[Sample]:
    """Count occurrences of either of two bytes."""
    haystack = b.haystack
    n1, n2 = b.two_needle_bytes()
    return bench.run(b, lambda: _count_slow(memchr2_iter(n1, n2, haystack)))


def memchr2_fallback_count(b: Benchmark) -> list[Sample]:
    """Count occurrences of either of two bytes with a prebuilt searcher."""
    haystack = b.haystack
    finder = Two(*b.two_needle_bytes())
    return bench.run(b, lambda: _count_slow(finder.iter(haystack)))


def memchr2_naive_count(b: Benchmark) -> list[Sample]:
    """Count occurrences of either of two bytes with a plain scan."""
    haystack = b.haystack
    n1, n2 = b.two_needle_bytes()

    def position(h: bytes, a: int, c: int) -> int | None:
        return next((i for i, byte in enumerate(h) if byte == a or byte == c), None)

    return bench.run(b, lambda: bench.count_memchr2(haystack, n1, n2, position))


def memchr3_count(b: Benchmark) -> list[Sample]:
    """Count occurrences of any of three bytes."""
    haystack = b.haystack
    n1, n2, n3 = b.three_needle_bytes()
    return bench.run(b, lambda: _count_slow(memchr3_iter(n1, n2, n3, haystack)))


def memchr3_fallback_count(b: Benchmark) -> list[Sample]:
    """Count occurrences of any of three bytes with a prebuilt searcher."""
    haystack = b.haystack
    finder = Three(*b.three_needle_bytes())
    return bench.run(b, lambda: _count_slow(finder.iter(haystack)))


def memchr3_naive_count(b: Benchmark) -> list[Sample]:
    """Count occurrences of any of three bytes with a plain scan."""
    haystack = b.haystack
    n1, n2, n3 = b.three_needle_bytes()

    def position(h: bytes, a: int, c: int, d: int) -> int | None:
        return next(
            (i for i, byte in enumerate(h) if byte == a or byte == c or byte == d),
            None,
        )

    return bench.run(b, lambda: bench.count_memchr3(haystack, n1, n2, n3, position))


def memrchr_count(b: Benchmark) -> list[Sample]:
    """Count a byte by walking matches from the back."""
    haystack = b.haystack
    needle = b.one_needle_byte()
    return bench.run(b, lambda: _count_slow(reversed(memchr_iter(needle, haystack))))


def memrchr2_count(b: Benchmark) -> list[Sample]:
    """Count either of two bytes by walking matches from the back."""
    haystack = b.haystack
    n1, n2 = b.two_needle_bytes()
    return bench.run(
        b, lambda: _count_slow(reversed(memchr2_iter(n1, n2, haystack)))
    )


def memrchr3_count(b: Benchmark) -> list[Sample]:
    """Count any of three bytes by walking matches from the back."""
    haystack = b.haystack
    n1, n2, n3 = b.three_needle_bytes()
    return bench.run(
        b, lambda: _count_slow(reversed(memchr3_iter(n1, n2, n3, haystack)))
    )


def memmem_prebuilt_count(b: Benchmark) -> list[Sample]:
    """Count substring matches with a finder built once."""
    haystack = b.haystack
    finder = Finder(b.one_needle())
    return bench.run(b, lambda: _count_slow(finder.find_iter(haystack)))


def memmem_prebuilt_needles(b: Benchmark) -> list[Sample]:
    """Count how many needles occur in each of the needles after them."""
    finders = [Finder(needle) for needle in b.needles]

    def work() -> int:
        return sum(
            1
            for i, finder in enumerate(finders)
            for haystack in b.needles[i:]
            if finder.find(haystack) is not None
        )

    return bench.run(b, work)


def memmem_prebuilt_haystack(b: Benchmark) -> list[Sample]:
    """Count how many needles occur in the haystack."""
    haystack = b.haystack
    finders = [Finder(needle) for needle in b.needles]
    return bench.run(
        b, lambda: sum(1 for f in finders if f.find(haystack) is not None)
    )


def memmem_oneshot_count(b: Benchmark) -> list[Sample]:
    """Count substring matches with repeated one-shot searches."""
    haystack = b.haystack
    needle = b.one_needle()
    return bench.run(b, lambda: bench.count_memmem(haystack, needle, memmem_find))


_ENGINES: dict[tuple[str, str], EngineFn] = {
    ("memchr-oneshot", "count-bytes"): memchr_oneshot_count,
    ("memchr-prebuilt", "count-bytes"): memchr_prebuilt_count,
    ("memchr-onlycount", "count-bytes"): memchr_only_count,
    ("memchr-fallback", "count-bytes"): memchr_fallback_count,
    ("memchr-naive", "count-bytes"): memchr_naive_count,
    ("memchr2", "count-bytes"): memchr2_count,
    ("memchr2-fallback", "count-bytes"): memchr2_fallback_count,
    ("memchr2-naive", "count-bytes"): memchr2_naive_count,
    ("memchr3", "count-bytes"): memchr3_count,
    ("memchr3-fallback", "count-bytes"): memchr3_fallback_count,
    ("memchr3-naive", "count-bytes"): memchr3_naive_count,
    ("memrchr", "count-bytes"): memrchr_count,
    ("memrchr2", "count-bytes"): memrchr2_count,
    ("memrchr3", "count-bytes"): memrchr3_count,
    ("memmem-prebuilt", "count"): memmem_prebuilt_count,
    ("memmem-oneshot", "count"): memmem_oneshot_count,
    ("memmem-prebuilt", "needles-in-needles"): memmem_prebuilt_needles,
    ("memmem-prebuilt", "needles-in-haystack"): memmem_prebuilt_haystack,
}

_OLD_ENGINES: dict[tuple[str, str], EngineFn] = {
    ("memchr-oneshot", "count-bytes"): memchr_oneshot_count,
    ("memchr-prebuilt", "count-bytes"): memchr_only_count,
    ("memchr-naive", "count-bytes"): memchr_naive_count,
    ("memchr2", "count-bytes"): memchr2_count,
    ("memchr3", "count-bytes"): memchr3_count,
    ("memrchr", "count-bytes"): memrchr_count,
    ("memrchr2", "count-bytes"): memrchr2_count,
    ("memrchr3", "count-bytes"): memrchr3_count,
    ("memmem-prebuilt", "count"): memmem_prebuilt_count,
    ("memmem-oneshot", "count"): memmem_oneshot_count,
    ("memmem-prebuilt", "needles-in-needles"): memmem_prebuilt_needles,
    ("memmem-prebuilt", "needles-in-haystack"): memmem_prebuilt_haystack,
}


def _lookup(table: dict[tuple[str, str], EngineFn], engine: str, model: str) -> EngineFn:
    try:
        return table[(engine, model)]
    except KeyError:
        raise BenchmarkError(
            f"unrecognized engine '{engine}' and model '{model}'"
        ) from None


def select(engine: str, model: str) -> EngineFn:
    """Return the engine function for the given engine and model names."""
    return _lookup(_ENGINES, engine, model)


def select_old(engine: str, model: str) -> EngineFn:
    """Like select, but offering only the engines of the older runner."""
    return _lookup(_OLD_ENGINES, engine, model)


def _package_version() -> str:
    try:
        return version("bytescan")
    except PackageNotFoundError:
        return "unknown"


def _run_cli(
    argv: Sequence[str] | None,
    chooser: Callable[[str, str], EngineFn],
) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if not args:
            raise BenchmarkError(_USAGE)
        if "--version" in args:
            print(_package_version())
            return 0
        quiet = "--quiet" in args
        engine = args[-1]
        b = Benchmark.from_stdin()
        samples = chooser(engine, b.model)(b)
    except BenchmarkError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    if not quiet:
        bench.write_samples(samples)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run one engine on the benchmark read from stdin and print its samples."""
    return _run_cli(argv, select)


def main_old(argv: Sequence[str] | None = None) -> int:
    """Like main, but with the older runner's set of engines."""
    return _run_cli(argv, select_old)