"""Benchmark engines that measure other ways of doing byte and substring search."""

from __future__ import annotations

import platform
import sys
from collections.abc import Callable, Sequence
from importlib.metadata import PackageNotFoundError, version

from bytescan import bench
from bytescan.bench import Benchmark, BenchmarkError, Sample
from bytescan.engines import Finder
from bytescan.single import Haystack, _as_bytes

EngineFn = Callable[[Benchmark], list[Sample]]

_USAGE = "Usage: runner (<engine-name> | --version)"


def libc_memchr(haystack: Haystack, needle: int) -> int | None:
    """Return the offset of the first occurrence of needle, or None."""
    index = _as_bytes(haystack).find(needle)
    return None if index < 0 else index


def libc_memmem(haystack: Haystack, needle: bytes) -> int | None:
    """Return the offset of the first occurrence of the substring, or None."""
    index = _as_bytes(haystack).find(needle)
    return None if index < 0 else index


def libc_memchr_oneshot_count(b: Benchmark) -> list[Sample]:
    """Count a byte by repeated calls to a one-shot byte search."""
    haystack = b.haystack
    needle = b.one_needle_byte()
    return bench.run(b, lambda: bench.count_memchr(haystack, needle, libc_memchr))


def libc_memmem_oneshot_count(b: Benchmark) -> list[Sample]:
    """Count substring matches by repeated calls to a one-shot search."""
    haystack = b.haystack
    needle = b.one_needle()
    return bench.run(b, lambda: bench.count_memmem(haystack, needle, libc_memmem))


def bytecount_memchr_oneshot_count(b: Benchmark) -> list[Sample]:
    """Count a byte with a dedicated counting routine."""
    haystack = b.haystack
    needle = b.one_needle_byte()
    return bench.run(b, lambda: haystack.count(needle))


def jetscii_memmem_prebuilt_count(b: Benchmark) -> list[Sample]:
    """Count substring matches with a searcher built once."""
    haystack = b.haystack
    needle = b.one_needle()
    finder = Finder(needle)
    return bench.run(
        b, lambda: bench.count_memmem(haystack, needle, lambda h, _n: finder.find(h))
    )


def jetscii_memmem_oneshot_count(b: Benchmark) -> list[Sample]:
    """Count substring matches, building a new searcher for every search."""
    haystack = b.haystack
    needle = b.one_needle()
    return bench.run(
        b, lambda: bench.count_memmem(haystack, needle, lambda h, n: Finder(n).find(h))
    )


def _contains(finder: Finder, haystack: bytes) -> int:
    """Search the haystack with the finder and report 1 on a match, else 0."""
    if finder.find(haystack) is None:
        return 0
    return 1


def sliceslice_memmem_prebuilt_count(b: Benchmark) -> list[Sample]:
    """Report 1 if the needle occurs in the haystack and 0 otherwise.

    The searcher only answers whether a match exists, so counts are 0 or 1.
    """
    haystack = b.haystack
    finder = Finder(b.one_needle())
    return bench.run(b, lambda: _contains(finder, haystack))


def sliceslice_memmem_oneshot_count(b: Benchmark) -> list[Sample]:
    """Like the prebuilt variant, but building the searcher on every search."""
    haystack = b.haystack
    needle = b.one_needle()
    return bench.run(b, lambda: _contains(Finder(needle), haystack))


def sliceslice_memmem_prebuilt_needles(b: Benchmark) -> list[Sample]:
    """Count how many needles occur in each of the needles after them."""
    needles = list(b.needles)
    finders = [Finder(n) for n in needles]

    def work() -> int:
        return sum(
            _contains(finder, haystack)
            for i, finder in enumerate(finders)
            for haystack in needles[i:]
        )

    return bench.run(b, work)


def sliceslice_memmem_prebuilt_haystack(b: Benchmark) -> list[Sample]:
    """Count how many needles occur in the haystack."""
    haystack = b.haystack
    finders = [Finder(n) for n in b.needles]
    return bench.run(b, lambda: sum(_contains(f, haystack) for f in finders))


def _utf8(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BenchmarkError(f"invalid utf-8 sequence: {exc}") from exc


def std_memmem_oneshot_count(b: Benchmark) -> list[Sample]:
    """Count substring matches in text with repeated one-shot searches."""
    haystack = _utf8(b.haystack)
    needle = _utf8(b.one_needle())

    def first_match(h: str, n: str) -> int | None:
        index = h.find(n)
        return None if index < 0 else index

    return bench.run(
        b, lambda: bench.count_memmem_str(haystack, needle, first_match)
    )


def std_memmem_prebuilt_count(b: Benchmark) -> list[Sample]:
    """Count non-overlapping substring matches in text."""
    haystack = _utf8(b.haystack)
    needle = _utf8(b.one_needle())
    return bench.run(b, lambda: haystack.count(needle))


_LIBC: dict[tuple[str, str], EngineFn] = {
    ("memmem-oneshot", "count"): libc_memmem_oneshot_count,
    ("memchr-oneshot", "count-bytes"): libc_memchr_oneshot_count,
}

_BYTECOUNT: dict[tuple[str, str], EngineFn] = {
    ("memchr-oneshot", "count-bytes"): bytecount_memchr_oneshot_count,
}

_JETSCII: dict[tuple[str, str], EngineFn] = {
    ("memmem-prebuilt", "count"): jetscii_memmem_prebuilt_count,
    ("memmem-oneshot", "count"): jetscii_memmem_oneshot_count,
}

_SLICESLICE: dict[tuple[str, str], EngineFn] = {
    ("memmem-prebuilt", "count"): sliceslice_memmem_prebuilt_count,
    ("memmem-oneshot", "count"): sliceslice_memmem_oneshot_count,
    ("memmem-prebuilt", "needles-in-needles"): sliceslice_memmem_prebuilt_needles,
    ("memmem-prebuilt", "needles-in-haystack"): sliceslice_memmem_prebuilt_haystack,
}

_STD: dict[tuple[str, str], EngineFn] = {
    ("memmem-oneshot", "count"): std_memmem_oneshot_count,
    ("memmem-prebuilt", "count"): std_memmem_prebuilt_count,
}


def _package_version() -> str:
    try:
        return version("bytescan")
    except PackageNotFoundError:
        return "unknown"


def _python_version() -> str:
    return f"{platform.python_implementation()} {platform.python_version()}"


def _run_cli(
    argv: Sequence[str] | None,
    table: dict[tuple[str, str], EngineFn],
    version_text: Callable[[], str],
) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if not args:
            raise BenchmarkError(_USAGE)
        engine = args[0]
        if engine == "--version":
            print(version_text())
            return 0
        b = Benchmark.from_stdin()
        chosen = table.get((engine, b.model))
        if chosen is None:
            raise BenchmarkError(
                f"unrecognized engine '{engine}' and model '{b.model}'"
            )
        samples = chosen(b)
    except BenchmarkError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    bench.write_samples(samples)
    return 0


def main_libc(argv: Sequence[str] | None = None) -> int:
    """Run a C-library style engine on the benchmark read from stdin."""
    return _run_cli(argv, _LIBC, lambda: "unknown")


def main_bytecount(argv: Sequence[str] | None = None) -> int:
    """Run the byte-counting engine on the benchmark read from stdin."""
    return _run_cli(argv, _BYTECOUNT, _package_version)


def main_jetscii(argv: Sequence[str] | None = None) -> int:
    """Run a substring-searcher engine on the benchmark read from stdin."""
    return _run_cli(argv, _JETSCII, _package_version)


def main_sliceslice(argv: Sequence[str] | None = None) -> int:
    """Run a containment-only engine on the benchmark read from stdin."""
    return _run_cli(argv, _SLICESLICE, _package_version)


def main_std(argv: Sequence[str] | None = None) -> int:
    """Run a text-search engine on the benchmark read from stdin."""
    return _run_cli(argv, _STD, _python_version)