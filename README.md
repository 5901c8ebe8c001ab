# bytescan

Byte and substring search over `bytes`, plus a small harness for timing
search engines against each other.

## Installing

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Searching for bytes

The `bytescan.bytesearch` module has one-shot functions. Each one returns
an offset into the haystack, or `None` when there is no match. Needles are
ints in the range 0 to 255; anything else raises `TypeError` or
`ValueError`.

```python
from bytescan.bytesearch import memchr, memrchr, memchr2, memchr3, count, memchr_iter

memchr(ord("a"), b"zaza")                       # 1
memrchr(ord("a"), b"zaza")                      # 3
memchr2(ord("x"), ord("z"), b"az")              # 1
memchr3(ord("t"), ord("a"), ord("z"), b"yxz")   # 2
count(ord("a"), b"zaza")                        # 2
list(memchr_iter(ord("a"), b"zaza"))            # [1, 3]
list(reversed(memchr_iter(ord("a"), b"zaza")))  # [3, 1]
```

`memrchr2`, `memrchr3`, `memchr2_iter` and `memchr3_iter` work in the same
way.

When the same needle is searched for many times, build a searcher once:

```python
from bytescan.single import One
from bytescan.multi import Two, Three

one = One(ord("\n"))
one.find(b"line\nline\n")    # 4
one.rfind(b"line\nline\n")   # 9
one.count(b"line\nline\n")   # 2

it = one.iter(b"a\nb\nc\n")
next(it)          # 1
it.next_back()    # 5
it.size_hint()    # (0, 3): lower and upper bound on the matches left
it.count()        # 1: consumes what is left
```

`Two` and `Three` search for either of two or any of three bytes and offer
`find`, `rfind` and `iter`. Every searcher also has `matches(byte)` and the
window variants `find_raw`, `rfind_raw` (and `count_raw` on `One`), which
search only `haystack[start:end]` and report offsets into the whole
haystack.

The iterators (`bytescan.single.MatchIter`) can be consumed from either
end, and the two ends never report the same match twice.

## Searching for substrings

```python
from bytescan.engines import Finder, memmem_find, memmem_rfind

memmem_find(b"abaab", b"ab")    # 0
memmem_rfind(b"abaab", b"ab")   # 3

finder = Finder(b"ab")
list(finder.find_iter(b"abaab"))    # [0, 3]
list(finder.rfind_iter(b"abaab"))   # [3, 0]
```

Matches reported by the iterators do not overlap. An empty needle matches
at offset 0 going forwards and at the end of the haystack going backwards.

## Benchmark runners

Each runner reads one benchmark description from standard input and prints
one line per timed iteration, `<nanoseconds>,<count>`.

The description is a sequence of key-length-value items, each written as
`key:length:value` followed by a newline, where `length` is the byte length
of `value`. Recognised keys are `name`, `model`, `pattern` (may repeat; the
value is unescaped, so `\\`, `\0`, `\n`, `\r`, `\t` and `\xNN` are
accepted), `haystack`, `max-iters`, `max-warmup-iters`, `max-time` and
`max-warmup-time` (times in nanoseconds). Unknown keys are ignored. Missing
limits default to zero, so without `max-time` the run stops after one
sample.

```
printf 'model:11:count-bytes\npattern:1:a\nhaystack:4:zaza\nmax-iters:1:3\nmax-time:10:1000000000\n' \
    | bytescan-runner memchr-oneshot
```

Available runners:

- `bytescan-runner [--quiet] <engine>`: `memchr-oneshot`,
  `memchr-prebuilt`, `memchr-onlycount`, `memchr-fallback`, `memchr-naive`,
  `memchr2`, `memchr2-fallback`, `memchr2-naive`, `memchr3`,
  `memchr3-fallback`, `memchr3-naive`, `memrchr`, `memrchr2`, `memrchr3`
  (model `count-bytes`), and `memmem-prebuilt`, `memmem-oneshot` (model
  `count`; `memmem-prebuilt` also takes `needles-in-needles` and
  `needles-in-haystack`). `--quiet` suppresses the samples.
- `bytescan-runner-old [--quiet] <engine>`: a smaller engine set.
- `bytescan-runner-libc <engine>`: `memchr-oneshot`, `memmem-oneshot`.
- `bytescan-runner-bytecount <engine>`: `memchr-oneshot`.
- `bytescan-runner-jetscii <engine>`: `memmem-prebuilt`, `memmem-oneshot`.
- `bytescan-runner-sliceslice <engine>`: `memmem-prebuilt` and
  `memmem-oneshot` (counts are only 0 or 1), plus the two needles models.
- `bytescan-runner-std <engine>`: `memmem-oneshot`, `memmem-prebuilt`;
  haystack and needle must be valid UTF-8.

Every runner also accepts `--version`. Errors, including an engine and
model pair the runner does not know, are printed to standard error as
`error: ...` and the runner exits with status 1.

The harness itself lives in `bytescan.bench`: `Benchmark.parse` reads a
description from bytes, `Benchmark.from_stdin` reads it from a stream,
`run` and `run_and_count` time a callable and return `Sample` records,
and `write_samples` prints them. Malformed input raises `BenchmarkError`.

## Fuzz entry points

`bytescan.fuzz` has `fuzz_memchr`, `fuzz_memchr2`, `fuzz_memchr3`,
`fuzz_memrchr`, `fuzz_memrchr2`, `fuzz_memrchr3`, `fuzz_memmem` and
`fuzz_memrmem`. Each takes arbitrary bytes, splits them into needles and a
haystack, runs the search to completion and returns the number of matches,
or `None` when the input is too short. They can be driven by any fuzzer or
by property-based tests.

## What it does not do

The runners only produce raw samples. There is no tool here to run several
engines in turn, compare their timings or summarise results.