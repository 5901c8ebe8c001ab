import pytest
from hypothesis import given
from hypothesis import strategies as st

from bytescan.bytesearch import (
    count,
    memchr,
    memchr2,
    memchr2_iter,
    memchr3,
    memchr3_iter,
    memchr_iter,
    memrchr,
    memrchr2,
    memrchr3,
)

SEEDS = [
    ("a", b"a", [0]),
    ("aa", b"a", [0, 1]),
    ("aaa", b"a", [0, 1, 2]),
    ("", b"a", []),
    ("z", b"a", []),
    ("zz", b"a", []),
    ("zza", b"a", [2]),
    ("zaza", b"a", [1, 3]),
    ("zzza", b"a", [3]),
    ("\x00a", b"a", [1]),
    ("\x00", b"\x00", [0]),
    ("\x00\x00", b"\x00", [0, 1]),
    ("\x00a\x00", b"\x00", [0, 2]),
    ("zzzzzzzzzzzzzzzza", b"a", [16]),
    ("zzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzza", b"a", [32]),
    ("az", b"az", [0, 1]),
    ("az", b"xy", []),
    ("az", b"ay", [0]),
    ("az", b"xz", [1]),
    ("yyyyaz", b"az", [4, 5]),
    ("yyyyaz", b"za", [4, 5]),
    ("xyz", b"xyz", [0, 1, 2]),
    ("zxy", b"xyz", [0, 1, 2]),
    ("zxy", b"xaz", [0, 1]),
    ("zxy", b"taz", [0]),
    ("yxz", b"taz", [2]),
]

PADS = [0, 1, 7, 15, 16, 17, 31, 32, 33, 64, 100]


def _expand(haystack, positions):
    for pad in PADS:
        yield "%" * pad + haystack, [p + pad for p in positions]
    for pad in PADS[1:]:
        yield haystack + "%" * pad, list(positions)


def _fill(needles):
    # Pad missing needles with a byte never used in a corpus.
    return list(needles) + [ord("#")] * (3 - len(needles))


def _iter_for(needles, haystack):
    n = list(needles)
    if len(n) == 1:
        return memchr_iter(n[0], haystack)
    if len(n) == 2:
        return memchr2_iter(n[0], n[1], haystack)
    return memchr3_iter(n[0], n[1], n[2], haystack)


@pytest.mark.parametrize("haystack,needles,positions", SEEDS)
def test_seed_forward(haystack, needles, positions):
    for hay, expected in _expand(haystack, positions):
        data = hay.encode("latin-1")
        assert list(_iter_for(needles, data)) == expected
        n1, n2, n3 = _fill(needles)
        assert list(memchr3_iter(n1, n2, n3, data)) == expected


@pytest.mark.parametrize("haystack,needles,positions", SEEDS)
def test_seed_reverse(haystack, needles, positions):
    for hay, expected in _expand(haystack, positions):
        data = hay.encode("latin-1")
        got = list(reversed(_iter_for(needles, data)))
        got.reverse()
        assert got == expected


@pytest.mark.parametrize("haystack,needles,positions", SEEDS)
def test_seed_oneshot(haystack, needles, positions):
    for hay, expected in _expand(haystack, positions):
        data = hay.encode("latin-1")
        n1, n2, n3 = _fill(needles)
        first = expected[0] if expected else None
        last = expected[-1] if expected else None
        assert memchr3(n1, n2, n3, data) == first
        assert memrchr3(n1, n2, n3, data) == last
        if len(needles) <= 2:
            a, b = (list(needles) + [ord("#")])[:2]
            assert memchr2(a, b, data) == first
            assert memrchr2(a, b, data) == last
        if len(needles) == 1:
            assert memchr(needles[0], data) == first
            assert memrchr(needles[0], data) == last
            assert count(needles[0], data) == len(expected)


def test_doc_examples():
    assert list(memchr2_iter(ord("a"), ord("b"), b"afoobar")) == [0, 4, 5]
    assert list(memchr3_iter(ord("a"), ord("b"), ord("o"), b"afoobar")) == [
        0,
        2,
        3,
        4,
        5,
    ]


def test_invalid_needle():
    with pytest.raises(ValueError):
        memchr(256, b"abc")
    with pytest.raises(TypeError):
        memchr("a", b"abc")


@given(st.integers(0, 255), st.binary())
def test_memchr_invariant(n1, corpus):
    got = memchr(n1, corpus)
    if got is None:
        assert n1 not in corpus
    else:
        assert corpus[got] == n1
        assert n1 not in corpus[:got]


@given(st.integers(0, 255), st.binary())
def test_memrchr_invariant(n1, corpus):
    got = memrchr(n1, corpus)
    if got is None:
        assert n1 not in corpus
    else:
        assert corpus[got] == n1
        assert n1 not in corpus[got + 1 :]


@given(st.integers(0, 255), st.integers(0, 255), st.binary())
def test_memchr2_invariant(n1, n2, corpus):
    first = memchr2(n1, n2, corpus)
    last = memrchr2(n1, n2, corpus)
    hits = {n1, n2}
    if first is None:
        assert last is None
        assert not hits & set(corpus)
    else:
        assert corpus[first] in hits and corpus[last] in hits
        assert not hits & set(corpus[:first])
        assert not hits & set(corpus[last + 1 :])


@given(st.integers(0, 255), st.integers(0, 255), st.integers(0, 255), st.binary())
def test_memchr3_iter_consistent(n1, n2, n3, corpus):
    forward = list(memchr3_iter(n1, n2, n3, corpus))
    backward = list(reversed(memchr3_iter(n1, n2, n3, corpus)))
    assert forward == sorted(forward)
    assert backward == forward[::-1]
    assert len(forward) == sum(corpus.count(n) for n in {n1, n2, n3})


@given(st.binary())
def test_count_matches_iter(data):
    assert count(0, data) == len(list(memchr_iter(0, data)))
    assert memchr_iter(0, data).count() == data.count(0)