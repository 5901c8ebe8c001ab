import itertools

import pytest
from hypothesis import given
from hypothesis import strategies as st

from bytescan.single import MatchIter, One

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
]

EXPAND_LEN = 515


def generate(haystack, positions):
    for i in range(EXPAND_LEN):
        yield ("%" * i + haystack).encode("latin-1"), [p + i for p in positions]
    for i in range(1, EXPAND_LEN):
        yield (haystack + "%" * i).encode("latin-1"), list(positions)


def double_ended_take(it, take_side):
    front, back = [], []
    for take_front in take_side:
        if take_front:
            pos = next(it, None)
            if pos is None:
                break
            front.append(pos)
        else:
            pos = it.next_back()
            if pos is None:
                break
            back.append(pos)
    return front + back[::-1]


def positions_of(needle, data):
    return [i for i, b in enumerate(data) if b == needle]


@pytest.mark.parametrize("haystack,needles,positions", SEEDS)
def test_forward_iter(haystack, needles, positions):
    finder = One(needles[0])
    for data, expected in generate(haystack, positions):
        assert list(finder.iter(data)) == expected, data


@pytest.mark.parametrize("haystack,needles,positions", SEEDS)
def test_reverse_iter(haystack, needles, positions):
    finder = One(needles[0])
    for data, expected in generate(haystack, positions):
        got = list(reversed(finder.iter(data)))
        got.reverse()
        assert got == expected, data


@pytest.mark.parametrize("haystack,needles,positions", SEEDS)
def test_count_iter(haystack, needles, positions):
    finder = One(needles[0])
    for data, expected in generate(haystack, positions):
        assert finder.iter(data).count() == len(expected), data
        assert finder.count(data) == len(expected), data


@pytest.mark.parametrize("haystack,needles,positions", SEEDS)
def test_forward_oneshot(haystack, needles, positions):
    finder = One(needles[0])
    for data, expected in generate(haystack, positions):
        start, results = 0, []
        while (i := finder.find(data[start:])) is not None:
            results.append(start + i)
            start += i + 1
        assert results == expected, data


@pytest.mark.parametrize("haystack,needles,positions", SEEDS)
def test_reverse_oneshot(haystack, needles, positions):
    finder = One(needles[0])
    for data, expected in generate(haystack, positions):
        end, results = len(data), []
        while (i := finder.rfind(data[:end])) is not None:
            results.append(i)
            end = i
        results.reverse()
        assert results == expected, data


def test_matches():
    finder = One(ord("a"))
    assert finder.matches(ord("a")) is True
    assert finder.matches(ord("b")) is False


@pytest.mark.parametrize("bad", [-1, 256, 1000])
def test_needle_out_of_range(bad):
    with pytest.raises(ValueError):
        One(bad)


def test_needle_wrong_type():
    with pytest.raises(TypeError):
        One("a")


def test_raw_window():
    finder = One(ord("a"))
    data = b"abaab"
    assert finder.find_raw(data, 1, 5) == 2
    assert finder.rfind_raw(data, 0, 3) == 2
    assert finder.count_raw(data, 1, 4) == 2
    assert finder.find_raw(data, 3, 3) is None
    assert finder.rfind_raw(data, 4, 2) is None
    assert finder.count_raw(data, 4, 2) == 0


def test_raw_out_of_bounds():
    finder = One(ord("a"))
    with pytest.raises(ValueError):
        finder.find_raw(b"abc", 0, 4)
    with pytest.raises(ValueError):
        finder.rfind_raw(b"abc", -1, 2)
    with pytest.raises(ValueError):
        finder.count_raw(b"abc", 5, 6)


def test_memoryview_and_bytearray():
    finder = One(0)
    assert finder.find(memoryview(b"\x01\x00\x00")) == 1
    assert finder.rfind(bytearray(b"\x01\x00\x00")) == 2


def test_iter_is_fused():
    it = One(ord("a")).iter(b"ab")
    assert next(it) == 0
    with pytest.raises(StopIteration):
        next(it)
    with pytest.raises(StopIteration):
        next(it)
    assert it.next_back() is None


def test_count_after_partial_consumption():
    it = One(ord("a")).iter(b"aaaa")
    assert next(it) == 0
    assert it.next_back() == 3
    assert it.count() == 2
    assert list(it) == []


def test_match_iter_works_with_plain_searcher():
    it = MatchIter(One(ord("x")), b"xyx")
    assert list(it) == [0, 2]


@given(st.integers(0, 255), st.binary())
def test_find_matches_naive(n1, corpus):
    expected = positions_of(n1, corpus)
    assert One(n1).find(corpus) == (expected[0] if expected else None)


@given(st.integers(0, 255), st.binary())
def test_rfind_matches_naive(n1, corpus):
    expected = positions_of(n1, corpus)
    assert One(n1).rfind(corpus) == (expected[-1] if expected else None)


@given(st.integers(0, 255), st.binary(), st.lists(st.booleans()))
def test_double_ended_iter(needle, data, take_side):
    if not take_side:
        take_side = [True]
    it = One(needle).iter(data)
    got = double_ended_take(it, itertools.cycle(take_side))
    assert got == positions_of(needle, data)


@given(st.binary())
def test_iter(data):
    assert list(One(0).iter(data)) == positions_of(0, data)


@given(st.binary())
def test_rev_iter(data):
    assert list(reversed(One(0).iter(data))) == positions_of(0, data)[::-1]


@given(st.binary())
def test_iter_size_hint(data):
    it = One(0).iter(data)
    real_count = data.count(0)
    for index in it:
        real_count -= 1
        lower, upper = it.size_hint()
        assert lower <= real_count
        assert upper >= real_count
        assert upper <= len(data) - index


@given(st.integers(0, 255), st.binary())
def test_count_matches_bytes_count(needle, data):
    assert One(needle).count(data) == data.count(needle)
    assert One(needle).iter(data).count() == data.count(needle)