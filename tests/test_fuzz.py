import pytest
from hypothesis import given
from hypothesis import strategies as st

from bytescan import fuzz


@pytest.mark.parametrize(
    "target, minimum",
    [
        (fuzz.fuzz_memchr, 1),
        (fuzz.fuzz_memrchr, 1),
        (fuzz.fuzz_memchr2, 2),
        (fuzz.fuzz_memrchr2, 2),
        (fuzz.fuzz_memchr3, 3),
        (fuzz.fuzz_memrchr3, 3),
        (fuzz.fuzz_memmem, 2),
        (fuzz.fuzz_memrmem, 2),
    ],
)
def test_short_input_is_ignored(target, minimum):
    assert target(b"a" * (minimum - 1)) is None
    assert target(b"a" * minimum) is not None and target(b"a" * minimum) >= 0


def test_memchr_seed():
    assert fuzz.fuzz_memchr(b"a" + b"zaza") == 2


def test_memchr3_seed():
    assert fuzz.fuzz_memchr3(b"xaz" + b"zxy") == 2


@given(st.binary(min_size=1))
def test_memchr_forward_and_reverse_agree(data):
    forward = fuzz.fuzz_memchr(data)
    assert forward == fuzz.fuzz_memrchr(data)
    assert forward == data[1:].count(data[0])


@given(st.binary(min_size=2))
def test_memchr2_forward_and_reverse_agree(data):
    forward = fuzz.fuzz_memchr2(data)
    assert forward == fuzz.fuzz_memrchr2(data)
    assert forward == sum(1 for b in data[2:] if b in data[:2])


@given(st.binary(min_size=3))
def test_memchr3_forward_and_reverse_agree(data):
    forward = fuzz.fuzz_memchr3(data)
    assert forward == fuzz.fuzz_memrchr3(data)
    assert forward == sum(1 for b in data[3:] if b in data[:3])