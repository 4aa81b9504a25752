import pytest
from hypothesis import given
from hypothesis import strategies as st

from memekit.intmath import (
    U256_MODULUS,
    diff,
    exp10,
    s2u,
    to_log2,
    to_uint8,
    to_uint64,
    u2s,
)

u256 = st.integers(min_value=0, max_value=2**256 - 1)
s256 = st.integers(min_value=-(2**255), max_value=2**255 - 1)


def test_u2s_all_ones_is_minus_one():
    assert u2s(2**256 - 1) == -1


def test_u2s_small_values_unchanged():
    assert u2s(0) == 0
    assert u2s(42) == 42


def test_u2s_sign_bit_is_most_negative():
    assert u2s(2**255) == -(2**255)


def test_s2u_minus_one_is_all_ones():
    assert s2u(-1) == 2**256 - 1


@given(u256)
def test_u2s_s2u_round_trip(value):
    assert s2u(u2s(value)) == value


@given(s256)
def test_s2u_u2s_round_trip(value):
    assert u2s(s2u(value)) == value


@given(s256)
def test_s2u_in_unsigned_range(value):
    result = s2u(value)
    assert 0 <= result < U256_MODULUS


def test_u2s_rejects_out_of_range():
    with pytest.raises(ValueError):
        u2s(-1)
    with pytest.raises(ValueError):
        u2s(2**256)


def test_s2u_rejects_out_of_range():
    with pytest.raises(ValueError):
        s2u(2**256)


@given(st.integers(min_value=0, max_value=255))
def test_to_log2_of_power_of_two(n):
    assert to_log2(1 << n) == n


@given(st.integers(min_value=1, max_value=254))
def test_to_log2_floor_below_next_power(n):
    assert to_log2((1 << (n + 1)) - 1) == n


def test_to_log2_zero_and_one():
    assert to_log2(0) == 0
    assert to_log2(1) == 0


def test_to_log2_rejects_negative():
    with pytest.raises(ValueError):
        to_log2(-4)


def test_exp10_zero_is_one():
    assert exp10(0) == 1


@given(st.integers(min_value=0, max_value=70))
def test_exp10_grows_by_ten(n):
    assert exp10(n + 1) == exp10(n) * 10


@given(st.integers(min_value=0, max_value=300))
def test_exp10_stays_in_256_bits(n):
    assert 0 <= exp10(n) < U256_MODULUS


def test_exp10_rejects_negative():
    with pytest.raises(ValueError):
        exp10(-1)


def test_to_uint64_truncates():
    assert to_uint64(2**64 + 5) == 5
    assert to_uint64(-1) == 2**64 - 1


def test_to_uint8_truncates():
    assert to_uint8(256) == 0
    assert to_uint8(-1) == 255


@given(st.integers(), st.integers())
def test_diff_symmetric_and_non_negative(a, b):
    assert diff(a, b) == diff(b, a)
    assert diff(a, b) >= 0
    assert min(a, b) + diff(a, b) == max(a, b)