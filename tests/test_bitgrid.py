import pytest
from hypothesis import given, strategies as st

from memekit.bitgrid import BitBuffer, BitGrid


@given(st.binary(max_size=64))
def test_appending_whole_bytes_round_trips(data):
    buffer = BitBuffer()
    for byte in data:
        buffer.append_bits(byte, 8)
    assert buffer.to_bytes() == data
    assert len(buffer) == len(data) * 8


def test_bits_are_packed_most_significant_first():
    buffer = BitBuffer()
    buffer.append_bits(1, 1)
    assert buffer.to_bytes() == bytes([0x80])
    assert buffer.bit_length == 1


def test_only_low_bits_of_value_are_used():
    plain = BitBuffer()
    plain.append_bits(0x0F, 4)
    noisy = BitBuffer()
    noisy.append_bits(0xFF, 4)
    assert plain.to_bytes() == noisy.to_bytes()


def test_zero_length_append_changes_nothing():
    buffer = BitBuffer(4)
    buffer.append_bits(0xFFFF, 0)
    assert buffer.to_bytes() == bytes(4)
    assert len(buffer) == 0


def test_capacity_pads_output_and_is_enforced():
    buffer = BitBuffer(2)
    buffer.append_bits(0xAB, 8)
    assert len(buffer.to_bytes()) == 2
    buffer.append_bits(0xCD, 8)
    with pytest.raises(OverflowError):
        buffer.append_bits(1, 1)


def test_negative_length_is_rejected():
    with pytest.raises(ValueError):
        BitBuffer().append_bits(1, -1)


def test_from_bytes_keeps_data_and_length():
    buffer = BitBuffer.from_bytes(b"\x12\x34", 12)
    assert buffer.to_bytes() == b"\x12\x34"
    assert len(buffer) == 12
    with pytest.raises(OverflowError):
        buffer.append_bits(0, 5)


@pytest.mark.parametrize("size", [1, 3, 8, 21, 25])
def test_grid_byte_length(size):
    grid = BitGrid(size)
    assert len(grid.to_bytes()) == (size * size + 7) // 8
    assert not any(grid.to_bytes())


def test_grid_origin_is_first_high_bit():
    grid = BitGrid(21)
    grid.set(0, 0, True)
    assert grid.to_bytes()[0] == 0x80


@given(st.integers(1, 30).flatmap(lambda s: st.tuples(st.just(s), st.integers(0, s - 1), st.integers(0, s - 1))))
def test_set_affects_exactly_one_bit(params):
    size, x, y = params
    grid = BitGrid(size)
    grid.set(x, y, True)
    assert grid.get(x, y) is True
    assert sum(bin(b).count("1") for b in grid.to_bytes()) == 1
    grid.set(x, y, False)
    assert grid.get(x, y) is False
    assert not any(grid.to_bytes())


@given(st.integers(1, 20).flatmap(lambda s: st.tuples(st.just(s), st.integers(0, s - 1), st.integers(0, s - 1), st.booleans())))
def test_invert_twice_restores(params):
    size, x, y, start = params
    grid = BitGrid(size)
    grid.set(x, y, start)
    grid.invert(x, y, True)
    assert grid.get(x, y) is (not start)
    grid.invert(x, y, True)
    assert grid.get(x, y) is start
    grid.invert(x, y, False)
    assert grid.get(x, y) is start


def test_row_major_layout():
    grid = BitGrid(5)
    grid.set(0, 1, True)
    other = BitGrid(5)
    other.set(5 % 5, 1, True)
    assert grid == other
    assert grid.to_bytes() != BitGrid(5).to_bytes()
    assert grid.get(1, 0) is False


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (5, 0), (0, 5)])
def test_out_of_range_raises(x, y):
    grid = BitGrid(5)
    with pytest.raises(IndexError):
        grid.get(x, y)
    with pytest.raises(IndexError):
        grid.set(x, y, True)


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        BitGrid(0)


def test_from_bytes_and_copy_round_trip():
    grid = BitGrid(7)
    grid.set(3, 4, True)
    grid.set(6, 6, True)
    rebuilt = BitGrid.from_bytes(7, grid.to_bytes())
    assert rebuilt == grid
    clone = grid.copy()
    clone.set(0, 0, True)
    assert grid.get(0, 0) is False
    with pytest.raises(ValueError):
        BitGrid.from_bytes(7, b"\x00")