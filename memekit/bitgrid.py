"""Packed bit storage: an append-only bit buffer and a square bit grid.

Bits are packed most-significant first within each byte, so bit 0 of the
stream is the high bit of the first byte.
"""

from __future__ import annotations

from typing import Iterable, Optional

__all__ = ["BitBuffer", "BitGrid"]


def _bytes_for_bits(bits: int) -> int:
    return (bits + 7) // 8


class BitBuffer:
    """An append-only sequence of bits, optionally limited to a byte capacity."""

    __slots__ = ("_data", "_bits", "_capacity")

    def __init__(self, capacity: Optional[int] = None) -> None:
        if capacity is not None and capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._data = bytearray(capacity or 0)
        self._bits = 0

    @classmethod
    def from_bytes(cls, data: Iterable[int], bit_length: Optional[int] = None) -> "BitBuffer":
        """Build a fixed-capacity buffer holding ``data``, ``bit_length`` bits long."""
        raw = bytes(data)
        if bit_length is None:
            bit_length = len(raw) * 8
        if not 0 <= bit_length <= len(raw) * 8:
            raise ValueError("bit_length does not fit in the given data")
        buffer = cls(len(raw))
        buffer._data[:] = raw
        buffer._bits = bit_length
        return buffer

    @property
    def capacity(self) -> Optional[int]:
        """The byte capacity, or None when the buffer grows freely."""
        return self._capacity

    @property
    def bit_length(self) -> int:
        """Number of bits appended so far."""
        return self._bits

    def __len__(self) -> int:
        return self._bits

    def append_bits(self, value: int, length: int) -> None:
        """Append the low ``length`` bits of ``value``, most significant first."""
        if length < 0:
            raise ValueError("length must not be negative")
        end = self._bits + length
        if self._capacity is not None and end > self._capacity * 8:
            raise OverflowError("bit buffer capacity exceeded")
        needed = _bytes_for_bits(end)
        if needed > len(self._data):
            self._data.extend(bytes(needed - len(self._data)))
        offset = self._bits
        for shift in reversed(range(length)):
            if (value >> shift) & 1:
                self._data[offset >> 3] |= 1 << (7 - (offset & 7))
            offset += 1
        self._bits = end

    def to_bytes(self) -> bytes:
        """The packed contents, padded with zero bits to whole bytes (or capacity)."""
        return bytes(self._data)

    def __repr__(self) -> str:
        return f"BitBuffer(bits={self._bits}, capacity={self._capacity})"


class BitGrid:
    """A square grid of bits stored row by row in packed bytes."""

    __slots__ = ("size", "_data")

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("grid size must be positive")
        self.size = size
        self._data = bytearray(_bytes_for_bits(size * size))

    @classmethod
    def from_bytes(cls, size: int, data: Iterable[int]) -> "BitGrid":
        """Build a grid of the given size from its packed bytes."""
        grid = cls(size)
        raw = bytes(data)
        if len(raw) != len(grid._data):
            raise ValueError(f"expected {len(grid._data)} bytes, got {len(raw)}")
        grid._data[:] = raw
        return grid

    def copy(self) -> "BitGrid":
        """An independent copy of this grid."""
        return BitGrid.from_bytes(self.size, self._data)

    def _locate(self, x: int, y: int) -> tuple[int, int]:
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise IndexError(f"({x}, {y}) outside a {self.size}x{self.size} grid")
        offset = y * self.size + x
        return offset >> 3, 1 << (7 - (offset & 7))

    def get(self, x: int, y: int) -> bool:
        """Whether the bit at column ``x``, row ``y`` is set."""
        index, mask = self._locate(x, y)
        return bool(self._data[index] & mask)

    def set(self, x: int, y: int, on: bool) -> None:
        """Set or clear the bit at column ``x``, row ``y``."""
        index, mask = self._locate(x, y)
        if on:
            self._data[index] |= mask
        else:
            self._data[index] &= ~mask & 0xFF

    def invert(self, x: int, y: int, invert: bool) -> None:
        """Flip the bit at column ``x``, row ``y`` when ``invert`` is true."""
        if invert:
            index, mask = self._locate(x, y)
            self._data[index] ^= mask
        else:
            self._locate(x, y)

    def to_bytes(self) -> bytes:
        """The packed grid, rows concatenated, padded to whole bytes."""
        return bytes(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitGrid):
            return NotImplemented
        return self.size == other.size and self._data == other._data

    def __repr__(self) -> str:
        return f"BitGrid(size={self.size})"