"""Fixed-width integer helpers for 256-bit two's complement arithmetic."""

from __future__ import annotations

from typing import TypeVar

__all__ = [
    "U256_BITS",
    "U256_MODULUS",
    "u2s",
    "s2u",
    "to_log2",
    "exp10",
    "to_uint64",
    "to_uint8",
    "diff",
]

U256_BITS = 256
U256_MODULUS = 1 << U256_BITS
_U256_MAX = U256_MODULUS - 1
_SIGN_BIT = 1 << (U256_BITS - 1)

_N = TypeVar("_N")


def _check_u256(value: int) -> int:
    if not 0 <= value <= _U256_MAX:
        raise ValueError(f"value does not fit in an unsigned 256-bit integer: {value}")
    return value


def u2s(value: int) -> int:
    """Interpret an unsigned 256-bit value as a two's complement signed number."""
    _check_u256(value)
    if value & _SIGN_BIT:
        return -(U256_MODULUS - value)
    return value


def s2u(value: int) -> int:
    """The unsigned 256-bit two's complement representation of a signed number."""
    if not -_U256_MAX <= value <= _U256_MAX:
        raise ValueError(f"value does not fit in a signed 256-bit magnitude: {value}")
    if value >= 0:
        return value
    return U256_MODULUS + value


def to_log2(value: int) -> int:
    """The number of times ``value`` can be halved before it reaches zero, less one.

    This is the index of the highest set bit, and 0 for both 0 and 1.
    """
    _check_u256(value)
    return max(value.bit_length() - 1, 0)


def exp10(n: int) -> int:
    """Ten to the power ``n``, wrapped to 256 bits."""
    if n < 0:
        raise ValueError("exponent must not be negative")
    return pow(10, n, U256_MODULUS)


def to_uint64(value: int) -> int:
    """``value`` truncated to its low 64 bits (two's complement for negatives)."""
    return value & 0xFFFF_FFFF_FFFF_FFFF


def to_uint8(value: int) -> int:
    """``value`` truncated to its low 8 bits (two's complement for negatives)."""
    return value & 0xFF


def diff(a: _N, b: _N) -> _N:
    """The absolute distance between ``a`` and ``b``."""
    return max(a, b) - min(a, b)  # type: ignore[operator]