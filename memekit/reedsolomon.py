"""Reed-Solomon arithmetic over GF(2^8) with the QR reducing polynomial 0x11D."""

from __future__ import annotations

from typing import Iterable

__all__ = ["rs_multiply", "generator", "remainder"]

_POLYNOMIAL = 0x11D


def _check_byte(value: int, name: str) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be a byte, got {value}")


def rs_multiply(x: int, y: int) -> int:
    """Multiply two field elements of GF(2^8/0x11D)."""
    _check_byte(x, "x")
    _check_byte(y, "y")
    z = 0
    for i in range(7, -1, -1):
        z = (z << 1) ^ ((z >> 7) * _POLYNOMIAL)
        z ^= ((y >> i) & 1) * x
    return z


def generator(degree: int) -> bytes:
    """Coefficients of the generator polynomial of the given degree.

    The product (x - r^0)(x - r^1)...(x - r^(degree-1)) with r = 2, with the
    leading term dropped, in order of descending powers.
    """
    if degree < 1:
        raise ValueError("degree must be at least 1")
    coeff = [0] * degree
    coeff[-1] = 1
    root = 1
    for _ in range(degree):
        for j in range(degree):
            coeff[j] = rs_multiply(coeff[j], root)
            if j + 1 < degree:
                coeff[j] ^= coeff[j + 1]
        root = (root << 1) ^ ((root >> 7) * _POLYNOMIAL)
    return bytes(coeff)


def remainder(coeff: Iterable[int], data: Iterable[int]) -> bytes:
    """Error-correction bytes: ``data`` divided by the generator ``coeff``."""
    coeff = bytes(coeff)
    if not coeff:
        raise ValueError("generator coefficients must not be empty")
    result = [0] * len(coeff)
    for byte in data:
        _check_byte(byte, "data byte")
        factor = byte ^ result[0]
        result = result[1:] + [0]
        result = [r ^ rs_multiply(c, factor) for r, c in zip(result, coeff)]
    return bytes(result)