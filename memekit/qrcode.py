"""QR code symbol generation for versions 1 to 40.

The encoder picks numeric, alphanumeric or byte mode from the data, adds
Reed-Solomon error correction, draws the function patterns and codewords,
and applies the mask with the lowest penalty score.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator

from memekit.bitgrid import BitBuffer, BitGrid
from memekit.reedsolomon import generator, remainder

__all__ = [
    "ErrorCorrection",
    "Mode",
    "QRCode",
    "buffer_size",
    "apply_mask",
    "penalty_score",
    "encode",
    "encode_text",
]

MIN_VERSION = 1
MAX_VERSION = 40

# Rows are indexed by the two format bits of the level: Medium, Low, High, Quartile.
_NUM_ERROR_CORRECTION_CODEWORDS = (
    (10, 16, 26, 36, 48, 64, 72, 88, 110, 130, 150, 176, 198, 216, 240, 280, 308, 338, 364, 416,
     442, 476, 504, 560, 588, 644, 700, 728, 784, 812, 868, 924, 980, 1036, 1064, 1120, 1204, 1260,
     1316, 1372),
    (7, 10, 15, 20, 26, 36, 40, 48, 60, 72, 80, 96, 104, 120, 132, 144, 168, 180, 196, 224,
     224, 252, 270, 300, 312, 336, 360, 390, 420, 450, 480, 510, 540, 570, 570, 600, 630, 660,
     720, 750),
    (17, 28, 44, 64, 88, 112, 130, 156, 192, 224, 264, 308, 352, 384, 432, 480, 532, 588, 650, 700,
     750, 816, 900, 960, 1050, 1110, 1200, 1260, 1350, 1440, 1530, 1620, 1710, 1800, 1890, 1980,
     2100, 2220, 2310, 2430),
    (13, 22, 36, 52, 72, 96, 108, 132, 160, 192, 224, 260, 288, 320, 360, 408, 448, 504, 546, 600,
     644, 690, 750, 810, 870, 952, 1020, 1050, 1140, 1200, 1290, 1350, 1440, 1530, 1590, 1680,
     1770, 1860, 1950, 2040),
)

_NUM_ERROR_CORRECTION_BLOCKS = (
    (1, 1, 1, 2, 2, 4, 4, 4, 5, 5, 5, 8, 9, 9, 10, 10, 11, 13, 14, 16, 17, 17, 18, 20, 21, 23, 25,
     26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),
    (1, 1, 1, 1, 1, 2, 2, 2, 2, 4, 4, 4, 4, 4, 6, 6, 6, 6, 7, 8, 8, 9, 9, 10, 12, 12, 12, 13, 14,
     15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),
    (1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25, 25, 34, 30, 32, 35, 37,
     40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),
    (1, 1, 2, 2, 4, 4, 6, 6, 8, 8, 8, 10, 12, 16, 12, 17, 16, 18, 21, 20, 23, 23, 25, 27, 29, 34,
     34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),
)

_NUM_RAW_DATA_MODULES = (
    208, 359, 567, 807, 1079, 1383, 1568, 1936, 2336, 2768, 3232, 3728, 4256, 4651, 5243, 5867,
    6523, 7211, 7931, 8683, 9252, 10068, 10916, 11796, 12708, 13652, 14628, 15371, 16411, 17483,
    18587, 19723, 20891, 22091, 23008, 24272, 25568, 26896, 28256, 29648,
)

_ALPHANUMERIC = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"

# Character-count widths, less 8, packed three bits per mode for each version range.
_MODE_INFO = 0x7BBB80A

_PENALTY_N1 = 3
_PENALTY_N2 = 3
_PENALTY_N3 = 40
_PENALTY_N4 = 10


class ErrorCorrection(enum.IntEnum):
    """Error correction level."""

    LOW = 0
    MEDIUM = 1
    QUARTILE = 2
    HIGH = 3

    @property
    def format_bits(self) -> int:
        """The two bits that encode this level in the format information."""
        return {0: 1, 1: 0, 2: 3, 3: 2}[int(self)]


class Mode(enum.IntEnum):
    """Data encoding mode; the mode indicator is ``1 << mode``."""

    NUMERIC = 0
    ALPHANUMERIC = 1
    BYTE = 2


def _check_version(version: int) -> int:
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(f"version must be between {MIN_VERSION} and {MAX_VERSION}, got {version}")
    return version


def _symbol_size(version: int) -> int:
    return version * 4 + 17


def buffer_size(version: int) -> int:
    """Number of bytes needed to hold the modules of a symbol of ``version``."""
    size = _symbol_size(_check_version(version))
    return (size * size + 7) // 8


def _count_bits(version: int, mode: Mode) -> int:
    info = _MODE_INFO
    if version > 9:
        info >>= 9
    if version > 26:
        info >>= 9
    bits = 8 + ((info >> (3 * int(mode))) & 0x07)
    return 16 if bits == 15 else bits


@dataclass(frozen=True)
class QRCode:
    """A finished QR code symbol."""

    version: int
    ecc: ErrorCorrection
    mode: Mode
    mask: int
    modules: BitGrid

    @property
    def size(self) -> int:
        """Width and height in modules."""
        return self.modules.size

    def get_module(self, x: int, y: int) -> bool:
        """Whether the module at column ``x``, row ``y`` is dark; False outside the symbol."""
        if not (0 <= x < self.size and 0 <= y < self.size):
            return False
        return self.modules.get(x, y)

    def rows(self) -> Iterator[tuple[bool, ...]]:
        """The modules row by row, top to bottom, True for dark."""
        for y in range(self.size):
            yield tuple(self.modules.get(x, y) for x in range(self.size))


# Drawing ---------------------------------------------------------------------

def _set_function(modules: BitGrid, is_function: BitGrid, x: int, y: int, on: bool) -> None:
    modules.set(x, y, on)
    is_function.set(x, y, True)


def _draw_finder(modules: BitGrid, is_function: BitGrid, x: int, y: int) -> None:
    size = modules.size
    for i in range(-4, 5):
        for j in range(-4, 5):
            dist = max(abs(i), abs(j))
            xx, yy = x + j, y + i
            if 0 <= xx < size and 0 <= yy < size:
                _set_function(modules, is_function, xx, yy, dist not in (2, 4))


def _draw_alignment(modules: BitGrid, is_function: BitGrid, x: int, y: int) -> None:
    for i in range(-2, 3):
        for j in range(-2, 3):
            _set_function(modules, is_function, x + j, y + i, max(abs(i), abs(j)) != 1)


def _draw_format_bits(modules: BitGrid, is_function: BitGrid, format_bits: int, mask: int) -> None:
    size = modules.size
    data = format_bits << 3 | mask
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ ((rem >> 9) * 0x537)
    data = (data << 10 | rem) ^ 0x5412

    def bit(i: int) -> bool:
        return ((data >> i) & 1) != 0

    for i in range(6):
        _set_function(modules, is_function, 8, i, bit(i))
    _set_function(modules, is_function, 8, 7, bit(6))
    _set_function(modules, is_function, 8, 8, bit(7))
    _set_function(modules, is_function, 7, 8, bit(8))
    for i in range(9, 15):
        _set_function(modules, is_function, 14 - i, 8, bit(i))

    for i in range(8):
        _set_function(modules, is_function, size - 1 - i, 8, bit(i))
    for i in range(8, 15):
        _set_function(modules, is_function, 8, size - 15 + i, bit(i))

    _set_function(modules, is_function, 8, size - 8, True)


def _draw_version(modules: BitGrid, is_function: BitGrid, version: int) -> None:
    if version < 7:
        return
    size = modules.size
    rem = version
    for _ in range(12):
        rem = (rem << 1) ^ ((rem >> 11) * 0x1F25)
    data = version << 12 | rem
    for i in range(18):
        on = ((data >> i) & 1) != 0
        a, b = size - 11 + i % 3, i // 3
        _set_function(modules, is_function, a, b, on)
        _set_function(modules, is_function, b, a, on)


def _alignment_positions(version: int) -> list[int]:
    if version == 1:
        return []
    count = version // 7 + 2
    step = 26 if version == 32 else (version * 4 + count * 2 + 1) // (2 * count - 2) * 2
    position = _symbol_size(version) - 7
    tail = []
    for _ in range(count - 1):
        tail.append(position)
        position -= step
    return [6] + tail[::-1]


def _draw_function_patterns(
    modules: BitGrid, is_function: BitGrid, version: int, format_bits: int
) -> None:
    size = modules.size
    for i in range(size):
        _set_function(modules, is_function, 6, i, i % 2 == 0)
        _set_function(modules, is_function, i, 6, i % 2 == 0)

    _draw_finder(modules, is_function, 3, 3)
    _draw_finder(modules, is_function, size - 4, 3)
    _draw_finder(modules, is_function, 3, size - 4)

    positions = _alignment_positions(version)
    last = len(positions) - 1
    for i, px in enumerate(positions):
        for j, py in enumerate(positions):
            if (i, j) in ((0, 0), (0, last), (last, 0)):
                continue
            _draw_alignment(modules, is_function, px, py)

    _draw_format_bits(modules, is_function, format_bits, 0)
    _draw_version(modules, is_function, version)


def _draw_codewords(
    modules: BitGrid, is_function: BitGrid, codewords: bytes, bit_length: int
) -> None:
    size = modules.size
    i = 0
    right = size - 1
    while right >= 1:
        if right == 6:
            right = 5
        for vert in range(size):
            for j in range(2):
                x = right - j
                upwards = ((right & 2) == 0) ^ (x < 6)
                y = size - 1 - vert if upwards else vert
                if not is_function.get(x, y) and i < bit_length:
                    modules.set(x, y, ((codewords[i >> 3] >> (7 - (i & 7))) & 1) != 0)
                    i += 1
        right -= 2


# Masking and scoring ------------------------------------------------------------

_MASKS = (
    lambda x, y: (x + y) % 2 == 0,
    lambda x, y: y % 2 == 0,
    lambda x, y: x % 3 == 0,
    lambda x, y: (x + y) % 3 == 0,
    lambda x, y: (x // 3 + y // 2) % 2 == 0,
    lambda x, y: x * y % 2 + x * y % 3 == 0,
    lambda x, y: (x * y % 2 + x * y % 3) % 2 == 0,
    lambda x, y: ((x + y) % 2 + x * y % 3) % 2 == 0,
)


def apply_mask(modules: BitGrid, is_function: BitGrid, mask: int) -> None:
    """XOR the non-function modules with mask pattern ``mask`` (0 to 7), in place.

    Applying the same mask twice restores the original grid.
    """
    if not 0 <= mask < len(_MASKS):
        raise ValueError(f"mask must be between 0 and 7, got {mask}")
    if modules.size != is_function.size:
        raise ValueError("module grid and function grid differ in size")
    pattern = _MASKS[mask]
    size = modules.size
    for y in range(size):
        for x in range(size):
            if not is_function.get(x, y):
                modules.invert(x, y, pattern(x, y))


def _run_penalty(line: list[bool]) -> int:
    result = 0
    color = line[0]
    run = 1
    for cell in line[1:]:
        if cell != color:
            color = cell
            run = 1
        else:
            run += 1
            if run == 5:
                result += _PENALTY_N1
            elif run > 5:
                result += 1
    return result


def penalty_score(modules: BitGrid) -> int:
    """Penalty score of the grid; the encoder keeps the mask with the lowest."""
    size = modules.size
    grid = [[modules.get(x, y) for x in range(size)] for y in range(size)]
    result = sum(_run_penalty(row) for row in grid)
    result += sum(_run_penalty([grid[y][x] for y in range(size)]) for x in range(size))

    black = 0
    for y in range(size):
        bits_row = bits_col = 0
        for x in range(size):
            color = grid[y][x]
            if x > 0 and y > 0:
                if color == grid[y - 1][x - 1] == grid[y - 1][x] == grid[y][x - 1]:
                    result += _PENALTY_N2
            bits_row = ((bits_row << 1) & 0x7FF) | int(color)
            bits_col = ((bits_col << 1) & 0x7FF) | int(grid[x][y])
            if x >= 10:
                if bits_row in (0x05D, 0x5D0):
                    result += _PENALTY_N3
                if bits_col in (0x05D, 0x5D0):
                    result += _PENALTY_N3
            if color:
                black += 1

    total = size * size
    k = 0
    while black * 20 < (9 - k) * total or black * 20 > (11 + k) * total:
        result += _PENALTY_N4
        k += 1
    return result


# Encoding -------------------------------------------------------------------------

def _choose_mode(data: bytes) -> Mode:
    if all(0x30 <= b <= 0x39 for b in data):
        return Mode.NUMERIC
    if all(chr(b) in _ALPHANUMERIC for b in data):
        return Mode.ALPHANUMERIC
    return Mode.BYTE


def _encode_segment(data: bytes, version: int, mode: Mode) -> BitBuffer:
    bits = BitBuffer()
    count_bits = _count_bits(version, mode)
    if len(data) >= 1 << count_bits:
        raise ValueError("data too long for this version")
    bits.append_bits(1 << int(mode), 4)
    bits.append_bits(len(data), count_bits)
    if mode is Mode.NUMERIC:
        for start in range(0, len(data), 3):
            chunk = data[start:start + 3]
            bits.append_bits(int(chunk.decode("ascii")), len(chunk) * 3 + 1)
    elif mode is Mode.ALPHANUMERIC:
        for start in range(0, len(data), 2):
            chunk = data[start:start + 2]
            if len(chunk) == 2:
                value = _ALPHANUMERIC.index(chr(chunk[0])) * 45 + _ALPHANUMERIC.index(chr(chunk[1]))
                bits.append_bits(value, 11)
            else:
                bits.append_bits(_ALPHANUMERIC.index(chr(chunk[0])), 6)
    else:
        for byte in data:
            bits.append_bits(byte, 8)
    return bits


def _error_correct(version: int, format_bits: int, codewords: bytes) -> bytes:
    num_blocks = _NUM_ERROR_CORRECTION_BLOCKS[format_bits][version - 1]
    total_ecc = _NUM_ERROR_CORRECTION_CODEWORDS[format_bits][version - 1]
    module_count = _NUM_RAW_DATA_MODULES[version - 1]
    raw_codewords = module_count // 8

    block_ecc_len = total_ecc // num_blocks
    num_short = num_blocks - raw_codewords % num_blocks
    short_data_len = raw_codewords // num_blocks - block_ecc_len

    blocks: list[bytes] = []
    position = 0
    for index in range(num_blocks):
        length = short_data_len + (0 if index < num_short else 1)
        blocks.append(codewords[position:position + length])
        position += length

    coeff = generator(block_ecc_len)
    eccs = [remainder(coeff, block) for block in blocks]

    out = bytearray()
    for i in range(short_data_len + 1):
        out.extend(block[i] for block in blocks if i < len(block))
    for i in range(block_ecc_len):
        out.extend(ecc[i] for ecc in eccs)
    out.extend(bytes((module_count + 7) // 8 - len(out)))
    return bytes(out)


def encode(data: Iterable[int], version: int, ecc: ErrorCorrection) -> QRCode:
    """Encode ``data`` into a QR code of the given version and error correction level."""
    data = bytes(data)
    version = _check_version(version)
    ecc = ErrorCorrection(ecc)
    format_bits = ecc.format_bits

    module_count = _NUM_RAW_DATA_MODULES[version - 1]
    data_capacity = module_count // 8 - _NUM_ERROR_CORRECTION_CODEWORDS[format_bits][version - 1]
    capacity_bits = data_capacity * 8

    mode = _choose_mode(data)
    bits = _encode_segment(data, version, mode)
    if bits.bit_length > capacity_bits:
        raise ValueError(
            f"data needs {bits.bit_length} bits, version {version} level {ecc.name} holds {capacity_bits}"
        )

    bits.append_bits(0, min(4, capacity_bits - bits.bit_length))
    bits.append_bits(0, (8 - bits.bit_length % 8) % 8)
    pad = 0xEC
    while bits.bit_length < capacity_bits:
        bits.append_bits(pad, 8)
        pad ^= 0xEC ^ 0x11

    size = _symbol_size(version)
    modules = BitGrid(size)
    is_function = BitGrid(size)
    _draw_function_patterns(modules, is_function, version, format_bits)
    codewords = _error_correct(version, format_bits, bits.to_bytes())
    _draw_codewords(modules, is_function, codewords, module_count)

    best_mask = 0
    best_penalty = None
    for mask in range(8):
        _draw_format_bits(modules, is_function, format_bits, mask)
        apply_mask(modules, is_function, mask)
        penalty = penalty_score(modules)
        if best_penalty is None or penalty < best_penalty:
            best_mask, best_penalty = mask, penalty
        apply_mask(modules, is_function, mask)

    _draw_format_bits(modules, is_function, format_bits, best_mask)
    apply_mask(modules, is_function, best_mask)
    return QRCode(version=version, ecc=ecc, mode=mode, mask=best_mask, modules=modules)


def encode_text(text: str, version: int, ecc: ErrorCorrection) -> QRCode:
    """Encode ``text`` (as UTF-8) into a QR code."""
    return encode(text.encode("utf-8"), version, ecc)