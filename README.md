# memekit

Small building blocks with no dependencies outside the standard library.

| Module | What it holds |
| --- | --- |
| `memekit.qrcode` | A QR code encoder for versions 1 to 40 and all four error-correction levels. |
| `memekit.reedsolomon` | Reed-Solomon arithmetic over GF(2^8) with the polynomial 0x11D. |
| `memekit.bitgrid` | `BitBuffer` and `BitGrid`, bit containers packed most-significant bit first. |
| `memekit.intmath` | 256-bit two's complement helpers: `u2s`, `s2u`, `to_log2`, `exp10`, `to_uint64`, `to_uint8`, `diff`. |
| `memekit.scope` | `ScopeGuard`, a context manager that runs a cleanup callable on exit unless dismissed. |
| `memekit.blocks` | Block ordering functions, `MissingBlock`, the `ContractPreHashStatus` and `DoubleSpendType` enums, and a thread-safe `BlockManager`. |
| `memekit.selection` | `TransactionType` and `random_elements`. |

## Installation

```
pip install memekit
```

To run the tests:

```
pip install "memekit[test]"
pytest
```

## QR codes

```python
from memekit.qrcode import ErrorCorrection, encode_text

code = encode_text("HELLO WORLD", version=1, ecc=ErrorCorrection.LOW)
for row in code.rows():
    print("".join("##" if dark else "  " for dark in row))

print(code.size, code.mask, code.mode)
print(code.get_module(0, 0))  # True: the top-left finder pattern is dark
```

- `encode(data, version, ecc)` takes bytes (any iterable of byte values);
  `encode_text` encodes a string as UTF-8 first.
- The mode (`Mode.NUMERIC`, `Mode.ALPHANUMERIC` or `Mode.BYTE`) is chosen from
  the data, and the mask with the lowest `penalty_score` is kept.
- A `QRCode` carries `version`, `ecc`, `mode`, `mask` and `modules` (a
  `BitGrid`). `size` is the width in modules. `get_module(x, y)` returns
  `False` outside the symbol, and `rows()` yields each row as a tuple of booleans.
- A version outside 1 to 40, or data that does not fit the chosen version and
  level, raises `ValueError`.
- `buffer_size(version)` gives the number of bytes the packed modules take.
  `apply_mask` and `penalty_score` work on any `BitGrid`. Applying the same mask
  twice restores the grid.

## Reed-Solomon

```python
from memekit.reedsolomon import generator, remainder, rs_multiply

coeff = generator(10)                          # 10 generator coefficients
ecc = remainder(coeff, b"\x10\x20\x0c\x56")    # 10 error-correction bytes
rs_multiply(2, 0x80)                           # multiplication in the field
```

## Bit containers

`BitBuffer(capacity=None)` collects bits with `append_bits(value, length)`.
Given a byte capacity, it raises `OverflowError` when that would be exceeded.
`to_bytes()` returns the packed contents.

`BitGrid(size)` is a square grid with `get`, `set`, `invert`, `copy` and
`to_bytes`. Coordinates outside the grid raise `IndexError`.

## Integer helpers

```python
from memekit.intmath import u2s, s2u, to_log2

u2s(2**256 - 1)   # -1
s2u(-1)           # 2**256 - 1
to_log2(1024)     # 10
```

## Scope guards

```python
from memekit.scope import ScopeGuard

with ScopeGuard(print, "cleaned up") as guard:
    ...
    guard.dismiss()  # skip the cleanup
```

The action runs when the block ends normally and when it ends by an exception.
It does not suppress the exception.

## Block bookkeeping

```python
from memekit.blocks import BlockManager

manager = BlockManager()
manager.add_block("abc")           # True: the hash was new
manager.add_block("abc")           # False: it was already there
manager.has_block("abc")           # True
manager.remove_expired_blocks(60)  # number of hashes older than 60 seconds removed
```

The timeout may be a number of seconds or a `datetime.timedelta`. A custom
`clock` callable can be passed to `BlockManager` in place of `time.monotonic`.

`block_compare(a, b)` orders objects with `height` and `time` attributes in
descending order. `block_time_ascending(a, b)` orders them in ascending order.

## Random selection

`random_elements(items, count)` returns up to `count` items, drawn at random
without repetition using `random.SystemRandom`.

## What this package does not do

memekit is a library of parts. It does not run a chain node, talk to a network,
store blocks or transactions, validate or sign transactions, or execute
contracts. It has no command-line program and no server.