"""Block ordering rules and bookkeeping for blocks seen on the network."""

from __future__ import annotations

import enum
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Protocol, Union

__all__ = [
    "ContractPreHashStatus",
    "DoubleSpendType",
    "MissingBlock",
    "BlockManager",
    "block_compare",
    "block_time_ascending",
]


class _HeightAndTime(Protocol):
    height: int
    time: int


class ContractPreHashStatus(enum.IntEnum):
    """Outcome of checking a contract's previous transaction hash."""

    NORMAL = 0
    DB_BLOCK_EXCEPTION = 1
    MEM_BLOCK_EXCEPTION = 2
    WAITING = 3
    ERR = 4


class DoubleSpendType(enum.Enum):
    """How a double spend relates to blocks already known."""

    REPEATED_DOUBLE_SPEND = 0
    NEW_DOUBLE_SPEND = 1
    OLD_DOUBLE_SPEND = 2
    INVALID_DOUBLE_SPEND = 3
    ERR = 4


def block_compare(a: _HeightAndTime, b: _HeightAndTime) -> bool:
    """Whether ``a`` orders before ``b`` by height, then time, both descending."""
    if a.height > b.height:
        return True
    return a.height == b.height and a.time > b.time


def block_time_ascending(a: _HeightAndTime, b: _HeightAndTime) -> bool:
    """Whether ``a`` orders before ``b`` by height, then time, both ascending."""
    if a.height == b.height:
        return a.time < b.time
    return a.height < b.height


@dataclass(eq=False)
class MissingBlock:
    """A block or UTXO hash waiting for the block-finding protocol.

    ``tx_or_block`` is False for a block hash and True for a UTXO.
    Entries order by time; two entries with the same hash never order
    before one another.
    """

    hash: str
    time: int
    tx_or_block: bool = False
    trigger_count: int = 0

    def __lt__(self, other: "MissingBlock") -> bool:
        if not isinstance(other, MissingBlock):
            return NotImplemented
        if self.hash == other.hash:
            return False
        return self.time < other.time

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MissingBlock):
            return NotImplemented
        return self.hash == other.hash

    def __hash__(self) -> int:
        return hash(self.hash)


Timeout = Union[int, float, timedelta]


class BlockManager:
    """Thread-safe record of block hashes and when each was first added."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._blocks: dict[str, float] = {}
        self._lock = threading.Lock()

    def add_block(self, block_hash: str) -> bool:
        """Record ``block_hash``; True if it was new, False if already known."""
        with self._lock:
            if block_hash in self._blocks:
                return False
            self._blocks[block_hash] = self._clock()
            return True

    def has_block(self, block_hash: str) -> bool:
        """Whether ``block_hash`` is recorded."""
        with self._lock:
            return block_hash in self._blocks

    def remove_expired_blocks(self, timeout: Timeout) -> int:
        """Forget blocks recorded more than ``timeout`` seconds ago; return how many."""
        if isinstance(timeout, timedelta):
            seconds = timeout.total_seconds()
        else:
            seconds = float(timeout)
        with self._lock:
            now = self._clock()
            expired = [h for h, stamp in self._blocks.items() if now - stamp > seconds]
            for block_hash in expired:
                del self._blocks[block_hash]
            return len(expired)

    def __contains__(self, block_hash: object) -> bool:
        with self._lock:
            return block_hash in self._blocks

    def __len__(self) -> int:
        with self._lock:
            return len(self._blocks)