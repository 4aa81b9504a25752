"""Transaction kinds and random selection of candidates."""

from __future__ import annotations

import enum
import random
from typing import Iterable, TypeVar

__all__ = ["TransactionType", "random_elements"]

_T = TypeVar("_T")

_rng = random.SystemRandom()


class TransactionType(enum.IntEnum):
    """Kind of a transaction."""

    UNKNOWN = -1
    GENESIS = 0
    TX = 1


def random_elements(items: Iterable[_T], count: int) -> list[_T]:
    """Pick up to ``count`` elements of ``items`` at random, without repetition.

    Each position is taken at most once, so duplicates in ``items`` may appear
    in the result only as often as they appear in the input. When ``count``
    exceeds the number of items, every item is returned in random order.
    """
    if count < 0:
        raise ValueError("count must not be negative")
    pool = list(items)
    return _rng.sample(pool, min(count, len(pool)))