from collections import Counter

import pytest
from hypothesis import given
from hypothesis import strategies as st

from memekit.selection import TransactionType, random_elements


def test_transaction_type_values():
    assert TransactionType(-1) is TransactionType.UNKNOWN
    assert TransactionType(0) is TransactionType.GENESIS
    assert TransactionType(1) is TransactionType.TX
    assert TransactionType["TX"] == 1


def test_transaction_type_from_int():
    assert TransactionType(1) is TransactionType.TX
    with pytest.raises(ValueError):
        TransactionType(2)


def test_returns_requested_count():
    items = ["a", "b", "c", "d", "e"]
    result = random_elements(items, 3)
    assert len(result) == 3
    assert set(result) <= set(items)
    assert len(set(result)) == 3


def test_count_larger_than_items_is_clamped():
    items = [1, 2, 3]
    result = random_elements(items, 10)
    assert sorted(result) == items


def test_zero_count_gives_empty():
    assert random_elements([1, 2, 3], 0) == []


def test_empty_input():
    assert random_elements([], 5) == []


def test_negative_count_raises():
    with pytest.raises(ValueError):
        random_elements([1, 2], -1)


def test_input_not_modified():
    items = [5, 4, 3, 2, 1]
    random_elements(items, 3)
    assert items == [5, 4, 3, 2, 1]


def test_accepts_any_iterable():
    result = random_elements(range(4), 4)
    assert sorted(result) == [0, 1, 2, 3]


def test_every_element_can_be_chosen():
    items = list(range(5))
    seen = set()
    for _ in range(500):
        seen.update(random_elements(items, 1))
    assert seen == set(items)


@given(st.lists(st.integers()), st.integers(min_value=0, max_value=50))
def test_result_is_sub_multiset(items, count):
    result = random_elements(items, count)
    assert len(result) == min(count, len(items))
    source = Counter(items)
    picked = Counter(result)
    assert all(picked[key] <= source[key] for key in picked)