from typing import Any

import numpy as np
import pytest

from inverted_indices import AmbiguousSelectorKindError, CartesianIndex, Not, invert
from inverted_indices.core.positions import LogicalIndex, ZeroDArray
from inverted_indices.core.selectors import (
    SkipSelectorKind,
    classify_selector,
    normalize_skips,
    selector_rank,
    sort_positions,
)

POINT = SkipSelectorKind.POINT
LINEAR_SET = SkipSelectorKind.LINEAR_SET
AXIS_MASK = SkipSelectorKind.AXIS_MASK
COORDINATE_SET = SkipSelectorKind.COORDINATE_SET


@pytest.mark.parametrize(
    ("skip", "kind", "rank"),
    [
        (3, POINT, 1),
        (np.int64(3), POINT, 1),
        (np.array(3), POINT, 1),
        ((1, 2), POINT, 2),
        (CartesianIndex(1, 2, 3), POINT, 3),
        ((), POINT, 0),
        (CartesianIndex(), POINT, 0),
        ([3, 1], LINEAR_SET, 1),
        (np.array([3, 1]), LINEAR_SET, 1),
        ({1, 2}, LINEAR_SET, 1),
        ([], LINEAR_SET, 1),
        (range(3), LINEAR_SET, 1),
        ([(1,), 2], LINEAR_SET, 1),
        ([(0, 1), (1, 0)], COORDINATE_SET, 2),
        ([CartesianIndex(0, 1)], COORDINATE_SET, 2),
        ([CartesianIndex()], COORDINATE_SET, 0),
        (np.array([True, False]), AXIS_MASK, 1),
        ([True, False], AXIS_MASK, 1),
        (np.zeros((2, 3), dtype=bool), AXIS_MASK, 2),
        (LogicalIndex(np.zeros((2, 3), dtype=bool)), AXIS_MASK, 2),
        (True, AXIS_MASK, 0),
    ],
)
def test_classify_selector(skip: Any, kind: SkipSelectorKind, rank: int) -> None:
    selector = classify_selector(skip)
    assert selector.kind == kind
    assert selector.rank == rank


def test_classify_point_is_wrapped() -> None:
    selector = classify_selector((1, 2))
    assert isinstance(selector.value, ZeroDArray)
    assert selector.value.x == CartesianIndex(1, 2)


def test_classify_mixed_rank_1_positions_are_linear() -> None:
    assert classify_selector([(1,), 2, CartesianIndex(0)]).value == [1, 2, 0]


def test_classify_inverted_index_iterator() -> None:
    it = invert(5, [1])
    selector = classify_selector(it)
    assert selector.kind == LINEAR_SET
    assert selector.rank == 1
    assert selector.presorted
    assert selector.value is it

    it2 = invert((2, 2), [(0, 0)])
    selector = classify_selector(it2)
    assert selector.kind == COORDINATE_SET
    assert selector.rank == 2


def test_classify_descending_range() -> None:
    selector = classify_selector(range(4, 0, -2))
    assert selector.presorted
    assert list(selector.value) == [2, 4]
    assert isinstance(selector.value, range)


@pytest.mark.parametrize("skip", [[(0, 1), 2], [(0, 1), (0, 1, 2)], [CartesianIndex(), 1]])
def test_classify_ambiguous(skip: Any) -> None:
    with pytest.raises(AmbiguousSelectorKindError):
        classify_selector(skip)


@pytest.mark.parametrize("skip", [None, "abc", ["a"], {"a": 1}, 1.5])
def test_classify_unsupported(skip: Any) -> None:
    with pytest.raises(IndexError, match="unsupported"):
        classify_selector(skip)


def test_classify_nd_integer_array() -> None:
    with pytest.raises(IndexError, match="1-dimensional"):
        classify_selector(np.zeros((2, 2), dtype=int))


def test_classify_rejects_unresolved_inverted_index() -> None:
    with pytest.raises(TypeError):
        classify_selector(Not(1))


def test_selector_rank() -> None:
    assert selector_rank([1, 2]) == 1
    assert selector_rank(Not([(0, 1)])) == 2
    assert selector_rank(Not(Not(np.zeros((2, 2, 2), dtype=bool)))) == 3


def test_normalize_sorts_and_deduplicates() -> None:
    selector = classify_selector([3, 1, 3, 0])
    assert normalize_skips(selector, (5,), order="C") == [0, 1, 3]


def test_normalize_wraparound() -> None:
    selector = classify_selector([-1, 0])
    assert normalize_skips(selector, (5,), order="C") == [0, 4]
    assert normalize_skips(selector, (5,), order="C", wraparound=False) == [-1, 0]


def test_normalize_wraparound_deduplicates_aliases() -> None:
    selector = classify_selector([4, -1])
    assert normalize_skips(selector, (5,), order="C") == [4]


@pytest.mark.parametrize(
    ("order", "expected"),
    [("C", [(0, 1), (1, 0), (1, 1)]), ("F", [(1, 0), (0, 1), (1, 1)])],
)
def test_normalize_coordinates(order: str, expected: list[tuple[int, ...]]) -> None:
    selector = classify_selector([(1, 1), (1, 0), (0, 1), (1, 0)])
    skips = normalize_skips(selector, (2, 2), order=order)
    assert [p.indices for p in skips] == expected


def test_normalize_point() -> None:
    selector = classify_selector((-1, -1))
    skips = normalize_skips(selector, (3, 3), order="C")
    assert isinstance(skips, ZeroDArray)
    assert list(skips) == [CartesianIndex(2, 2)]
    assert normalize_skips(selector, (3, 3), order="C", wraparound=False) is selector.value


def test_normalize_mask() -> None:
    mask = np.array([[True, False], [False, True]])
    skips = normalize_skips(classify_selector(mask), (2, 2), order="F")
    assert isinstance(skips, LogicalIndex)
    assert skips.order == "F"
    assert skips.mask is mask


def test_normalize_presorted_is_not_materialized() -> None:
    selector = classify_selector(range(3))
    assert normalize_skips(selector, (5,), order="C") is selector.value


def test_normalize_is_idempotent(order: str) -> None:
    selector = classify_selector([(2, 0), (0, 1), (1, 2), (0, 1)])
    once = normalize_skips(selector, (3, 3), order=order)
    twice = normalize_skips(classify_selector(once), (3, 3), order=order)
    assert once == twice
    assert sort_positions(once, order) == once
