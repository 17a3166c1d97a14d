from __future__ import annotations

import numbers
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeGuard

import numpy as np

from inverted_indices.core.iterator import InvertedIndexIterator
from inverted_indices.core.positions import (
    CartesianIndex,
    LogicalIndex,
    Position,
    ZeroDArray,
    sort_key,
)
from inverted_indices.errors import AmbiguousSelectorKindError

if TYPE_CHECKING:
    import numpy.typing as npt

    from inverted_indices.core.common import MemoryOrder
    from inverted_indices.core.iterator import SkipCollection


@dataclass(frozen=True, eq=False)
class InvertedIndex:
    """
    Select every index of an array except those in ``skip``.

    Upon resolution against an array, an ``InvertedIndex`` behaves like a
    1-dimensional collection of the positions that are not in ``skip``. All
    positions in ``skip`` must be within the bounds of the array, even though
    they are skipped. If ``skip`` spans multiple dimensions (a multidimensional
    Boolean mask or ``CartesianIndex`` positions) then the inverted index spans
    the same dimensions.

    Examples
    --------
    >>> from inverted_indices import Not, resolve
    >>> list(resolve((5,), Not([1, 3]))[0])
    [0, 2, 4]
    """

    skip: Any

    def __post_init__(self) -> None:
        # one-shot iterators are read once here, resolution inspects the skip
        # set more than once
        if isinstance(self.skip, Iterator):
            object.__setattr__(self, "skip", list(self.skip))


Not = InvertedIndex


def is_integer(x: Any) -> TypeGuard[int]:
    """True if x is an integer (both pure Python or NumPy)."""
    return isinstance(x, numbers.Integral) and not is_bool(x)


def is_bool(x: Any) -> TypeGuard[bool | np.bool_]:
    """True if x is a boolean (both pure Python or NumPy)."""
    return type(x) in [bool, np.bool_]


def is_integer_list(x: Any) -> TypeGuard[list[int]]:
    """True if x is a list of integers."""
    return isinstance(x, list) and len(x) > 0 and all(is_integer(i) for i in x)


def is_bool_list(x: Any) -> TypeGuard[list[bool | np.bool_]]:
    """True if x is a list of boolean."""
    return isinstance(x, list) and len(x) > 0 and all(is_bool(i) for i in x)


def is_integer_array(x: Any, ndim: int | None = None) -> TypeGuard[npt.NDArray[np.intp]]:
    t = not np.isscalar(x) and hasattr(x, "shape") and hasattr(x, "dtype") and x.dtype.kind in "ui"
    if ndim is not None:
        t = t and hasattr(x, "shape") and len(x.shape) == ndim
    return t


def is_bool_array(x: Any, ndim: int | None = None) -> TypeGuard[npt.NDArray[np.bool_]]:
    t = hasattr(x, "shape") and hasattr(x, "dtype") and x.dtype == bool
    if ndim is not None:
        t = t and hasattr(x, "shape") and len(x.shape) == ndim
    return t


def is_point(x: Any) -> bool:
    """True for a ``CartesianIndex`` or a plain tuple of integers."""
    return isinstance(x, CartesianIndex) or (
        isinstance(x, tuple) and all(is_integer(i) for i in x)
    )


class SkipSelectorKind(Enum):
    """
    Enum for the kinds of skip selector.
    """

    POINT = "point"
    LINEAR_SET = "linear_set"
    AXIS_MASK = "axis_mask"
    COORDINATE_SET = "coordinate_set"


@dataclass(frozen=True, eq=False)
class SkipSelector:
    """A skip selector tagged with its kind and the number of axes it spans.

    Attributes
    ----------
    kind
        How the positions in ``value`` are represented.
    rank
        Number of axes the selector spans.
    value
        ``ZeroDArray`` for points, a Boolean array for masks, a list of positions
        for unsorted collections, or a lazily-evaluated, already sorted view.
    presorted
        True if ``value`` already enumerates its positions in canonical order.
    """

    kind: SkipSelectorKind
    rank: int
    value: Any
    presorted: bool = False


def _as_point(x: Any) -> CartesianIndex:
    return x if isinstance(x, CartesianIndex) else CartesianIndex(x)


def _element_rank(x: Any) -> int | None:
    if is_integer(x):
        return 1
    if is_point(x):
        return len(x.indices) if isinstance(x, CartesianIndex) else len(x)
    return None


def _classify_collection(skip: Iterable[Any]) -> SkipSelector:
    items = list(skip)
    if not items:
        return SkipSelector(SkipSelectorKind.LINEAR_SET, 1, [])
    if all(is_bool(i) for i in items):
        return SkipSelector(SkipSelectorKind.AXIS_MASK, 1, np.asarray(items, dtype=bool))

    ranks = {_element_rank(i) for i in items}
    if None in ranks:
        bad = next(i for i in items if _element_rank(i) is None)
        raise IndexError(
            "unsupported position in skip selector; expected integer, tuple of "
            f"integers or CartesianIndex, got {type(bad)!r}"
        )
    if len(ranks) > 1:
        raise AmbiguousSelectorKindError(items, sorted(ranks))

    if all(is_integer(i) for i in items):
        return SkipSelector(SkipSelectorKind.LINEAR_SET, 1, [int(i) for i in items])
    if ranks == {1}:
        # rank-1 coordinates mixed with linear positions are equivalent to linear ones
        return SkipSelector(
            SkipSelectorKind.LINEAR_SET,
            1,
            [int(i) if is_integer(i) else _as_point(i).indices[0] for i in items],
        )
    (rank,) = ranks
    return SkipSelector(
        SkipSelectorKind.COORDINATE_SET, rank, [_as_point(i) for i in items]
    )


def classify_selector(skip: Any) -> SkipSelector:
    """
    Determine the kind and rank of a skip selector.

    An ``InvertedIndex`` nested inside another must be resolved to an
    ``InvertedIndexIterator`` before it is classified.
    """
    if isinstance(skip, InvertedIndex):
        raise TypeError("nested InvertedIndex must be resolved before classification")

    if isinstance(skip, InvertedIndexIterator):
        kind = SkipSelectorKind.LINEAR_SET if skip.ndim == 1 else SkipSelectorKind.COORDINATE_SET
        return SkipSelector(kind, skip.ndim, skip, presorted=True)

    if isinstance(skip, LogicalIndex):
        return SkipSelector(SkipSelectorKind.AXIS_MASK, skip.ndim, skip.mask)

    if is_bool(skip):
        return SkipSelector(SkipSelectorKind.AXIS_MASK, 0, np.asarray(skip, dtype=bool))

    if is_integer(skip):
        return SkipSelector(SkipSelectorKind.POINT, 1, ZeroDArray(int(skip)))

    if is_point(skip):
        point = _as_point(skip)
        return SkipSelector(SkipSelectorKind.POINT, point.ndim, ZeroDArray(point))

    if isinstance(skip, range):
        return SkipSelector(
            SkipSelectorKind.LINEAR_SET, 1, skip if skip.step > 0 else skip[::-1], presorted=True
        )

    if is_bool_array(skip):
        return SkipSelector(SkipSelectorKind.AXIS_MASK, skip.ndim, skip)

    if is_integer_array(skip):
        if skip.ndim == 0:
            return SkipSelector(SkipSelectorKind.POINT, 1, ZeroDArray(int(skip)))
        if skip.ndim != 1:
            raise IndexError(
                "integer arrays used as skip selectors must be 1-dimensional only; "
                "use a list of tuples or CartesianIndex for multidimensional positions"
            )
        return SkipSelector(SkipSelectorKind.LINEAR_SET, 1, [int(i) for i in skip])

    if isinstance(skip, list | tuple | set | frozenset) or (
        hasattr(skip, "__iter__") and not isinstance(skip, str | bytes | dict)
    ):
        return _classify_collection(skip)

    raise IndexError(
        "unsupported skip selector; expected integer, CartesianIndex, tuple of "
        "integers, collection of positions, Boolean mask or InvertedIndex, "
        f"got {type(skip)!r}"
    )


def selector_rank(skip: Any) -> int:
    """Number of axes ``skip`` spans, looking through nested inverted indices."""
    while isinstance(skip, InvertedIndex):
        skip = skip.skip
    return classify_selector(skip).rank


def _wrap_position(position: Position, lengths: tuple[int, ...]) -> Position:
    if isinstance(position, CartesianIndex):
        return CartesianIndex(
            tuple(c + n if c < 0 else c for c, n in zip(position.indices, lengths, strict=True))
        )
    return position + lengths[0] if position < 0 else position


def sort_positions(positions: Iterable[Position], order: MemoryOrder) -> list[Position]:
    """Sort ``positions`` in canonical ``order``, dropping duplicates."""
    return sorted(set(positions), key=sort_key(order))


def normalize_skips(
    selector: SkipSelector,
    lengths: tuple[int, ...],
    *,
    order: MemoryOrder,
    wraparound: bool = True,
) -> SkipCollection:
    """
    Put the positions of ``selector`` in the canonical order of the pick domain
    whose axis lengths are ``lengths``.

    Points, masks and lazily-evaluated views are already ordered and are only
    wrapped, never materialized. Collections are sorted and deduplicated, so the
    length of the result is the exact number of distinct skipped positions.
    Negative entries count from the end of their axis when ``wraparound`` is set.
    """
    value = selector.value
    if selector.kind == SkipSelectorKind.POINT:
        if wraparound:
            return ZeroDArray(_wrap_position(value.x, lengths))
        return value

    if selector.kind == SkipSelectorKind.AXIS_MASK:
        return LogicalIndex(value, order)

    if selector.presorted:
        return value

    if wraparound:
        value = [_wrap_position(p, lengths) for p in value]
    return sort_positions(value, order)
