from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeAlias

import numpy as np

from inverted_indices.core.bounds import check_inverted_index
from inverted_indices.core.common import axis_lengths
from inverted_indices.core.config import get_wraparound
from inverted_indices.core.iterator import InvertedIndexIterator
from inverted_indices.core.positions import CartesianIndex, CartesianIndices, LogicalIndex
from inverted_indices.core.selectors import (
    InvertedIndex,
    SkipSelector,
    classify_selector,
    is_bool_array,
    is_bool_list,
    is_integer,
    is_integer_array,
    is_integer_list,
    normalize_skips,
    selector_rank,
)
from inverted_indices.core.shape import parse_array_shape
from inverted_indices.errors import NegativeStepError, OutOfBoundsError, ShapeMismatchError

if TYPE_CHECKING:
    import numpy.typing as npt

    from inverted_indices.core.common import Axes, MemoryOrder
    from inverted_indices.core.iterator import PickDomain

logger = logging.getLogger(__name__)

ResolvedIndex: TypeAlias = (
    int | range | CartesianIndex | LogicalIndex | InvertedIndexIterator | np.ndarray
)


def ensure_tuple(v: Any) -> tuple[Any, ...]:
    if not isinstance(v, tuple):
        v = (v,)
    return v


def normalize_integer_selection(dim_sel: int, dim_len: int, wraparound: bool = True) -> int:
    # normalize type to int
    dim_sel = int(dim_sel)

    # handle wraparound
    if wraparound and dim_sel < 0:
        normalized = dim_len + dim_sel
    else:
        normalized = dim_sel

    # handle out of bounds
    if normalized >= dim_len or normalized < 0:
        raise OutOfBoundsError(dim_sel, (dim_len,))

    return normalized


def wraparound_indices(x: npt.NDArray[Any], dim_len: int) -> None:
    loc_neg = x < 0
    if np.any(loc_neg):
        x[loc_neg] += dim_len


def boundscheck_indices(x: npt.NDArray[Any], dim_len: int) -> None:
    out_of_bounds = (x < 0) | (x >= dim_len)
    if np.any(out_of_bounds):
        raise OutOfBoundsError(int(x[out_of_bounds][0]), (dim_len,))


def split_axes(axes: Axes, n: int) -> tuple[Axes, Axes]:
    """
    Split off the first ``n`` axes. When fewer than ``n`` axes remain, the missing
    ones are synthesized as axes of length 1.
    """
    heads = tuple(axes[:n])
    heads += (range(1),) * (n - len(heads))
    return heads, tuple(axes[n:])


def spanned_indices(
    axes: Axes, selector: SkipSelector, order: MemoryOrder = "C"
) -> tuple[PickDomain, Axes]:
    """
    Determine the pick domain of ``selector`` and the axes left over for any
    index that follows it.

    A rank-1 selector picks along the next axis, a rank-N selector along the
    cartesian product of the next N axes, and a rank-0 selector along the
    single position of a zero-dimensional domain, consuming no axes.

    Examples
    --------
    >>> from inverted_indices.core.selectors import classify_selector
    >>> spanned_indices((range(3), range(4)), classify_selector([1]))
    (range(0, 3), (range(0, 4),))
    """
    heads, tails = split_axes(axes, selector.rank)
    if selector.rank == 1:
        return heads[0], tails
    return CartesianIndices(heads, order), tails


def index_rank(index: Any) -> int:
    """Number of axes an index argument consumes."""
    if isinstance(index, InvertedIndex):
        return selector_rank(index)
    if index is Ellipsis:
        return 0
    if isinstance(index, CartesianIndex):
        return index.ndim
    if is_bool_array(index):
        return index.ndim
    return 1


def _resolve_inverted(
    axes: Axes, inverted: InvertedIndex, order: MemoryOrder, wraparound: bool
) -> tuple[InvertedIndexIterator, Axes]:
    skip = inverted.skip
    if isinstance(skip, InvertedIndex):
        skip, _ = _resolve_inverted(axes, skip, order, wraparound)

    selector = classify_selector(skip)
    picks, tails = spanned_indices(axes, selector, order)
    span, _ = split_axes(axes, selector.rank)
    skips = normalize_skips(selector, axis_lengths(span), order=order, wraparound=wraparound)

    iterator = InvertedIndexIterator(skips, picks)
    check_inverted_index(iterator, span, order)
    logger.debug(
        "Resolved %s skip selector over %d axes: %d picks, %d skips",
        selector.kind.value,
        selector.rank,
        len(picks),
        len(skips),
    )
    return iterator, tails


def _resolve_index(
    axes: Axes, index: Any, order: MemoryOrder, wraparound: bool
) -> tuple[ResolvedIndex, Axes]:
    if isinstance(index, InvertedIndex):
        return _resolve_inverted(axes, index, order, wraparound)

    if is_integer(index):
        (ax,), tails = split_axes(axes, 1)
        return ax[normalize_integer_selection(index, len(ax), wraparound)], tails

    if isinstance(index, slice):
        (ax,), tails = split_axes(axes, 1)
        start, stop, step = index.indices(len(ax))
        if step < 1:
            raise NegativeStepError
        return ax[start:stop:step], tails

    if isinstance(index, CartesianIndex):
        heads, tails = split_axes(axes, index.ndim)
        coords = tuple(
            ax[normalize_integer_selection(c, len(ax), wraparound)]
            for c, ax in zip(index.indices, heads, strict=True)
        )
        return CartesianIndex(coords), tails

    if is_bool_array(index) or is_bool_list(index):
        mask = np.asarray(index, dtype=bool)
        heads, tails = split_axes(axes, mask.ndim)
        if mask.shape != axis_lengths(heads):
            raise ShapeMismatchError(
                f"Boolean array has the wrong shape; expected {axis_lengths(heads)}, "
                f"got {mask.shape}"
            )
        return LogicalIndex(mask, order), tails

    if is_integer_array(index) or is_integer_list(index):
        # copy, wraparound is applied in place
        dim_sel = np.array(index, dtype=np.intp)
        if dim_sel.ndim != 1:
            raise IndexError("integer arrays in an index must be 1-dimensional only")
        (ax,), tails = split_axes(axes, 1)
        if wraparound:
            wraparound_indices(dim_sel, len(ax))
        boundscheck_indices(dim_sel, len(ax))
        return dim_sel, tails

    raise IndexError(
        "unsupported index item; expected integer, slice, Ellipsis, integer "
        f"array, Boolean array, CartesianIndex or InvertedIndex, got {type(index)!r}"
    )


def resolve(shape: Any, selection: Any, *, order: MemoryOrder | None = None) -> tuple[Any, ...]:
    """
    Resolve an index into an array of ``shape``, replacing each ``InvertedIndex``
    with an ``InvertedIndexIterator`` over the positions it selects.

    Each index argument consumes as many axes as it spans and the following
    arguments are resolved against the remaining axes. An ``InvertedIndex``
    that is the only index and spans a single axis is resolved against the
    linear positions of the whole array. All bounds and shape checks run
    before this function returns.

    Parameters
    ----------
    shape : ArrayShape, array-like or tuple of int
        The array being indexed.
    selection : index or tuple of indices
        Integers, slices, at most one Ellipsis, integer arrays, Boolean arrays,
        ``CartesianIndex`` points and ``InvertedIndex`` values.
    order : {"C", "F"}, optional
        Canonical enumeration order; defaults to the configured ``order``.

    Returns
    -------
    tuple
        One resolved index per argument: integers, ``range`` objects, 1-D integer
        arrays, ``CartesianIndex``, ``LogicalIndex`` and ``InvertedIndexIterator``.
        An Ellipsis is replaced by one ``range`` per axis it stands for.

    Raises
    ------
    OutOfBoundsError
        If an index, or a skipped position, is outside the array.
    ShapeMismatchError
        If a Boolean mask, or a nested inverted index, does not match the axes it spans.
    """
    array_shape = parse_array_shape(shape, order)
    selection = ensure_tuple(selection)

    n_ellipsis = sum(1 for i in selection if i is Ellipsis)
    if n_ellipsis > 1:
        raise IndexError("an index can only have a single ellipsis ('...')")

    axes: Axes
    if (
        len(selection) == 1
        and isinstance(selection[0], InvertedIndex)
        and selector_rank(selection[0]) == 1
    ):
        axes = (array_shape.linear_indices,)
    else:
        axes = array_shape.axes

    wraparound = get_wraparound()
    resolved: list[Any] = []
    for i, index in enumerate(selection):
        if index is Ellipsis:
            n_fill = max(0, len(axes) - sum(index_rank(s) for s in selection[i + 1 :]))
            resolved.extend(axes[:n_fill])
            axes = axes[n_fill:]
            continue
        resolved_index, axes = _resolve_index(axes, index, array_shape.order, wraparound)
        resolved.append(resolved_index)

    return tuple(resolved)
