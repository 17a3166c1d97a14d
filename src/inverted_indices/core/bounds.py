from __future__ import annotations

from typing import TYPE_CHECKING, Any

from inverted_indices.core.common import axis_lengths
from inverted_indices.core.iterator import InvertedIndexIterator
from inverted_indices.core.positions import LogicalIndex, _as_coords
from inverted_indices.core.shape import parse_array_shape
from inverted_indices.errors import OutOfBoundsError, ShapeMismatchError

if TYPE_CHECKING:
    from inverted_indices.core.common import Axes, MemoryOrder
    from inverted_indices.core.iterator import PickDomain, SkipCollection


def _in_axes(position: Any, axes: Axes) -> bool:
    coords = _as_coords(position)
    if coords is None or len(coords) != len(axes):
        return False
    return all(c in ax for c, ax in zip(coords, axes, strict=True))


def check_skips_in_bounds(skips: SkipCollection, axes: Axes, order: MemoryOrder = "C") -> None:
    """
    Raise ``OutOfBoundsError`` unless every skipped position lies within ``axes``.

    A nested ``InvertedIndexIterator`` must also walk the same domain as the
    iterator it is nested in, in the same ``order``.
    """
    lengths = axis_lengths(axes)

    # masks and nested inverted indices cover whole axes, their positions are
    # in bounds as soon as their extents match
    if isinstance(skips, LogicalIndex):
        if skips.shape != lengths:
            raise ShapeMismatchError(skips.shape, lengths)
        return
    if isinstance(skips, InvertedIndexIterator):
        check_pick_domain(skips.picks, axes, order)
        return

    if isinstance(skips, range) and len(axes) == 1:
        for end in (skips[:1], skips[-1:]):
            if end and end[0] not in axes[0]:
                raise OutOfBoundsError(end[0], lengths)
        return

    for position in skips:
        if not _in_axes(position, axes):
            raise OutOfBoundsError(position, lengths)


def check_pick_domain(picks: PickDomain, axes: Axes, order: MemoryOrder) -> None:
    """
    Raise ``ShapeMismatchError`` unless ``picks`` enumerates exactly the positions
    of ``axes`` in canonical ``order``.

    Inside ``resolve`` an iterator's own pick domain is built from the axes it
    is checked against; the check fails there only for an iterator passed in
    as a skip set. Through ``check_bounds`` it guards any iterator.
    """
    pick_axes = (picks,) if isinstance(picks, range) else picks.axes
    if tuple(pick_axes) != tuple(axes):
        raise ShapeMismatchError(axis_lengths(pick_axes), axis_lengths(axes))
    if not isinstance(picks, range) and picks.ndim > 1 and picks.order != order:
        raise ShapeMismatchError(
            f"inverted index enumerates positions in {picks.order!r} order, "
            f"but the array enumerates them in {order!r} order"
        )


def check_inverted_index(iterator: InvertedIndexIterator, axes: Axes, order: MemoryOrder) -> None:
    """
    Validate ``iterator`` against the span of array ``axes`` it covers.

    Both checks are eager: a mismatch would otherwise silently skip the wrong
    positions during the merge.
    """
    check_pick_domain(iterator.picks, axes, order)
    check_skips_in_bounds(iterator.skips, axes, order)


def check_bounds(shape: Any, iterator: InvertedIndexIterator) -> None:
    """
    Validate ``iterator`` as the sole index into an array of ``shape``.

    An iterator over linear positions is checked against the array's linear
    positions, any other iterator against the array's axes.

    Raises
    ------
    OutOfBoundsError
        If a skipped position lies outside the array.
    ShapeMismatchError
        If the pick domain does not match the array.
    """
    array_shape = parse_array_shape(shape)
    if isinstance(iterator.picks, range):
        axes: Axes = (array_shape.linear_indices,)
    else:
        axes = array_shape.axes
    check_inverted_index(iterator, axes, array_shape.order)


def is_in_bounds(shape: Any, iterator: InvertedIndexIterator) -> bool:
    try:
        check_bounds(shape, iterator)
    except (OutOfBoundsError, ShapeMismatchError):
        return False
    return True
