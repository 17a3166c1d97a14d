from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from inverted_indices.core.indexing import resolve
from inverted_indices.core.iterator import InvertedIndexIterator
from inverted_indices.core.positions import LogicalIndex
from inverted_indices.core.selectors import InvertedIndex, Not

if TYPE_CHECKING:
    from inverted_indices.core.common import MemoryOrder

__all__ = ["InvertedIndex", "Not", "ensure_indexable", "invert", "resolve"]


def invert(shape: Any, skip: Any, *, order: MemoryOrder | None = None) -> InvertedIndexIterator:
    """
    The positions of an array of ``shape`` that are not in ``skip``.

    Shorthand for ``resolve(shape, Not(skip))[0]``.

    Examples
    --------
    >>> list(invert(5, [1, 3]))
    [0, 2, 4]
    """
    (iterator,) = resolve(shape, (InvertedIndex(skip),), order=order)
    return iterator


def ensure_indexable(indices: tuple[Any, ...]) -> tuple[Any, ...]:
    """
    Materialize the lazy members of a resolved index so that array libraries
    can consume it.

    An ``InvertedIndexIterator`` becomes an integer array: 1-D for linear or
    single-axis positions, ``(n, rank)`` for cartesian positions. A
    ``LogicalIndex`` becomes its Boolean mask. Everything else is passed through.
    """
    return tuple(
        np.asarray(index)
        if isinstance(index, InvertedIndexIterator)
        else index.mask
        if isinstance(index, LogicalIndex)
        else index
        for index in indices
    )
