from __future__ import annotations

import itertools
import numbers
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeAlias, TypeVar

import numpy as np

from inverted_indices.core.common import product

if TYPE_CHECKING:
    import numpy.typing as npt

    from inverted_indices.core.common import Axes, MemoryOrder


def _as_coords(position: Any) -> tuple[int, ...] | None:
    if isinstance(position, CartesianIndex):
        return position.indices
    if isinstance(position, numbers.Integral) and not isinstance(position, bool | np.bool_):
        return (int(position),)
    return None


def positions_equal(a: Any, b: Any) -> bool:
    """
    Compare two positions across representations.

    A linear position ``i`` and a rank-1 cartesian position ``CartesianIndex(j)``
    are equal iff ``i == j``. Cartesian positions of different ranks never compare
    equal.
    """
    a_coords = _as_coords(a)
    b_coords = _as_coords(b)
    if a_coords is None or b_coords is None:
        return False
    return a_coords == b_coords


@dataclass(frozen=True, eq=False)
class CartesianIndex:
    """
    A multidimensional position, one integer coordinate per axis.

    Both ``CartesianIndex(1, 2)`` and ``CartesianIndex((1, 2))`` are accepted. A
    ``CartesianIndex`` is deliberately not iterable, so it is never mistaken for a
    collection of linear positions.
    """

    indices: tuple[int, ...]

    def __init__(self, *indices: Any) -> None:
        if len(indices) == 1 and isinstance(indices[0], tuple):
            indices = indices[0]
        object.__setattr__(self, "indices", tuple(int(i) for i in indices))

    @property
    def ndim(self) -> int:
        return len(self.indices)

    def __eq__(self, other: object) -> bool:
        if _as_coords(other) is None:
            return NotImplemented
        return positions_equal(self, other)

    def __hash__(self) -> int:
        # hash like the equivalent linear position so that mixed sets deduplicate
        if len(self.indices) == 1:
            return hash(self.indices[0])
        return hash(self.indices)

    def __repr__(self) -> str:
        return f"CartesianIndex({', '.join(str(i) for i in self.indices)})"


Position: TypeAlias = int | CartesianIndex


def sort_key(order: MemoryOrder) -> Callable[[Position], tuple[int, ...]]:
    """
    Total order over positions consistent with the enumeration order of
    ``CartesianIndices``: lexicographic for "C", reverse lexicographic for "F".
    """

    def key(position: Position) -> tuple[int, ...]:
        coords = _as_coords(position)
        if coords is None:
            raise TypeError(f"Expected an integer or CartesianIndex, got {position!r}")
        return coords if order == "C" else coords[::-1]

    return key


@dataclass(frozen=True)
class CartesianIndices:
    """
    The cartesian product of a tuple of axes, enumerated in ``order``.

    With zero axes this is the domain of a zero-dimensional array, holding the
    single position ``CartesianIndex()``.
    """

    axes: Axes
    order: MemoryOrder = "C"

    def __init__(self, axes: Axes, order: MemoryOrder = "C") -> None:
        object.__setattr__(self, "axes", tuple(axes))
        object.__setattr__(self, "order", order)

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(len(ax) for ax in self.axes)

    @property
    def ndim(self) -> int:
        return len(self.axes)

    def __len__(self) -> int:
        return product(self.shape)

    def __iter__(self) -> Iterator[CartesianIndex]:
        if self.order == "C":
            for idx in itertools.product(*self.axes):
                yield CartesianIndex(idx)
        else:
            for idx in itertools.product(*reversed(self.axes)):
                yield CartesianIndex(idx[::-1])

    def __contains__(self, position: object) -> bool:
        coords = _as_coords(position)
        if coords is None or len(coords) != self.ndim:
            return False
        return all(c in ax for c, ax in zip(coords, self.axes, strict=True))


T = TypeVar("T")


@dataclass(frozen=True)
class ZeroDArray(Generic[T]):
    """A zero-dimensional container holding exactly one value."""

    x: T

    shape = ()
    ndim = 0

    def __len__(self) -> int:
        return 1

    def __iter__(self) -> Iterator[T]:
        yield self.x

    def __getitem__(self, key: tuple[()]) -> T:
        if key != ():
            raise IndexError(f"ZeroDArray only supports the empty index (), got {key!r}")
        return self.x


@dataclass(frozen=True, eq=False)
class LogicalIndex:
    """
    Lazy view over the True positions of a Boolean mask.

    A 1-dimensional mask yields linear positions; masks of any other rank
    yield ``CartesianIndex`` positions in ``order``.
    """

    mask: npt.NDArray[np.bool_]
    order: MemoryOrder = "C"

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self.mask.shape)

    @property
    def ndim(self) -> int:
        return self.mask.ndim

    def __len__(self) -> int:
        return int(np.count_nonzero(self.mask))

    def __iter__(self) -> Iterator[Position]:
        if self.mask.ndim == 1:
            for i in np.flatnonzero(self.mask):
                yield int(i)
            return
        if self.order == "C":
            coords = np.argwhere(self.mask)
        else:
            coords = np.argwhere(self.mask.T)[:, ::-1]
        for row in coords:
            yield CartesianIndex(tuple(row.tolist()))
