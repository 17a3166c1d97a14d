from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from inverted_indices.core.common import parse_shapelike, product
from inverted_indices.core.config import get_order
from inverted_indices.core.positions import CartesianIndex, CartesianIndices, _as_coords

if TYPE_CHECKING:
    from inverted_indices.core.common import Axes, MemoryOrder


@dataclass(frozen=True)
class ArrayShape:
    """
    The view of an array that index resolution needs: its axes, its rank and its
    canonical enumeration of positions, linear and cartesian.

    Parameters
    ----------
    shape : int or tuple of int
        Length of each axis.
    order : {"C", "F"}, optional
        Canonical enumeration order of cartesian positions. Defaults to the
        configured ``order``.
    """

    shape: tuple[int, ...]
    order: MemoryOrder

    def __init__(self, shape: Any, order: MemoryOrder | None = None) -> None:
        object.__setattr__(self, "shape", parse_shapelike(shape))
        object.__setattr__(self, "order", get_order(order))

    @property
    def ndim(self) -> int:
        return len(self.shape)

    @property
    def size(self) -> int:
        return product(self.shape)

    @property
    def axes(self) -> Axes:
        return tuple(range(n) for n in self.shape)

    @property
    def linear_indices(self) -> range:
        return range(self.size)

    @property
    def cartesian_indices(self) -> CartesianIndices:
        return CartesianIndices(self.axes, self.order)

    def in_bounds(self, position: Any) -> bool:
        """
        True if ``position`` is a valid linear position, or a cartesian position
        with one in-range coordinate per axis.
        """
        coords = _as_coords(position)
        if coords is None:
            return False
        if isinstance(position, CartesianIndex):
            return position in self.cartesian_indices
        return coords[0] in self.linear_indices


def parse_array_shape(data: Any, order: MemoryOrder | None = None) -> ArrayShape:
    """
    Accept an ``ArrayShape``, anything exposing a ``shape`` attribute (e.g. a
    NumPy array), or a plain shape.
    """
    if isinstance(data, ArrayShape):
        if order is None or order == data.order:
            return data
        return ArrayShape(data.shape, order)
    if hasattr(data, "shape"):
        return ArrayShape(data.shape, order)
    return ArrayShape(data, order)
