from __future__ import annotations

import functools
import operator
from collections.abc import Iterable
from typing import Any, Literal, TypeAlias, cast

ShapeLike: TypeAlias = tuple[int, ...] | int
Axes: TypeAlias = tuple[range, ...]
MemoryOrder = Literal["C", "F"]


def product(tup: Iterable[int]) -> int:
    return functools.reduce(operator.mul, tup, 1)


def parse_shapelike(data: Any) -> tuple[int, ...]:
    if isinstance(data, int):
        if data < 0:
            raise ValueError(f"Expected a non-negative integer. Got {data} instead")
        return (data,)
    try:
        data_tuple = tuple(int(v) if hasattr(v, "__index__") else v for v in data)
    except TypeError as e:
        msg = f"Expected an integer or an iterable of integers. Got {data} instead."
        raise TypeError(msg) from e

    if not all(isinstance(v, int) for v in data_tuple):
        msg = f"Expected an iterable of integers. Got {data} instead."
        raise TypeError(msg)
    if not all(v > -1 for v in data_tuple):
        msg = f"Expected all values to be non-negative. Got {data} instead."
        raise ValueError(msg)
    return data_tuple


def parse_order(data: Any) -> MemoryOrder:
    if data in ("C", "F"):
        return cast("MemoryOrder", data)
    raise ValueError(f"Expected one of ('C', 'F'), got {data} instead.")


def parse_bool(data: Any) -> bool:
    if isinstance(data, bool):
        return data
    raise ValueError(f"Expected bool, got {data} instead.")


def axis_lengths(axes: Axes) -> tuple[int, ...]:
    return tuple(len(ax) for ax in axes)
