from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import numpy as np

from inverted_indices.core.positions import CartesianIndices, Position

if TYPE_CHECKING:
    import numpy.typing as npt

    from inverted_indices.core.common import Axes


class SkipCollection(Protocol):
    """A finite collection of positions, iterated in canonical order."""

    def __len__(self) -> int: ...

    def __iter__(self) -> Iterator[Position]: ...


PickDomain = range | CartesianIndices

_EXHAUSTED = object()


@dataclass(frozen=True, eq=False)
class InvertedIndexIterator:
    """
    The positions of ``picks`` that are not in ``skips``.

    Both ``picks`` and ``skips`` must enumerate their positions in the same
    canonical order, and ``skips`` must be a duplicate-free subset of ``picks``;
    ``resolve`` guarantees both before constructing an iterator. The iterator
    is a forward-only view: each call to ``iter`` starts a fresh traversal, and
    positional lookup is not supported.
    """

    skips: SkipCollection
    picks: PickDomain

    @property
    def ndim(self) -> int:
        """Rank of the positions this iterator yields."""
        if isinstance(self.picks, range):
            return 1
        return self.picks.ndim

    @property
    def axes(self) -> Axes:
        """The axes spanned by the pick domain."""
        if isinstance(self.picks, range):
            return (self.picks,)
        return self.picks.axes

    @property
    def shape(self) -> tuple[int]:
        return (len(self),)

    def __len__(self) -> int:
        return len(self.picks) - len(self.skips)

    def __iter__(self) -> Iterator[Position]:
        skips = iter(self.skips)
        skip = next(skips, _EXHAUSTED)
        for pick in self.picks:
            if skip is not _EXHAUSTED and skip == pick:
                skip = next(skips, _EXHAUSTED)
                continue
            yield pick

    def collect(self) -> list[Position]:
        return list(self)

    def __array__(self, dtype: npt.DTypeLike | None = None, copy: bool | None = None) -> np.ndarray:
        if dtype is None:
            dtype = np.intp
        if isinstance(self.picks, range):
            return np.fromiter(self, dtype=dtype, count=len(self))
        out = np.empty((len(self), self.ndim), dtype=dtype)
        for i, position in enumerate(self):
            out[i] = position.indices
        return out

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.collect()!r})"
