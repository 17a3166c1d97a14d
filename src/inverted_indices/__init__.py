from inverted_indices.api import InvertedIndex, Not, ensure_indexable, invert, resolve
from inverted_indices.core.bounds import check_bounds, is_in_bounds
from inverted_indices.core.config import config
from inverted_indices.core.iterator import InvertedIndexIterator
from inverted_indices.core.positions import CartesianIndex, CartesianIndices, LogicalIndex
from inverted_indices.core.shape import ArrayShape
from inverted_indices.errors import (
    AmbiguousSelectorKindError,
    NegativeStepError,
    OutOfBoundsError,
    ShapeMismatchError,
)
from inverted_indices.version import version as __version__

__all__ = [
    "AmbiguousSelectorKindError",
    "ArrayShape",
    "CartesianIndex",
    "CartesianIndices",
    "InvertedIndex",
    "InvertedIndexIterator",
    "LogicalIndex",
    "NegativeStepError",
    "Not",
    "OutOfBoundsError",
    "ShapeMismatchError",
    "__version__",
    "check_bounds",
    "config",
    "ensure_indexable",
    "invert",
    "is_in_bounds",
    "resolve",
]
