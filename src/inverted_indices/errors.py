__all__ = [
    "AmbiguousSelectorKindError",
    "NegativeStepError",
    "OutOfBoundsError",
    "ShapeMismatchError",
]


class _BaseInvertedIndexError(IndexError):
    """
    Base error which all inverted index errors are sub-classed from.

    Subclasses are ``IndexError`` instances, so code indexing an array and
    catching ``IndexError`` keeps working.
    """

    _msg: str = "{}"

    def __init__(self, *args: object) -> None:
        """
        If a single argument is passed, treat it as a pre-formatted message.

        If multiple arguments are passed, they are used as arguments for the template
        string class variable.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))


class OutOfBoundsError(_BaseInvertedIndexError):
    """Raised when a skipped position lies outside the array."""

    _msg = "index {0!r} out of bounds for axes with lengths {1}"


class ShapeMismatchError(_BaseInvertedIndexError):
    """
    Raised when the domain an inverted index walks does not match the axes
    of the array it is applied to.
    """

    _msg = "inverted index spans axes with lengths {0}, but the array has lengths {1}"


class AmbiguousSelectorKindError(_BaseInvertedIndexError):
    """
    Raised when a collection of positions mixes linear and cartesian
    positions, or cartesian positions of different ranks.
    """

    _msg = "cannot determine the rank of skip selector {0!r}; found ranks {1}"


class NegativeStepError(IndexError):
    def __init__(self) -> None:
        super().__init__("only slices with step >= 1 are supported")
