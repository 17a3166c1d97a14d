"""Test errors"""

from inverted_indices.errors import (
    AmbiguousSelectorKindError,
    NegativeStepError,
    OutOfBoundsError,
    ShapeMismatchError,
)


def test_out_of_bounds_error() -> None:
    err = OutOfBoundsError(10, (5,))
    assert isinstance(err, IndexError)
    assert str(err) == "index 10 out of bounds for axes with lengths (5,)"


def test_shape_mismatch_error() -> None:
    err = ShapeMismatchError((4,), (5,))
    assert isinstance(err, IndexError)
    assert str(err) == "inverted index spans axes with lengths (4,), but the array has lengths (5,)"


def test_pre_formatted_message() -> None:
    """
    Test that a single argument is used as the message as-is.
    """
    assert str(ShapeMismatchError("mask has the wrong shape")) == "mask has the wrong shape"


def test_ambiguous_selector_kind_error() -> None:
    err = AmbiguousSelectorKindError([1, (0, 1)], [1, 2])
    assert isinstance(err, IndexError)
    assert str(err) == "cannot determine the rank of skip selector [1, (0, 1)]; found ranks [1, 2]"


def test_negative_step_error() -> None:
    assert str(NegativeStepError()) == "only slices with step >= 1 are supported"
