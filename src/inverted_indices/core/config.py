"""
The config module manages the runtime configuration of inverted_indices and is
based on the Donfig python library.

Example:
    The canonical enumeration order of cartesian domains defaults to row-major
    ("C"). Switch to column-major programmatically::

        from inverted_indices.core.config import config

        config.set({"order": "F"})

    or with the environment variable ``INVERTED_INDICES_ORDER=F``. Nested keys
    use a double underscore ``__``.

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from donfig import Config as DConfig

from inverted_indices.core.common import parse_bool, parse_order

if TYPE_CHECKING:
    from inverted_indices.core.common import MemoryOrder

logger = logging.getLogger(__name__)


class BadConfigError(ValueError):
    _msg = "bad Config: %r"


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "INVERTED_INDICES_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for inverted_indices
config = Config(
    "inverted_indices",
    defaults=[
        {
            "order": "C",
            "wraparound": True,
        }
    ],
)


def get_order(order: MemoryOrder | None = None) -> MemoryOrder:
    """Return ``order`` if given, else the configured canonical enumeration order."""
    if order is None:
        order = config.get("order")
        logger.debug("No order given, using configured order %r", order)
    return parse_order(order)


def get_wraparound() -> bool:
    value = config.get("wraparound")
    try:
        return parse_bool(value)
    except ValueError as e:
        raise BadConfigError(f"Invalid value for 'wraparound': {e}") from e
