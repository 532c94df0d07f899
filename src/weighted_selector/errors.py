"""Exceptions raised by weighted selectors.

Each error also derives from the builtin a caller would naturally expect, so
``except ValueError`` around an ``add`` keeps working.
"""


class SelectorError(Exception):
    """Base class for all selector errors."""


class InvalidArgumentError(SelectorError, ValueError):
    """An element, weight or constructor argument was rejected."""


class EmptyCollectionError(SelectorError, LookupError):
    """A draw was requested from a selector with no entries."""


class InconsistentStateError(SelectorError, RuntimeError):
    """The block walk failed to pick an entry.

    Either the weight accounting has drifted or the random source returned a
    value outside ``[0, total)``. Never retried.
    """


class ConcurrentModificationError(SelectorError, RuntimeError):
    """The selector was mutated while an iterator over it was live."""
