"""Package initialization for weighted-selector.

Weighted random selection over a dynamic set of elements, each carrying a
positive integer probability share.
"""

from weighted_selector.errors import (
    ConcurrentModificationError,
    EmptyCollectionError,
    InconsistentStateError,
    InvalidArgumentError,
    SelectorError,
)
from weighted_selector.random_source import RandomBound, make_random_bound
from weighted_selector.selector import Entry, PrefixSumSelector, WeightedSelector
from weighted_selector.stats import ChiSquaredResult, chi_squared_test

__version__ = "0.1.0"
__all__ = [
    "ChiSquaredResult",
    "ConcurrentModificationError",
    "EmptyCollectionError",
    "Entry",
    "InconsistentStateError",
    "InvalidArgumentError",
    "PrefixSumSelector",
    "RandomBound",
    "SelectorError",
    "WeightedSelector",
    "chi_squared_test",
    "make_random_bound",
]
