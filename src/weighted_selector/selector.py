"""Weighted random selection over a dynamic, insertion-ordered set of entries.

Every entry owns a "block" of the integer range ``[0, total)`` sized by its
weight. Blocks are laid out back to back in insertion order, so with entries
``a:1, b:3, c:2`` the blocks are ``[0, 1)``, ``[1, 4)`` and ``[4, 6)``. A draw
picks a uniform integer in ``[0, total)`` and returns the element whose block
contains it, which makes the chance of each entry ``weight / total``.

Neither selector does any locking. Callers sharing one between threads must
serialise every call themselves.
"""

import logging
import operator
import random
from bisect import bisect_right
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from weighted_selector.errors import (
    ConcurrentModificationError,
    EmptyCollectionError,
    InconsistentStateError,
    InvalidArgumentError,
)
from weighted_selector.random_source import RandomBound, make_random_bound
from weighted_selector.stats import ChiSquaredResult, chi_squared_test

logger = logging.getLogger(__name__)

E = TypeVar("E")


@dataclass(frozen=True)
class Entry(Generic[E]):
    """An element together with its probability share."""

    element: E
    weight: int

    def __iter__(self) -> Iterator[Any]:
        # Lets ``for element, weight in selector`` unpack entries.
        yield self.element
        yield self.weight


def _check_element(element: object, action: str) -> None:
    if element is None:
        raise InvalidArgumentError(f"Cannot {action} a None element")


def _check_weight(weight: object) -> None:
    if isinstance(weight, bool) or not isinstance(weight, int):
        msg = f"Weight must be an int, got {type(weight).__name__}"
        raise InvalidArgumentError(msg)
    if weight <= 0:
        raise InvalidArgumentError(f"Weight must be greater than 0, got {weight}")


class WeightedSelector(Generic[E]):
    """Weighted random selector with O(1) insertion and O(n) draws.

    Args:
        random_bound: Function mapping ``n`` to a uniform integer in
            ``[0, n)``, or a ``random.Random`` to draw from. Held by this
            instance only.
        seed: Seed for a private default generator. Mutually exclusive with
            ``random_bound``. With neither, an unseeded private generator is
            used.

    Duplicate elements are allowed and keep independent weights. ``remove``
    drops every entry equal to its argument.
    """

    def __init__(
        self,
        random_bound: RandomBound | random.Random | None = None,
        *,
        seed: int | None = None,
    ) -> None:
        self._random_bound = make_random_bound(random_bound, seed)
        self._entries: list[Entry[E]] = []
        self._total = 0
        self._modifications = 0

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add(self, element: E, weight: int) -> None:
        """Append ``element`` with probability share ``weight``.

        Raises:
            InvalidArgumentError: ``element`` is None or ``weight`` is not a
                positive int. Nothing is changed in that case.
        """
        _check_element(element, "add")
        _check_weight(weight)
        self._append(Entry(element, weight))
        self._modifications += 1

    def remove(self, element: E) -> bool:
        """Remove every entry whose element equals ``element``.

        Returns True if at least one entry was removed.
        """
        _check_element(element, "remove")

        kept: list[Entry[E]] = []
        dropped_weight = 0
        for entry in self._entries:
            if entry.element == element:
                dropped_weight += entry.weight
            else:
                kept.append(entry)

        removed = len(self._entries) - len(kept)
        if not removed:
            return False

        self._replace_entries(kept, self._total - dropped_weight)
        self._modifications += 1
        logger.debug(
            "Removed %d entries of %r (weight %d), total now %d",
            removed,
            element,
            dropped_weight,
            self._total,
        )
        return True

    def clear(self) -> None:
        """Remove all entries and reset the total weight to 0."""
        logger.debug("Clearing %d entries", len(self._entries))
        self._replace_entries([], 0)
        self._modifications += 1

    def _append(self, entry: Entry[E]) -> None:
        self._entries.append(entry)
        self._total += entry.weight

    def _replace_entries(self, entries: list[Entry[E]], total: int) -> None:
        self._entries = entries
        self._total = total

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def contains(self, element: E) -> bool:
        """Whether any entry's element equals ``element``."""
        _check_element(element, "look up")
        return any(entry.element == element for entry in self._entries)

    def __contains__(self, element: object) -> bool:
        return self.contains(element)  # type: ignore[arg-type]

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def total_probability(self) -> int:
        """Sum of the weights of all entries."""
        return self._total

    def __iter__(self) -> Iterator[Entry[E]]:
        """Iterate over entries in insertion order.

        Mutating the selector while the iterator is live makes it raise
        ConcurrentModificationError on its next step.
        """
        return self._iter_entries(self._modifications)

    def _iter_entries(self, expected: int) -> Iterator[Entry[E]]:
        for entry in self._entries:
            self._check_unmodified(expected)
            yield entry
        self._check_unmodified(expected)

    def _check_unmodified(self, expected: int) -> None:
        if self._modifications != expected:
            msg = "Selector was modified during iteration"
            raise ConcurrentModificationError(msg)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{e.element!r}: {e.weight}" for e in self._entries)
        return f"{type(self).__name__}({{{pairs}}}, total={self._total})"

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def get(self) -> E:
        """Draw an element with probability ``weight / total_probability()``.

        Consumes exactly one value from the random source.

        Raises:
            EmptyCollectionError: The selector has no entries.
            InconsistentStateError: The random source returned a value outside
                ``[0, total)`` or no block contained it.
        """
        if not self._entries:
            raise EmptyCollectionError("Cannot get an element from an empty selector")
        point = self._random_bound(self._total)
        return self._entries[self._checked_index(point)].element

    def select(self, point: int) -> E:
        """Return the element whose block contains ``point``.

        This is ``get`` with the random draw supplied by the caller, so
        ``point`` must lie in ``[0, total_probability())``.
        """
        if not self._entries:
            raise EmptyCollectionError("Cannot select from an empty selector")
        _check_point(point, self._total)
        return self._entries[self._checked_index(point)].element

    def _checked_index(self, point: int) -> int:
        try:
            point = operator.index(point)
        except TypeError:
            logger.error("Random source returned non-integer %r", point)
            raise InconsistentStateError(
                f"Random source returned non-integer {point!r}"
            ) from None
        if not 0 <= point < self._total:
            logger.error(
                "Random source returned %d outside [0, %d)", point, self._total
            )
            raise InconsistentStateError(
                f"Random source returned {point}, expected a value in "
                f"[0, {self._total})"
            )
        return self._locate(point)

    def _locate(self, point: int) -> int:
        cursor = 0
        for index, entry in enumerate(self._entries):
            cursor += entry.weight
            if point < cursor:
                return index
        logger.error("No block contains %d (total %d)", point, self._total)
        raise InconsistentStateError(f"Failed to find a block containing {point}")

    def test_distribution(self, num_samples: int = 10000) -> ChiSquaredResult:
        """Draw ``num_samples`` times and chi-squared test the counts.

        Counts are kept per entry rather than per element, so duplicate
        elements are tested against their own weights. Draws come from this
        selector's random source and advance it.
        """
        if not self._entries:
            msg = "Cannot test the distribution of an empty selector"
            raise EmptyCollectionError(msg)
        if len(self._entries) < 2:
            raise InvalidArgumentError("Distribution test needs at least two entries")
        if num_samples <= 0:
            raise InvalidArgumentError(
                f"num_samples must be greater than 0, got {num_samples}"
            )

        observed = [0] * len(self._entries)
        for _ in range(num_samples):
            observed[self._checked_index(self._random_bound(self._total))] += 1

        expected = [num_samples * e.weight / self._total for e in self._entries]
        return chi_squared_test(observed, expected)


def _check_point(point: object, total: int) -> None:
    if isinstance(point, bool) or not isinstance(point, int):
        msg = f"Point must be an int, got {type(point).__name__}"
        raise InvalidArgumentError(msg)
    if not 0 <= point < total:
        raise InvalidArgumentError(f"Point {point} is outside [0, {total})")


class PrefixSumSelector(WeightedSelector[E]):
    """WeightedSelector variant with O(log n) draws.

    Keeps a running list of cumulative weights alongside the entries and
    binary searches it. Adding stays O(1); removing rebuilds the sums in O(n).
    For the same history and the same point it selects exactly what
    WeightedSelector would.
    """

    def __init__(
        self,
        random_bound: RandomBound | random.Random | None = None,
        *,
        seed: int | None = None,
    ) -> None:
        super().__init__(random_bound, seed=seed)
        self._prefix_sums: list[int] = []

    def _append(self, entry: Entry[E]) -> None:
        super()._append(entry)
        self._prefix_sums.append(self._total)

    def _replace_entries(self, entries: list[Entry[E]], total: int) -> None:
        super()._replace_entries(entries, total)
        prefix_sums = []
        cursor = 0
        for entry in entries:
            cursor += entry.weight
            prefix_sums.append(cursor)
        self._prefix_sums = prefix_sums

    def _locate(self, point: int) -> int:
        index = bisect_right(self._prefix_sums, point)
        if index >= len(self._entries):
            logger.error("No block contains %d (total %d)", point, self._total)
            raise InconsistentStateError(f"Failed to find a block containing {point}")
        return index
