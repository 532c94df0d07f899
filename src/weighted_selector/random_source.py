"""Construction of the random-bound functions selectors draw from."""

import random
from collections.abc import Callable

from weighted_selector.errors import InvalidArgumentError

RandomBound = Callable[[int], int]


def make_random_bound(
    random_bound: RandomBound | random.Random | None = None,
    seed: int | None = None,
) -> RandomBound:
    """Return a function mapping ``n`` to a uniform integer in ``[0, n)``.

    ``random_bound`` may be such a function already, or a ``random.Random``
    whose ``randrange`` is used. With only a ``seed`` a private generator is
    seeded from it; with neither a private unseeded generator is created, so
    selectors never share the module-level stream by accident.
    """
    if random_bound is not None and seed is not None:
        raise InvalidArgumentError("Pass either a random source or a seed, not both")

    if random_bound is None:
        return random.Random(seed).randrange

    if isinstance(random_bound, random.Random):
        return random_bound.randrange

    if not callable(random_bound):
        msg = f"Random source must be callable, got {type(random_bound).__name__}"
        raise InvalidArgumentError(msg)

    return random_bound
