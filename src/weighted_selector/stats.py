"""Chi-squared conformance checks for selector draws."""

from collections.abc import Sequence
from dataclasses import dataclass

from scipy.stats import chisquare

from weighted_selector.errors import InvalidArgumentError


@dataclass(frozen=True)
class ChiSquaredResult:
    """Outcome of a goodness-of-fit test of observed draws against weights."""

    chi_squared: float
    p_value: float
    degrees_of_freedom: int

    def passes(self, alpha: float = 0.05) -> bool:
        """Whether the fit is not rejected at significance level ``alpha``."""
        return self.p_value >= alpha


def chi_squared_test(
    observed: Sequence[int], expected: Sequence[float]
) -> ChiSquaredResult:
    """Compare per-entry observed counts with expected counts."""
    if len(observed) != len(expected):
        msg = f"Got {len(observed)} observed counts but {len(expected)} expected"
        raise InvalidArgumentError(msg)
    if len(observed) < 2:
        raise InvalidArgumentError("Chi-squared test needs at least two categories")

    statistic, p_value = chisquare(observed, expected)
    return ChiSquaredResult(
        chi_squared=float(statistic),
        p_value=float(p_value),
        degrees_of_freedom=len(observed) - 1,
    )
