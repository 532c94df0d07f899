"""Tests for the chi-squared conformance helpers."""

import pytest

from weighted_selector import (
    ChiSquaredResult,
    EmptyCollectionError,
    InvalidArgumentError,
    PrefixSumSelector,
    WeightedSelector,
    chi_squared_test,
)


def test_perfect_fit_passes() -> None:
    """Observed counts equal to expected give chi2 of 0 and p of 1."""
    result = chi_squared_test([25, 75], [25.0, 75.0])
    assert result.chi_squared == pytest.approx(0.0)
    assert result.p_value == pytest.approx(1.0)
    assert result.degrees_of_freedom == 1
    assert result.passes()


def test_gross_misfit_fails() -> None:
    """Counts far from the expectation are rejected."""
    result = chi_squared_test([1000, 0], [500.0, 500.0])
    assert result.chi_squared == pytest.approx(1000.0)
    assert not result.passes(0.001)


def test_passes_threshold() -> None:
    """passes compares the p-value against alpha."""
    result = ChiSquaredResult(chi_squared=3.0, p_value=0.01, degrees_of_freedom=2)
    assert result.passes(0.01)
    assert result.passes(0.001)
    assert not result.passes(0.05)


def test_mismatched_lengths_rejected() -> None:
    """Observed and expected must line up."""
    with pytest.raises(InvalidArgumentError):
        chi_squared_test([1, 2, 3], [1.0, 2.0])


def test_single_category_rejected() -> None:
    """One category has no degrees of freedom."""
    with pytest.raises(InvalidArgumentError):
        chi_squared_test([10], [10.0])


@pytest.mark.parametrize("cls", [WeightedSelector, PrefixSumSelector])
def test_selector_distribution_fits(cls: type) -> None:
    """A seeded selector's draws fit its weights."""
    selector = cls(seed=17)
    selector.add("a", 1)
    selector.add("b", 2)
    selector.add("a", 3)
    result = selector.test_distribution(30000)
    assert result.degrees_of_freedom == 2
    assert result.passes(1e-6)


def test_biased_source_is_caught() -> None:
    """A source that never reaches the last block fails the check."""
    selector: WeightedSelector[str] = WeightedSelector(lambda n: 0)
    selector.add("a", 1)
    selector.add("b", 1)
    assert not selector.test_distribution(1000).passes(0.001)


def test_distribution_needs_two_entries() -> None:
    """Empty and single-entry selectors cannot be tested."""
    selector: WeightedSelector[str] = WeightedSelector()
    with pytest.raises(EmptyCollectionError):
        selector.test_distribution()
    selector.add("a", 1)
    with pytest.raises(InvalidArgumentError):
        selector.test_distribution()


def test_distribution_needs_samples() -> None:
    """A non-positive sample count is rejected."""
    selector: WeightedSelector[str] = WeightedSelector()
    selector.add("a", 1)
    selector.add("b", 1)
    with pytest.raises(InvalidArgumentError):
        selector.test_distribution(0)
