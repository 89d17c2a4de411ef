"""Tests for the Monte Carlo simulator."""

import numpy as np
import pytest

from finproj.calculators import MonteCarloSimulator
from finproj.errors import InvalidParametersError
from finproj.models.monte_carlo import PERCENTILES, MonteCarloParams
from finproj.utils.numeric import future_value_of_lump_sum


class _ConstantSource:
    """Random source that always returns the mean and counts calls."""

    def __init__(self) -> None:
        self.calls = 0

    def normal(self, mean: float, std_dev: float, size: int) -> np.ndarray:
        self.calls += 1
        return np.full(size, mean)


def _params(**overrides) -> MonteCarloParams:
    values = dict(initial_value=100000.0, monthly_contribution=0.0, years_to_project=10,
                  expected_return=0.07, volatility=0.15, iterations=500, seed=42)
    values.update(overrides)
    return MonteCarloParams(**values)


class TestMonteCarloDeterminism:
    """Test seeding and injected sources."""

    def test_seeded_runs_are_identical(self):
        """The same seed reproduces the same result exactly."""
        simulator = MonteCarloSimulator()
        assert simulator.calculate(_params()) == simulator.calculate(_params())

    def test_different_seeds_differ(self):
        simulator = MonteCarloSimulator()
        first = simulator.calculate(_params(seed=1))
        second = simulator.calculate(_params(seed=2))
        assert first.statistics.mean != second.statistics.mean

    def test_injected_source_used_without_seed(self):
        """One draw per simulated month across all paths."""
        source = _ConstantSource()
        simulator = MonteCarloSimulator(random_source=source)
        simulator.calculate(_params(seed=None, years_to_project=2))
        assert source.calls == 24

    def test_zero_volatility_matches_compound_growth(self):
        """Without volatility every path follows the deterministic curve."""
        result = MonteCarloSimulator().calculate(_params(volatility=0.0, years_to_project=5))
        expected = future_value_of_lump_sum(100000.0, 0.07 / 12, 60)

        assert result.statistics.median == pytest.approx(expected, rel=1e-9)
        assert result.statistics.standard_deviation == pytest.approx(0.0, abs=1e-6)
        assert result.statistics.probability_of_loss == 0.0


class TestMonteCarloDistribution:
    """Test distribution outputs."""

    def test_mean_converges_to_expected_growth(self):
        """With many paths the sample mean approaches the compounded expected return."""
        result = MonteCarloSimulator().calculate(_params(iterations=5000))
        expected = future_value_of_lump_sum(100000.0, 0.07 / 12, 120)
        assert result.statistics.mean == pytest.approx(expected, rel=0.05)

    def test_percentiles_are_ordered(self):
        result = MonteCarloSimulator().calculate(_params())
        values = [p.final_value for p in result.projections]

        assert [p.percentile for p in result.projections] == list(PERCENTILES)
        assert values == sorted(values)

    def test_confidence_bands_nest(self):
        bands = MonteCarloSimulator().calculate(_params()).confidence_intervals
        assert bands.p90.min <= bands.p80.min <= bands.p50.min
        assert bands.p50.max <= bands.p80.max <= bands.p90.max

    def test_real_values_deflated(self):
        result = MonteCarloSimulator().calculate(_params(inflation_rate=0.03))
        for projection in result.projections:
            assert projection.real_value == pytest.approx(projection.final_value / 1.03 ** 10)

    def test_yearly_projections(self):
        result = MonteCarloSimulator().calculate(_params(years_to_project=4))
        assert [y.year for y in result.yearly_projections] == [1, 2, 3, 4]
        final_median = next(p.final_value for p in result.projections if p.percentile == 50)
        assert result.yearly_projections[-1].percentiles.p50 == pytest.approx(final_median)

    def test_values_never_negative(self):
        """Paths are floored at zero even under extreme volatility."""
        result = MonteCarloSimulator().calculate(_params(volatility=3.0))
        assert result.projections[0].final_value >= 0.0

    def test_total_contributed_and_target_probability(self):
        result = MonteCarloSimulator().calculate(_params(
            monthly_contribution=500.0, years_to_project=2, target_value=0.0,
        ))
        assert result.total_contributed == pytest.approx(100000.0 + 500.0 * 24)
        assert result.statistics.probability_of_target == 1.0

    def test_unreachable_target(self):
        result = MonteCarloSimulator().calculate(_params(target_value=1e15))
        assert result.statistics.probability_of_target == 0.0

    def test_target_probability_absent_without_target(self):
        assert MonteCarloSimulator().calculate(_params()).statistics.probability_of_target is None

    def test_default_iterations_from_config(self):
        result = MonteCarloSimulator().calculate(_params(iterations=None, years_to_project=1))
        assert result.iterations == 1000


class TestMonteCarloValidation:
    """Test parameter validation."""

    @pytest.mark.parametrize("overrides,field", [
        ({"years_to_project": 0}, "years_to_project"),
        ({"iterations": 0}, "iterations"),
        ({"volatility": -0.1}, "volatility"),
        ({"initial_value": -1.0}, "initial_value"),
        ({"expected_return": float("nan")}, "expected_return"),
    ])
    def test_invalid_parameters(self, overrides, field):
        with pytest.raises(InvalidParametersError) as exc_info:
            MonteCarloSimulator().calculate(_params(**overrides))
        assert exc_info.value.field == field
