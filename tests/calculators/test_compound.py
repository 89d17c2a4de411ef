"""Tests for deterministic compound growth."""

import pytest

from finproj.calculators import CompoundInterestCalculator
from finproj.errors import ComputationFailureError, InvalidParametersError
from finproj.models.compound import CompoundInterestParams, ContributionTiming


@pytest.fixture
def calculator() -> CompoundInterestCalculator:
    return CompoundInterestCalculator()


class TestCompoundGrowth:
    """Test future value math."""

    def test_lump_sum(self, calculator: CompoundInterestCalculator) -> None:
        """1000 at 5% compounded monthly for 10 years is about 1647.01."""
        result = calculator.calculate(CompoundInterestParams(1000, 0.05, 12, 10))

        assert result.future_value == pytest.approx(1647.01, abs=0.01)
        assert result.total_contributions == 0.0
        assert result.total_interest_earned == pytest.approx(647.01, abs=0.01)
        assert result.effective_annual_rate == pytest.approx(0.0511619, abs=1e-6)

    def test_zero_rate_contributions(self, calculator: CompoundInterestCalculator) -> None:
        """Without interest the future value is principal plus contributions."""
        result = calculator.calculate(CompoundInterestParams(
            principal=1000, annual_rate=0.0, compounding_frequency=12, time_in_years=1, contribution=100,
        ))

        assert result.future_value == pytest.approx(2200.0)
        assert result.total_contributions == pytest.approx(1200.0)
        assert result.total_interest_earned == pytest.approx(0.0)

    def test_contributions_spread_over_compounding_periods(self, calculator: CompoundInterestCalculator) -> None:
        """Monthly contributions with quarterly compounding deposit three months per period."""
        result = calculator.calculate(CompoundInterestParams(
            principal=0, annual_rate=0.0, compounding_frequency=4, time_in_years=2,
            contribution=50, contribution_frequency=12,
        ))
        assert result.future_value == pytest.approx(1200.0)

    def test_beginning_timing_earns_more(self, calculator: CompoundInterestCalculator) -> None:
        end = calculator.calculate(CompoundInterestParams(0, 0.06, 12, 5, contribution=200))
        beginning = calculator.calculate(CompoundInterestParams(
            0, 0.06, 12, 5, contribution=200, contribution_timing=ContributionTiming.BEGINNING,
        ))
        assert beginning.future_value == pytest.approx(end.future_value * 1.005)

    def test_breakdown_sums_to_interest(self, calculator: CompoundInterestCalculator) -> None:
        result = calculator.calculate(CompoundInterestParams(5000, 0.07, 12, 20, contribution=300))
        breakdown = result.breakdown
        assert breakdown.principal_growth + breakdown.contribution_growth == pytest.approx(
            result.total_interest_earned)


class TestCompoundValidation:
    """Test parameter validation."""

    @pytest.mark.parametrize("field,overrides,rule", [
        ("principal", {"principal": -1}, "non_negative"),
        ("annual_rate", {"annual_rate": -0.01}, "non_negative"),
        ("compounding_frequency", {"compounding_frequency": 0}, "positive"),
        ("time_in_years", {"time_in_years": 0}, "positive"),
        ("contribution", {"contribution": -5}, "non_negative"),
        ("principal", {"principal": float("nan")}, "number"),
        ("principal", {"principal": True}, "number"),
        ("contribution_timing", {"contribution_timing": "middle"}, "enum"),
    ])
    def test_invalid_parameters(self, calculator, field, overrides, rule) -> None:
        """Each violated invariant names its field and rule."""
        values = {"principal": 1000, "annual_rate": 0.05, "compounding_frequency": 12, "time_in_years": 10}
        values.update(overrides)

        with pytest.raises(InvalidParametersError) as exc_info:
            calculator.calculate(CompoundInterestParams(**values))

        assert exc_info.value.field == field
        assert exc_info.value.rule == rule
        assert exc_info.value.calculator == "compound_interest"

    def test_overflow_becomes_computation_failure(self, calculator) -> None:
        """Arithmetic overflow is wrapped with the original cause chained."""
        with pytest.raises(ComputationFailureError) as exc_info:
            calculator.calculate(CompoundInterestParams(1e300, 10.0, 1, 1000))

        assert isinstance(exc_info.value.__cause__, OverflowError)
        assert exc_info.value.stage == "compute"
