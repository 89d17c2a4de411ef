"""Tests for time-value-of-money and sample statistics primitives."""

import math

import pytest

from finproj.errors import InvalidParametersError
from finproj.utils.numeric import (
    effective_annual_rate,
    future_value_of_annuity,
    future_value_of_lump_sum,
    loan_payment,
    normal_random,
    percentile,
    periods_to_target,
    present_value,
    required_periodic_payment,
    sample_moments,
)


class TestFutureValue:
    """Test lump sum and annuity growth."""

    def test_lump_sum_monthly_compounding(self) -> None:
        """1000 at 5% compounded monthly for 10 years grows to about 1647.01."""
        assert future_value_of_lump_sum(1000, 0.05 / 12, 120) == pytest.approx(1647.01, abs=0.01)

    def test_zero_periods_returns_principal(self) -> None:
        """No periods means no growth."""
        assert future_value_of_lump_sum(1000, 0.05, 0) == 1000

    def test_negative_periods_rejected(self) -> None:
        """Negative periods raise with the field named."""
        with pytest.raises(InvalidParametersError) as exc_info:
            future_value_of_lump_sum(1000, 0.05, -1)
        assert exc_info.value.field == "periods"
        assert exc_info.value.rule == "non_negative"

    def test_zero_rate_annuity_is_payment_times_periods(self) -> None:
        """A zero rate annuity degrades to simple accumulation."""
        assert future_value_of_annuity(100, 0.0, 12) == 1200
        assert future_value_of_annuity(100, 0.0, 12, timing="beginning") == 1200

    def test_ordinary_annuity(self) -> None:
        """Ordinary annuity matches the closed form."""
        expected = 100 * ((1.01 ** 12) - 1) / 0.01
        assert future_value_of_annuity(100, 0.01, 12) == pytest.approx(expected)

    def test_annuity_due_earns_one_extra_period(self) -> None:
        """Beginning-of-period payments earn one more period of interest."""
        end = future_value_of_annuity(100, 0.01, 12, timing="end")
        beginning = future_value_of_annuity(100, 0.01, 12, timing="beginning")
        assert beginning == pytest.approx(end * 1.01)

    def test_unknown_timing_rejected(self) -> None:
        """Timing must be end or beginning."""
        with pytest.raises(InvalidParametersError) as exc_info:
            future_value_of_annuity(100, 0.01, 12, timing="middle")
        assert exc_info.value.rule == "enum"


class TestRates:
    """Test rate conversions."""

    def test_effective_annual_rate(self) -> None:
        """5% nominal compounded monthly is about 5.116% effective."""
        assert effective_annual_rate(0.05, 12) == pytest.approx(0.0511619, abs=1e-6)

    def test_effective_annual_rate_annual_compounding(self) -> None:
        """Annual compounding leaves the rate unchanged."""
        assert effective_annual_rate(0.05, 1) == pytest.approx(0.05)

    def test_effective_annual_rate_requires_positive_periods(self) -> None:
        with pytest.raises(InvalidParametersError):
            effective_annual_rate(0.05, 0)

    def test_present_value(self) -> None:
        assert present_value(1100, 0.1, 1) == pytest.approx(1000)


class TestPaymentSolvers:
    """Test payment and period solvers."""

    def test_required_payment_inverts_annuity(self) -> None:
        """Paying the required amount accumulates exactly the target."""
        payment = required_periodic_payment(10000, 0.005, 60)
        assert future_value_of_annuity(payment, 0.005, 60) == pytest.approx(10000)

    def test_required_payment_zero_rate(self) -> None:
        assert required_periodic_payment(1200, 0.0, 12) == 100

    def test_required_payment_rejects_zero_periods(self) -> None:
        with pytest.raises(InvalidParametersError):
            required_periodic_payment(1200, 0.01, 0)

    def test_loan_payment_amortizes_balance(self) -> None:
        """The level payment retires the principal exactly."""
        payment = loan_payment(10000, 0.01, 24)
        balance = 10000.0
        for _ in range(24):
            balance = balance * 1.01 - payment
        assert balance == pytest.approx(0.0, abs=1e-6)

    def test_loan_payment_zero_rate(self) -> None:
        assert loan_payment(10000, 0.0, 10) == 1000

    def test_periods_to_target_already_met(self) -> None:
        assert periods_to_target(5000, 100, 1000, 0.01) == 0.0

    def test_periods_to_target_zero_rate(self) -> None:
        assert periods_to_target(0, 100, 1000, 0.0) == 10

    def test_periods_to_target_unreachable(self) -> None:
        assert periods_to_target(0, 0, 1000, 0.0) == math.inf

    def test_periods_to_target_with_growth(self) -> None:
        """Solved period count reproduces the target."""
        periods = periods_to_target(1000, 100, 10000, 0.005)
        value = future_value_of_lump_sum(1000, 0.005, periods) + future_value_of_annuity(100, 0.005, periods)
        assert value == pytest.approx(10000)


class TestPercentile:
    """Test linear interpolation percentile."""

    def test_empty_sequence(self) -> None:
        assert percentile([], 50) == 0.0

    def test_bounds(self) -> None:
        values = [1, 2, 3, 4, 5]
        assert percentile(values, 0) == 1
        assert percentile(values, -5) == 1
        assert percentile(values, 100) == 5
        assert percentile(values, 150) == 5

    def test_exact_index(self) -> None:
        values = [1, 2, 3, 4, 5]
        assert percentile(values, 50) == 3
        assert percentile(values, 25) == 2

    def test_interpolates_between_neighbors(self) -> None:
        """10th percentile of five values sits 40% of the way from 1 to 2."""
        assert percentile([1, 2, 3, 4, 5], 10) == pytest.approx(1.4)


class TestNormalRandom:
    """Test Box-Muller sampling."""

    def test_scripted_draws(self) -> None:
        """u = e^-0.5 and v = 0.5 map to exactly one standard deviation below the mean."""
        draws = iter([math.exp(-0.5), 0.5])
        assert normal_random(10.0, 2.0, draws.__next__) == pytest.approx(8.0)

    def test_zero_draws_rejected(self) -> None:
        """Zero uniforms are skipped so log(0) never happens."""
        draws = iter([0.0, 0.5, 0.0, 0.25])
        assert normal_random(10.0, 1.0, draws.__next__) == pytest.approx(10.0, abs=1e-9)

    def test_negative_std_dev_rejected(self) -> None:
        with pytest.raises(InvalidParametersError):
            normal_random(0.0, -1.0)


class TestSampleMoments:
    """Test population moments."""

    def test_mean_and_std_dev(self) -> None:
        mean, std_dev, _, _ = sample_moments([2, 4, 4, 4, 5, 5, 7, 9])
        assert mean == pytest.approx(5.0)
        assert std_dev == pytest.approx(2.0)

    def test_symmetric_sample_has_zero_skew(self) -> None:
        _, _, skewness, _ = sample_moments([1, 2, 3])
        assert skewness == pytest.approx(0.0, abs=1e-12)

    def test_degenerate_sample(self) -> None:
        """Zero variance yields zero shape statistics instead of dividing by zero."""
        assert sample_moments([3, 3, 3]) == (3.0, 0.0, 0.0, 0.0)

    def test_empty_sample(self) -> None:
        assert sample_moments([]) == (0.0, 0.0, 0.0, 0.0)
