"""Tests for Social Security estimates and retirement stress testing."""

import pytest

from finproj.calculators import SocialSecurityCalculator
from finproj.calculators.social_security import claiming_adjustment, primary_insurance_amount
from finproj.errors import InvalidParametersError
from finproj.models.common import RiskLevel
from finproj.models.social_security import RetirementStressScenario, SocialSecurityParams


def _params(**overrides) -> SocialSecurityParams:
    values = dict(current_age=40, current_income=60000.0, retirement_age=55, base_fire_number=1_000_000.0)
    values.update(overrides)
    return SocialSecurityParams(**values)


class TestBenefitFormula:
    """Test the benefit helpers."""

    def test_primary_insurance_amount(self):
        """Two-bracket formula above the bend point."""
        assert primary_insurance_amount(60000) == pytest.approx(1174 * 0.9 + (5000 - 1174) * 0.32)

    def test_low_income_uses_first_bracket(self):
        assert primary_insurance_amount(12000) == pytest.approx(900.0)

    def test_claiming_adjustment(self):
        assert claiming_adjustment(62) == pytest.approx(0.67)
        assert claiming_adjustment(67) == 1.0
        assert claiming_adjustment(70) == pytest.approx(1.2412)


class TestSocialSecurityProjection:
    """Test the projection."""

    def test_full_retirement_age_claim(self):
        result = SocialSecurityCalculator().calculate(_params())
        projection = result.social_security_projection
        pia = primary_insurance_amount(60000)

        assert projection.estimated_benefit == pytest.approx(pia)
        assert projection.full_retirement_age == 67
        assert projection.lifetime_value == pytest.approx(pia * 12 * 18)
        assert projection.break_even_age == pytest.approx(67 + 3 / 0.32)
        assert projection.early_retirement_reduction == 0.0
        assert projection.delayed_retirement_credit == 0.0

    def test_early_claim_reduction(self):
        projection = SocialSecurityCalculator().calculate(
            _params(social_security_start_age=62)).social_security_projection
        assert projection.early_retirement_reduction == pytest.approx(0.33)

    def test_delayed_claim_credit(self):
        projection = SocialSecurityCalculator().calculate(
            _params(social_security_start_age=70)).social_security_projection
        assert projection.delayed_retirement_credit == pytest.approx(0.2412)

    def test_default_scenarios(self):
        result = SocialSecurityCalculator().calculate(_params())
        names = [r.scenario for r in result.stress_test_results]
        assert names == ["Market Crash", "High Inflation", "Social Security Cuts",
                         "Healthcare Crisis", "Perfect Storm"]

        crash = result.stress_test_results[0]
        assert crash.recommendations == (
            "Increase bond allocation for stability",
            "Consider dividend-focused investments",
        )

    def test_neutral_scenario_leaves_number_unchanged(self):
        """With no shocks and retirement at claim age the number does not move."""
        result = SocialSecurityCalculator().calculate(_params(
            retirement_age=67,
            stress_test_scenarios=(RetirementStressScenario("Flat", 0.0, 0.0, 0.0, 0.0),),
        ))
        flat = result.stress_test_results[0]

        assert flat.adjusted_fire_number == pytest.approx(1_000_000)
        assert flat.percentage_increase == pytest.approx(0.0, abs=1e-9)
        assert flat.risk_level == RiskLevel.LOW

    def test_optimized_strategy(self):
        strategy = SocialSecurityCalculator().calculate(_params()).optimized_strategy
        assert strategy.recommended_social_security_age == 70
        assert 0.6 <= strategy.confidence_level <= 1.0
        assert strategy.recommended_fire_number >= 1_150_000

    def test_no_scenarios_full_confidence(self):
        strategy = SocialSecurityCalculator().calculate(
            _params(stress_test_scenarios=())).optimized_strategy
        assert strategy.confidence_level == 1.0
        assert strategy.recommended_fire_number == pytest.approx(1_150_000)


class TestSocialSecurityValidation:
    """Test parameter validation."""

    @pytest.mark.parametrize("age", [61, 71])
    def test_claim_window(self, age):
        with pytest.raises(InvalidParametersError) as exc_info:
            SocialSecurityCalculator().calculate(_params(social_security_start_age=age))
        assert exc_info.value.rule == "claim_window"

    def test_life_expectancy_after_claim(self):
        with pytest.raises(InvalidParametersError) as exc_info:
            SocialSecurityCalculator().calculate(_params(life_expectancy=66))
        assert exc_info.value.rule == "after_start_age"

    @pytest.mark.parametrize("field", ["current_income", "base_fire_number"])
    def test_positive_amounts(self, field):
        with pytest.raises(InvalidParametersError) as exc_info:
            SocialSecurityCalculator().calculate(_params(**{field: 0}))
        assert exc_info.value.field == field
