"""Tests for early-retirement healthcare projections."""

import pytest

from finproj.calculators import HealthcareCostCalculator
from finproj.errors import InvalidParametersError
from finproj.models.common import RiskLevel
from finproj.models.healthcare import (
    ChronicCondition,
    EmployerCoverage,
    HealthcareProjectionParams,
    MarketplacePlan,
)


def _params(**overrides) -> HealthcareProjectionParams:
    values = dict(current_age=45, retirement_age=55, current_healthcare_cost=6000.0)
    values.update(overrides)
    return HealthcareProjectionParams(**values)


class TestHealthcareProjection:
    """Test the year-by-year projection."""

    def test_cobra_then_marketplace(self):
        """Employer coverage bridges the first year through COBRA."""
        result = HealthcareCostCalculator().calculate(_params(
            employer_coverage=EmployerCoverage(monthly_premium=600),
        ))
        first, second = result.yearly_breakdown[:2]

        assert first.coverage_type == "COBRA"
        assert first.monthly_premium == pytest.approx(612.0)
        assert first.total_annual_cost == pytest.approx(612.0 * 12 + 4800.0)

        assert second.coverage_type == "Marketplace silver"
        assert second.monthly_premium == pytest.approx(800 * 1.06)
        assert second.total_annual_cost == pytest.approx(800 * 1.06 * 12 + 3000 * 1.06)

    def test_one_row_per_gap_year(self):
        result = HealthcareCostCalculator().calculate(_params())
        rows = result.yearly_breakdown

        assert len(rows) == 10
        assert [row.age for row in rows] == list(range(55, 65))
        assert rows[-1].cumulative_cost == pytest.approx(result.total_projected_cost)
        assert result.fire_impact.healthcare_fire_number == pytest.approx(result.total_projected_cost / 0.04)
        assert result.fire_impact.monthly_reserve_needed == pytest.approx(result.total_projected_cost / 120)

    def test_first_marketplace_plan_used(self):
        bronze = MarketplacePlan("bronze", 400, 7000, 9000)
        result = HealthcareCostCalculator().calculate(_params(
            marketplace_plans=(bronze, MarketplacePlan("gold", 900, 1500, 4000)),
        ))
        assert result.yearly_breakdown[0].coverage_type == "Marketplace bronze"
        assert result.yearly_breakdown[0].monthly_premium == pytest.approx(400)
        assert any(r.category == "Plan Optimization" for r in result.recommendations)

    def test_chronic_conditions_add_cost_and_gap(self):
        base = HealthcareCostCalculator().calculate(_params())
        chronic = HealthcareCostCalculator().calculate(_params(
            chronic_conditions=(ChronicCondition("diabetes", 2000, 0.05),),
        ))

        extra = sum(2000 * 1.05 ** year for year in range(10))
        assert chronic.total_projected_cost == pytest.approx(base.total_projected_cost + extra)
        assert [g.gap_type for g in chronic.coverage_gaps] == [
            "No employer coverage transition", "Chronic condition coverage risk",
        ]
        assert chronic.coverage_gaps[1].risk_level == RiskLevel.MEDIUM

    def test_coverage_gap_without_employer(self):
        without = HealthcareCostCalculator().calculate(_params())
        assert without.coverage_gaps[0].risk_level == RiskLevel.HIGH

        with_employer = HealthcareCostCalculator().calculate(_params(
            employer_coverage=EmployerCoverage(monthly_premium=600),
        ))
        assert with_employer.coverage_gaps == ()

    def test_share_of_total_fire_number(self):
        """Share is only reported against a known total."""
        assert HealthcareCostCalculator().calculate(_params()).fire_impact.percentage_of_total_fire is None

        result = HealthcareCostCalculator().calculate(_params(total_fire_number=2_000_000))
        impact = result.fire_impact
        assert impact.percentage_of_total_fire == pytest.approx(impact.healthcare_fire_number / 2_000_000 * 100)


class TestHealthcareValidation:
    """Test parameter validation."""

    def test_retirement_after_medicare(self):
        with pytest.raises(InvalidParametersError) as exc_info:
            HealthcareCostCalculator().calculate(_params(retirement_age=66))
        assert exc_info.value.rule == "before_medicare_age"

    def test_negative_cost(self):
        with pytest.raises(InvalidParametersError) as exc_info:
            HealthcareCostCalculator().calculate(_params(current_healthcare_cost=-1))
        assert exc_info.value.field == "current_healthcare_cost"
