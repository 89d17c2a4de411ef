"""Healthcare cost projection for the gap between early retirement and Medicare."""

import math

from ..errors import InvalidParametersError
from ..models.common import Difficulty, RiskLevel
from ..models.healthcare import (
    DEFAULT_MARKETPLACE_PLAN,
    CoverageGap,
    HealthcareFireImpact,
    HealthcareProjectionParams,
    HealthcareProjectionResult,
    HealthcareRecommendation,
    HealthcareYear,
)
from .base import (
    BaseCalculator,
    require_finite,
    require_non_negative,
    require_number,
    require_positive,
    require_positive_int,
)

COBRA_PREMIUM_FACTOR = 1.02
COBRA_OUT_OF_POCKET_SHARE = 0.8
DEDUCTIBLE_USAGE = 0.6
HEALTHCARE_WITHDRAWAL_RATE = 0.04


class HealthcareCostCalculator(BaseCalculator[HealthcareProjectionParams, HealthcareProjectionResult]):
    """Year-by-year bridge coverage costs and their FIRE impact."""

    name = "healthcare_projection"

    def validate(self, params: HealthcareProjectionParams) -> None:
        require_positive_int(params.current_age, "current_age", self.name)
        require_positive_int(params.retirement_age, "retirement_age", self.name)
        require_positive_int(params.medicare_age, "medicare_age", self.name)
        require_non_negative(params.current_healthcare_cost, "current_healthcare_cost", self.name)
        if params.healthcare_inflation_rate is not None:
            require_number(params.healthcare_inflation_rate, "healthcare_inflation_rate", self.name)

        if params.medicare_age <= params.retirement_age:
            raise InvalidParametersError(
                "Retirement age must be before Medicare eligibility age",
                field="retirement_age", rule="before_medicare_age",
                value=params.retirement_age, calculator=self.name
            )

        if params.employer_coverage is not None:
            require_non_negative(params.employer_coverage.monthly_premium,
                                 "employer_coverage.monthly_premium", self.name)
        for index, plan in enumerate(params.marketplace_plans):
            require_non_negative(plan.monthly_premium, f"marketplace_plans[{index}].monthly_premium", self.name)
            require_non_negative(plan.deductible, f"marketplace_plans[{index}].deductible", self.name)
        for index, condition in enumerate(params.chronic_conditions):
            require_non_negative(condition.annual_cost, f"chronic_conditions[{index}].annual_cost", self.name)
        if params.total_fire_number is not None:
            require_positive(params.total_fire_number, "total_fire_number", self.name)

    def compute(self, params: HealthcareProjectionParams) -> HealthcareProjectionResult:
        inflation_rate = (params.healthcare_inflation_rate if params.healthcare_inflation_rate is not None
                          else self.config.fire.healthcare_inflation_rate)
        gap_years = params.medicare_age - params.retirement_age
        marketplace_plan = params.marketplace_plans[0] if params.marketplace_plans else DEFAULT_MARKETPLACE_PLAN

        yearly_breakdown = []
        cumulative_cost = 0.0
        for year in range(gap_years):
            if year == 0 and params.employer_coverage is not None:
                coverage_type = "COBRA"
                monthly_premium = params.employer_coverage.monthly_premium * COBRA_PREMIUM_FACTOR
                out_of_pocket = params.current_healthcare_cost * COBRA_OUT_OF_POCKET_SHARE
            else:
                coverage_type = f"Marketplace {marketplace_plan.plan_type}"
                monthly_premium = marketplace_plan.monthly_premium
                out_of_pocket = marketplace_plan.deductible * DEDUCTIBLE_USAGE

            growth = math.pow(1 + inflation_rate, year)
            monthly_premium *= growth
            out_of_pocket *= growth

            chronic_costs = sum(
                c.annual_cost * math.pow(1 + c.inflation_rate, year)
                for c in params.chronic_conditions
            )

            annual_premium = monthly_premium * 12
            total_annual_cost = annual_premium + out_of_pocket + chronic_costs
            cumulative_cost += total_annual_cost

            yearly_breakdown.append(HealthcareYear(
                age=params.retirement_age + year,
                year=year + 1,
                coverage_type=coverage_type,
                monthly_premium=monthly_premium,
                annual_premium=annual_premium,
                estimated_out_of_pocket=out_of_pocket + chronic_costs,
                total_annual_cost=total_annual_cost,
                cumulative_cost=cumulative_cost,
            ))

        require_finite(cumulative_cost, "total_projected_cost", self.name)

        coverage_gaps = []
        if params.employer_coverage is None:
            coverage_gaps.append(CoverageGap(
                start_age=params.retirement_age,
                end_age=params.medicare_age,
                gap_type="No employer coverage transition",
                estimated_cost=cumulative_cost * 0.2,
                risk_level=RiskLevel.HIGH,
            ))
        if params.chronic_conditions:
            coverage_gaps.append(CoverageGap(
                start_age=params.retirement_age,
                end_age=params.medicare_age,
                gap_type="Chronic condition coverage risk",
                estimated_cost=sum(c.annual_cost for c in params.chronic_conditions) * gap_years * 0.3,
                risk_level=RiskLevel.MEDIUM,
            ))

        recommendations = [
            HealthcareRecommendation(
                category="Health Savings Account",
                recommendation="Maximize HSA contributions before retirement for tax-free healthcare expenses",
                estimated_savings=cumulative_cost * 0.25,
                implementation_difficulty=Difficulty.EASY,
            ),
            HealthcareRecommendation(
                category="Preventive Care",
                recommendation="Invest in preventive care and healthy lifestyle to reduce future costs",
                estimated_savings=cumulative_cost * 0.15,
                implementation_difficulty=Difficulty.MEDIUM,
            ),
        ]
        if len(params.marketplace_plans) > 1:
            recommendations.append(HealthcareRecommendation(
                category="Plan Optimization",
                recommendation="Compare marketplace plans annually and consider bronze plans with HSA",
                estimated_savings=cumulative_cost * 0.1,
                implementation_difficulty=Difficulty.EASY,
            ))
        recommendations.append(HealthcareRecommendation(
            category="Geographic Arbitrage",
            recommendation="Consider relocating to areas with lower healthcare costs",
            estimated_savings=cumulative_cost * 0.2,
            implementation_difficulty=Difficulty.HARD,
        ))

        healthcare_fire_number = cumulative_cost / HEALTHCARE_WITHDRAWAL_RATE
        percentage_of_total = None
        if params.total_fire_number is not None:
            percentage_of_total = healthcare_fire_number / params.total_fire_number * 100

        return HealthcareProjectionResult(
            total_projected_cost=cumulative_cost,
            yearly_breakdown=tuple(yearly_breakdown),
            coverage_gaps=tuple(coverage_gaps),
            recommendations=tuple(recommendations),
            fire_impact=HealthcareFireImpact(
                healthcare_fire_number=healthcare_fire_number,
                percentage_of_total_fire=percentage_of_total,
                monthly_reserve_needed=cumulative_cost / gap_years / 12,
            ),
        )
