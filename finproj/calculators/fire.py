"""
FIRE target numbers.

``FireNumberCalculator`` turns an expense profile into the base FIRE number
and its lean/fat/coast/barista variants, with optional healthcare and
Social Security adjustments and scenario stress tests.
``ExpenseBasedFireCalculator`` builds the number bottom-up from categories
with geographic cost-of-living multipliers.
"""

import math
from typing import Optional

from ..errors import InvalidParametersError
from ..models.common import Difficulty, Priority, Recommendation, RiskLevel
from ..models.fire import (
    DEFAULT_STRESS_SCENARIOS,
    CategoryProjection,
    ExpenseBasedFireParams,
    ExpenseBasedFireResult,
    ExpenseBreakdownRow,
    ExpenseCategory,
    FireNumberParams,
    FireNumberResult,
    GeographicAdjustment,
    HealthcareCostEstimate,
    HealthcareProfile,
    InflationImpact,
    OptimizationSuggestion,
    SocialSecurityImpact,
    SocialSecurityProfile,
    StressTestResult,
)
from ..utils.numeric import present_value
from .base import (
    BaseCalculator,
    require_finite,
    require_non_negative,
    require_number,
    require_positive,
    require_positive_int,
)

# Policy constants, not user-tunable
LEAN_EXPENSE_FACTOR = 0.7
FAT_EXPENSE_FACTOR = 2.0
COAST_FACTOR = 0.6
BARISTA_FACTOR = 0.5
SAFE_WITHDRAWAL_RATE = 0.04
RECOMMENDED_SAFETY_MARGIN = 0.1
HEALTHCARE_IMPACT_ESTIMATE = 50000.0
HIGH_IMPACT_CONTRIBUTION = 100000.0

GEOGRAPHIC_SENSITIVITY = {
    "housing": 1.2,
    "food": 0.8,
    "transportation": 0.9,
    "healthcare": 1.1,
    "utilities": 0.95,
    "entertainment": 0.85,
}

# category -> (suggestion, share of contribution saved, difficulty)
CATEGORY_SAVINGS_RULES = {
    "housing": ("Consider house hacking, downsizing, or relocating to a lower cost area",
                0.3, Difficulty.HARD),
    "transportation": ("Optimize transportation costs with public transit, biking, or car sharing",
                       0.4, Difficulty.MEDIUM),
    "food": ("Meal planning, cooking at home, and bulk buying can reduce food costs",
             0.25, Difficulty.EASY),
    "entertainment": ("Find free or low-cost entertainment alternatives",
                      0.5, Difficulty.EASY),
    "utilities": ("Energy efficiency improvements and usage optimization",
                  0.2, Difficulty.MEDIUM),
}
DEFAULT_SAVINGS_SHARE = 0.15


def category_savings_rule(category: str) -> tuple[str, float, Difficulty]:
    """Suggestion text, savings share and difficulty for a spending category."""
    rule = CATEGORY_SAVINGS_RULES.get(category.lower())
    if rule is not None:
        return rule
    return (f"Review {category} expenses for optimization opportunities",
            DEFAULT_SAVINGS_SHARE, Difficulty.MEDIUM)


def classify_increase(percentage_increase: float) -> RiskLevel:
    if percentage_increase > 50:
        return RiskLevel.HIGH
    if percentage_increase > 25:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def _validate_withdrawal_rate(rate: Optional[float], calculator: str) -> None:
    if rate is None:
        return
    require_positive(rate, "withdrawal_rate", calculator)
    if rate > 1:
        raise InvalidParametersError(
            f"withdrawal_rate must not exceed 1, got {rate}",
            field="withdrawal_rate", rule="at_most_one", value=rate, calculator=calculator
        )


def _validate_categories(categories: tuple[ExpenseCategory, ...], calculator: str) -> None:
    for index, category in enumerate(categories):
        require_non_negative(category.monthly_amount,
                             f"expense_categories[{index}].monthly_amount", calculator)
        require_number(category.inflation_rate,
                       f"expense_categories[{index}].inflation_rate", calculator)


class FireNumberCalculator(BaseCalculator[FireNumberParams, FireNumberResult]):
    """Expense profile to FIRE target numbers."""

    name = "fire_number"

    def validate(self, params: FireNumberParams) -> None:
        require_non_negative(params.monthly_expenses, "monthly_expenses", self.name)
        if params.annual_expenses is not None:
            require_non_negative(params.annual_expenses, "annual_expenses", self.name)

        if params.monthly_expenses <= 0 and not params.annual_expenses:
            raise InvalidParametersError(
                "Monthly or annual expenses must be provided and greater than 0",
                field="monthly_expenses", rule="positive",
                value=params.monthly_expenses, calculator=self.name
            )

        _validate_withdrawal_rate(params.withdrawal_rate, self.name)
        require_non_negative(params.safety_margin, "safety_margin", self.name)
        require_positive(params.cost_of_living_multiplier, "cost_of_living_multiplier", self.name)
        _validate_categories(params.expense_categories, self.name)

        if params.healthcare is not None:
            hc = params.healthcare
            require_non_negative(hc.monthly_premium, "healthcare.monthly_premium", self.name)
            require_non_negative(hc.annual_deductible, "healthcare.annual_deductible", self.name)
            if hc.inflation_rate is not None:
                require_number(hc.inflation_rate, "healthcare.inflation_rate", self.name)
            if hc.coverage_gap_years is not None:
                require_positive_int(hc.coverage_gap_years, "healthcare.coverage_gap_years", self.name)

        if params.social_security is not None:
            ss = params.social_security
            require_non_negative(ss.estimated_monthly_benefit,
                                 "social_security.estimated_monthly_benefit", self.name)
            require_positive_int(ss.start_age, "social_security.start_age", self.name)
            if ss.retirement_age is not None:
                require_positive_int(ss.retirement_age, "social_security.retirement_age", self.name)

        for index, scenario in enumerate(params.stress_test_scenarios or ()):
            require_number(scenario.market_return_adjustment,
                           f"stress_test_scenarios[{index}].market_return_adjustment", self.name)
            require_number(scenario.expense_adjustment,
                           f"stress_test_scenarios[{index}].expense_adjustment", self.name)

    def compute(self, params: FireNumberParams) -> FireNumberResult:
        annual_expenses = params.annual_expenses or params.monthly_expenses * 12
        withdrawal_rate = params.withdrawal_rate or self.config.fire.withdrawal_rate
        safety_margin = params.safety_margin
        col_multiplier = params.cost_of_living_multiplier

        base_fire_number = annual_expenses / withdrawal_rate
        adjusted_fire_number = base_fire_number * col_multiplier * (1 + safety_margin)
        require_finite(adjusted_fire_number, "adjusted_fire_number", self.name)

        healthcare_costs = None
        if params.healthcare is not None:
            healthcare_costs = self._healthcare_costs(params.healthcare)

        social_security_impact = None
        if params.social_security is not None:
            social_security_impact = self._social_security_impact(params.social_security, withdrawal_rate)

        scenarios = (params.stress_test_scenarios if params.stress_test_scenarios is not None
                     else DEFAULT_STRESS_SCENARIOS)
        stress_test_results = tuple(
            self._stress_test(scenario, annual_expenses, withdrawal_rate, base_fire_number)
            for scenario in scenarios
        )

        recommendations = []
        if withdrawal_rate > SAFE_WITHDRAWAL_RATE:
            recommendations.append(Recommendation(
                category="Withdrawal Rate",
                suggestion="Consider reducing withdrawal rate to 4% or lower for increased safety",
                impact=adjusted_fire_number * 0.25,
                priority=Priority.HIGH,
            ))
        if params.healthcare is None:
            recommendations.append(Recommendation(
                category="Healthcare",
                suggestion="Include healthcare cost projections for more accurate FIRE planning",
                impact=HEALTHCARE_IMPACT_ESTIMATE,
                priority=Priority.HIGH,
            ))
        if safety_margin < RECOMMENDED_SAFETY_MARGIN:
            recommendations.append(Recommendation(
                category="Safety Margin",
                suggestion="Consider adding 10-20% safety margin for unexpected expenses",
                impact=base_fire_number * 0.15,
                priority=Priority.MEDIUM,
            ))

        if params.expense_categories:
            expense_breakdown = tuple(
                ExpenseBreakdownRow(
                    category=c.category,
                    monthly_amount=c.monthly_amount,
                    annual_amount=c.monthly_amount * 12,
                    inflation_rate=c.inflation_rate,
                    fire_contribution=c.monthly_amount * 12 / withdrawal_rate,
                    essential=c.essential,
                )
                for c in params.expense_categories
            )
        else:
            expense_breakdown = (ExpenseBreakdownRow(
                category="Total Expenses",
                monthly_amount=annual_expenses / 12,
                annual_amount=annual_expenses,
                inflation_rate=0.03,
                fire_contribution=base_fire_number,
                essential=True,
            ),)

        return FireNumberResult(
            fire_number=adjusted_fire_number,
            lean_fire_number=annual_expenses * LEAN_EXPENSE_FACTOR / withdrawal_rate,
            fat_fire_number=annual_expenses * FAT_EXPENSE_FACTOR / withdrawal_rate,
            coast_fire_number=base_fire_number * COAST_FACTOR,
            barista_fire_number=base_fire_number * BARISTA_FACTOR,
            annual_expenses=annual_expenses,
            withdrawal_rate=withdrawal_rate,
            safety_margin=safety_margin,
            cost_of_living_adjustment=col_multiplier,
            adjusted_fire_number=adjusted_fire_number,
            healthcare_costs=healthcare_costs,
            social_security_impact=social_security_impact,
            stress_test_results=stress_test_results,
            recommendations=tuple(recommendations),
            expense_breakdown=expense_breakdown,
        )

    def _healthcare_costs(self, profile: HealthcareProfile) -> HealthcareCostEstimate:
        """Bridge-period cost, inflated to the midpoint of the coverage gap."""
        annual_cost = profile.monthly_premium * 12 + profile.annual_deductible
        inflation_rate = (profile.inflation_rate if profile.inflation_rate is not None
                          else self.config.fire.healthcare_inflation_rate)
        gap_years = profile.coverage_gap_years or self.config.fire.coverage_gap_years

        inflation_adjusted_cost = annual_cost * math.pow(1 + inflation_rate, gap_years / 2)
        return HealthcareCostEstimate(
            annual_cost=annual_cost,
            inflation_adjusted_cost=inflation_adjusted_cost,
            coverage_gap_years=gap_years,
            total_gap_cost=inflation_adjusted_cost * gap_years,
        )

    def _social_security_impact(self, profile: SocialSecurityProfile,
                                withdrawal_rate: float) -> SocialSecurityImpact:
        annual_benefit = profile.estimated_monthly_benefit * 12
        retirement_age = profile.retirement_age or self.config.fire.social_security_retirement_age
        years_until_benefit = max(0, profile.start_age - retirement_age)

        pv = present_value(annual_benefit, self.config.fire.social_security_discount_rate,
                           years_until_benefit)
        return SocialSecurityImpact(
            annual_benefit=annual_benefit,
            present_value=pv,
            fire_number_reduction=pv / withdrawal_rate,
        )

    def _stress_test(self, scenario, annual_expenses: float, withdrawal_rate: float,
                     base_fire_number: float) -> StressTestResult:
        adjusted_rate = max(self.config.fire.minimum_stress_withdrawal_rate,
                            withdrawal_rate + scenario.market_return_adjustment)
        adjusted_expenses = annual_expenses * (1 + scenario.expense_adjustment)
        scenario_fire_number = adjusted_expenses / adjusted_rate
        percentage_increase = (scenario_fire_number - base_fire_number) / base_fire_number * 100

        return StressTestResult(
            scenario=scenario.name,
            adjusted_fire_number=scenario_fire_number,
            percentage_increase=percentage_increase,
            risk_level=classify_increase(percentage_increase),
        )


class ExpenseBasedFireCalculator(BaseCalculator[ExpenseBasedFireParams, ExpenseBasedFireResult]):
    """Category-level FIRE number with geographic and inflation adjustments."""

    name = "expense_based_fire"

    def validate(self, params: ExpenseBasedFireParams) -> None:
        if not params.expense_categories:
            raise InvalidParametersError(
                "At least one expense category must be provided",
                field="expense_categories", rule="non_empty",
                value=params.expense_categories, calculator=self.name
            )
        _validate_categories(params.expense_categories, self.name)
        require_positive(params.cost_of_living_index, "cost_of_living_index", self.name)
        _validate_withdrawal_rate(params.withdrawal_rate, self.name)
        if not isinstance(params.projection_years, int) or params.projection_years < 0:
            raise InvalidParametersError(
                f"projection_years must be a non-negative integer, got {params.projection_years!r}",
                field="projection_years", rule="non_negative_integer",
                value=params.projection_years, calculator=self.name
            )

    def compute(self, params: ExpenseBasedFireParams) -> ExpenseBasedFireResult:
        withdrawal_rate = params.withdrawal_rate or self.config.fire.withdrawal_rate
        index = params.cost_of_living_index

        breakdown = []
        for category in params.expense_categories:
            multiplier = 1.0
            if category.geographic_sensitive:
                multiplier = index * GEOGRAPHIC_SENSITIVITY.get(category.category.lower(), 1.0)

            current_annual = category.monthly_amount * multiplier * 12
            projected_annual = current_annual * math.pow(1 + category.inflation_rate,
                                                         params.projection_years)
            breakdown.append(CategoryProjection(
                category=category.category,
                current_annual=current_annual,
                projected_annual=projected_annual,
                fire_contribution=projected_annual / withdrawal_rate,
                essential=category.essential,
                geographic_adjustment=multiplier,
            ))

        current_total = sum(c.current_annual for c in breakdown)
        projected_total = sum(c.projected_annual for c in breakdown)
        total_fire_number = sum(c.fire_contribution for c in breakdown)
        require_finite(total_fire_number, "total_fire_number", self.name)

        suggestions = []
        for projection in breakdown:
            if projection.essential and projection.fire_contribution <= HIGH_IMPACT_CONTRIBUTION:
                continue
            suggestion, share, difficulty = category_savings_rule(projection.category)
            suggestions.append(OptimizationSuggestion(
                category=projection.category,
                suggestion=suggestion,
                potential_savings=projection.fire_contribution * share,
                difficulty=difficulty,
            ))
        suggestions.sort(key=lambda s: s.potential_savings, reverse=True)

        return ExpenseBasedFireResult(
            total_fire_number=total_fire_number,
            category_breakdown=tuple(breakdown),
            geographic_adjustments=GeographicAdjustment(
                location=params.geographic_location or "Unknown",
                cost_of_living_index=index,
                total_adjustment=index,
                adjusted_fire_number=total_fire_number,
            ),
            inflation_impact=InflationImpact(
                current_total=current_total,
                projected_total=projected_total,
                inflation_increase=projected_total - current_total,
                fire_number_increase=(projected_total - current_total) / withdrawal_rate,
            ),
            optimization_suggestions=tuple(suggestions),
        )
