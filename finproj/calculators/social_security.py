"""Social Security benefit estimate and retirement stress testing."""

from ..errors import InvalidParametersError
from ..models.common import RiskLevel
from ..models.social_security import (
    DEFAULT_RETIREMENT_SCENARIOS,
    OptimizedStrategy,
    RetirementStressResult,
    RetirementStressScenario,
    SocialSecurityParams,
    SocialSecurityProjection,
    SocialSecurityResult,
)
from .base import (
    BaseCalculator,
    require_finite,
    require_number,
    require_positive,
    require_positive_int,
)

FULL_RETIREMENT_AGE = 67
EARLIEST_CLAIM_AGE = 62
LATEST_CLAIM_AGE = 70

# Simplified two-bracket primary insurance amount
FIRST_BEND_POINT = 1174.0
FIRST_BRACKET_RATE = 0.9
SECOND_BRACKET_RATE = 0.32

EARLY_REDUCTION_PER_MONTH = 0.0055
DELAYED_CREDIT_PER_MONTH = 0.0067
AGE_70_BENEFIT_FACTOR = 1.32
BENEFIT_DISCOUNT_RATE = 1.03
STRESS_WITHDRAWAL_RATE = 0.04

KEY_RISKS = (
    "Market volatility during early retirement",
    "Healthcare cost inflation",
    "Social Security benefit reductions",
    "Longevity risk beyond life expectancy",
)

MITIGATION_STRATEGIES = (
    "Maintain 3-5 years of expenses in bonds/cash",
    "Maximize HSA contributions for healthcare costs",
    "Consider part-time work flexibility (Barista FIRE)",
    "Delay Social Security to age 70 if healthy",
    "Geographic arbitrage for lower living costs",
)


def primary_insurance_amount(annual_income: float) -> float:
    """Monthly benefit at full retirement age from current income."""
    aime = annual_income / 12
    return min(aime * FIRST_BRACKET_RATE,
               FIRST_BEND_POINT * FIRST_BRACKET_RATE + (aime - FIRST_BEND_POINT) * SECOND_BRACKET_RATE)


def claiming_adjustment(start_age: int, full_retirement_age: int = FULL_RETIREMENT_AGE) -> float:
    """Benefit multiplier for claiming before or after full retirement age."""
    if start_age < full_retirement_age:
        return 1 - (full_retirement_age - start_age) * 12 * EARLY_REDUCTION_PER_MONTH
    if start_age > full_retirement_age:
        return 1 + (start_age - full_retirement_age) * 12 * DELAYED_CREDIT_PER_MONTH
    return 1.0


def classify_stress(percentage_increase: float) -> RiskLevel:
    if percentage_increase > 75:
        return RiskLevel.EXTREME
    if percentage_increase > 50:
        return RiskLevel.HIGH
    if percentage_increase > 25:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


class SocialSecurityCalculator(BaseCalculator[SocialSecurityParams, SocialSecurityResult]):
    """Benefit projection plus FIRE number stress scenarios."""

    name = "social_security"

    def validate(self, params: SocialSecurityParams) -> None:
        require_positive_int(params.current_age, "current_age", self.name)
        require_positive_int(params.retirement_age, "retirement_age", self.name)
        require_positive(params.current_income, "current_income", self.name)
        require_positive(params.base_fire_number, "base_fire_number", self.name)
        require_positive_int(params.life_expectancy, "life_expectancy", self.name)

        start_age = params.social_security_start_age
        if start_age is not None:
            require_positive_int(start_age, "social_security_start_age", self.name)
            if not EARLIEST_CLAIM_AGE <= start_age <= LATEST_CLAIM_AGE:
                raise InvalidParametersError(
                    f"social_security_start_age must be between {EARLIEST_CLAIM_AGE} "
                    f"and {LATEST_CLAIM_AGE}, got {start_age}",
                    field="social_security_start_age", rule="claim_window",
                    value=start_age, calculator=self.name
                )

        effective_start = start_age or FULL_RETIREMENT_AGE
        if params.life_expectancy <= effective_start:
            raise InvalidParametersError(
                "life_expectancy must be after the Social Security start age",
                field="life_expectancy", rule="after_start_age",
                value=params.life_expectancy, calculator=self.name
            )

        for index, scenario in enumerate(params.stress_test_scenarios or ()):
            require_number(scenario.market_return_adjustment,
                           f"stress_test_scenarios[{index}].market_return_adjustment", self.name)
            require_number(scenario.social_security_adjustment,
                           f"stress_test_scenarios[{index}].social_security_adjustment", self.name)

    def compute(self, params: SocialSecurityParams) -> SocialSecurityResult:
        start_age = params.social_security_start_age or FULL_RETIREMENT_AGE

        pia = primary_insurance_amount(params.current_income)
        adjustment = claiming_adjustment(start_age)
        estimated_benefit = pia * adjustment
        annual_benefit = estimated_benefit * 12
        years_receiving = params.life_expectancy - start_age
        lifetime_value = annual_benefit * years_receiving

        full_benefit = pia * 12
        delayed_benefit = pia * AGE_70_BENEFIT_FACTOR * 12
        break_even_age = FULL_RETIREMENT_AGE + (full_benefit * 3) / (delayed_benefit - full_benefit)

        present_value = lifetime_value / BENEFIT_DISCOUNT_RATE ** (start_age - params.retirement_age)
        fire_number_reduction = present_value / STRESS_WITHDRAWAL_RATE
        require_finite(fire_number_reduction, "fire_number_reduction", self.name)

        projection = SocialSecurityProjection(
            estimated_benefit=estimated_benefit,
            full_retirement_age=FULL_RETIREMENT_AGE,
            early_retirement_reduction=1 - adjustment if start_age < FULL_RETIREMENT_AGE else 0.0,
            delayed_retirement_credit=adjustment - 1 if start_age > FULL_RETIREMENT_AGE else 0.0,
            break_even_age=break_even_age,
            lifetime_value=lifetime_value,
            fire_number_reduction=fire_number_reduction,
        )

        scenarios = (params.stress_test_scenarios if params.stress_test_scenarios is not None
                     else DEFAULT_RETIREMENT_SCENARIOS)
        results = tuple(
            self._stress_test(scenario, params.base_fire_number, annual_benefit,
                              years_receiving, fire_number_reduction)
            for scenario in scenarios
        )

        return SocialSecurityResult(
            social_security_projection=projection,
            stress_test_results=results,
            optimized_strategy=self._optimized_strategy(results, params, break_even_age),
        )

    def _stress_test(self, scenario: RetirementStressScenario, base_fire_number: float,
                     annual_benefit: float, years_receiving: int,
                     fire_number_reduction: float) -> RetirementStressResult:
        adjusted_rate = max(self.config.fire.minimum_stress_withdrawal_rate,
                            STRESS_WITHDRAWAL_RATE + scenario.market_return_adjustment)

        adjusted_benefit = annual_benefit * (1 + scenario.social_security_adjustment)
        adjusted_reduction = adjusted_benefit * years_receiving / adjusted_rate

        inflation_adjustment = base_fire_number * (scenario.inflation_adjustment
                                                   + scenario.healthcare_inflation_adjustment)
        withdrawal_adjustment = base_fire_number * (scenario.market_return_adjustment / STRESS_WITHDRAWAL_RATE)
        social_security_impact = fire_number_reduction - adjusted_reduction

        total_adjustment = inflation_adjustment + withdrawal_adjustment + social_security_impact
        percentage_increase = total_adjustment / base_fire_number * 100

        recommendations = []
        if scenario.market_return_adjustment < -0.02:
            recommendations.append("Increase bond allocation for stability")
            recommendations.append("Consider dividend-focused investments")
        if scenario.social_security_adjustment < -0.1:
            recommendations.append("Delay Social Security to maximize benefits")
            recommendations.append("Increase personal savings to compensate")
        if scenario.healthcare_inflation_adjustment > 0.03:
            recommendations.append("Maximize HSA contributions")
            recommendations.append("Consider healthcare-focused investments")

        return RetirementStressResult(
            scenario=scenario.name,
            adjusted_fire_number=base_fire_number + total_adjustment,
            social_security_impact=social_security_impact,
            total_adjustment=total_adjustment,
            percentage_increase=percentage_increase,
            risk_level=classify_stress(percentage_increase),
            recommendations=tuple(recommendations),
        )

    def _optimized_strategy(self, results: tuple[RetirementStressResult, ...],
                            params: SocialSecurityParams, break_even_age: float) -> OptimizedStrategy:
        if results:
            average_increase = sum(r.percentage_increase for r in results) / len(results)
            high_risk = sum(1 for r in results if r.risk_level in (RiskLevel.HIGH, RiskLevel.EXTREME))
            confidence = max(0.6, 1 - high_risk / len(results))
        else:
            average_increase = 0.0
            confidence = 1.0

        recommended_age = (LATEST_CLAIM_AGE if break_even_age < params.life_expectancy - 5
                           else FULL_RETIREMENT_AGE)

        return OptimizedStrategy(
            recommended_social_security_age=recommended_age,
            recommended_fire_number=params.base_fire_number * (1 + max(0.15, average_increase / 100)),
            confidence_level=confidence,
            key_risks=KEY_RISKS,
            mitigation_strategies=MITIGATION_STRATEGIES,
        )
