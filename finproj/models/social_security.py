"""Social Security estimate and FIRE stress-test parameters and results."""

from dataclasses import dataclass
from typing import Optional

from .common import RiskLevel


@dataclass(frozen=True)
class RetirementStressScenario:
    name: str
    market_return_adjustment: float
    inflation_adjustment: float
    social_security_adjustment: float
    healthcare_inflation_adjustment: float


DEFAULT_RETIREMENT_SCENARIOS = (
    RetirementStressScenario("Market Crash", -0.03, 0.02, -0.10, 0.02),
    RetirementStressScenario("High Inflation", -0.01, 0.04, 0.02, 0.03),
    RetirementStressScenario("Social Security Cuts", 0.0, 0.01, -0.25, 0.01),
    RetirementStressScenario("Healthcare Crisis", -0.01, 0.02, 0.0, 0.05),
    RetirementStressScenario("Perfect Storm", -0.04, 0.05, -0.20, 0.04),
)


@dataclass(frozen=True)
class SocialSecurityParams:
    current_age: int
    current_income: float
    retirement_age: int
    base_fire_number: float
    life_expectancy: int = 85
    social_security_start_age: Optional[int] = None     # Defaults to full retirement age
    stress_test_scenarios: Optional[tuple[RetirementStressScenario, ...]] = None


@dataclass(frozen=True)
class SocialSecurityProjection:
    estimated_benefit: float            # Monthly, after early/delayed adjustment
    full_retirement_age: int
    early_retirement_reduction: float
    delayed_retirement_credit: float
    break_even_age: float
    lifetime_value: float
    fire_number_reduction: float


@dataclass(frozen=True)
class RetirementStressResult:
    scenario: str
    adjusted_fire_number: float
    social_security_impact: float
    total_adjustment: float
    percentage_increase: float
    risk_level: RiskLevel
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class OptimizedStrategy:
    recommended_social_security_age: int
    recommended_fire_number: float
    confidence_level: float
    key_risks: tuple[str, ...]
    mitigation_strategies: tuple[str, ...]


@dataclass(frozen=True)
class SocialSecurityResult:
    social_security_projection: SocialSecurityProjection
    stress_test_results: tuple[RetirementStressResult, ...]
    optimized_strategy: OptimizedStrategy
