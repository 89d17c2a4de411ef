"""FIRE number parameters and results."""

from dataclasses import dataclass
from typing import Optional

from .common import Difficulty, Recommendation, RiskLevel


@dataclass(frozen=True)
class ExpenseCategory:
    """One line of a monthly budget."""
    category: str
    monthly_amount: float
    inflation_rate: float = 0.03
    essential: bool = True
    geographic_sensitive: bool = False


@dataclass(frozen=True)
class HealthcareProfile:
    monthly_premium: float
    annual_deductible: float
    out_of_pocket_max: float = 0.0                  # Informational; cost uses premium and deductible
    inflation_rate: Optional[float] = None          # Defaults to config (6%)
    coverage_gap_years: Optional[int] = None        # Defaults to config (10)


@dataclass(frozen=True)
class SocialSecurityProfile:
    estimated_monthly_benefit: float
    start_age: int
    retirement_age: Optional[int] = None            # Defaults to config (62)
    inflation_adjusted: bool = True                 # Informational; benefits are discounted at config rate


@dataclass(frozen=True)
class StressScenario:
    name: str
    market_return_adjustment: float
    inflation_adjustment: float
    expense_adjustment: float


DEFAULT_STRESS_SCENARIOS = (
    StressScenario("Market Downturn", -0.02, 0.01, 0.10),
    StressScenario("High Inflation", 0.0, 0.03, 0.15),
    StressScenario("Economic Recession", -0.03, 0.02, 0.20),
)


@dataclass(frozen=True)
class FireNumberParams:
    """
    Inputs for the FIRE number calculation.

    At least one of ``monthly_expenses`` or ``annual_expenses`` must be
    positive; ``annual_expenses`` wins when both are given.
    """
    monthly_expenses: float = 0.0
    annual_expenses: Optional[float] = None
    withdrawal_rate: Optional[float] = None
    safety_margin: float = 0.0
    cost_of_living_multiplier: float = 1.0
    expense_categories: tuple[ExpenseCategory, ...] = ()
    healthcare: Optional[HealthcareProfile] = None
    social_security: Optional[SocialSecurityProfile] = None
    stress_test_scenarios: Optional[tuple[StressScenario, ...]] = None


@dataclass(frozen=True)
class HealthcareCostEstimate:
    annual_cost: float
    inflation_adjusted_cost: float
    coverage_gap_years: int
    total_gap_cost: float


@dataclass(frozen=True)
class SocialSecurityImpact:
    annual_benefit: float
    present_value: float
    fire_number_reduction: float


@dataclass(frozen=True)
class StressTestResult:
    scenario: str
    adjusted_fire_number: float
    percentage_increase: float
    risk_level: RiskLevel


@dataclass(frozen=True)
class ExpenseBreakdownRow:
    category: str
    monthly_amount: float
    annual_amount: float
    inflation_rate: float
    fire_contribution: float
    essential: bool


@dataclass(frozen=True)
class FireNumberResult:
    fire_number: float
    lean_fire_number: float
    fat_fire_number: float
    coast_fire_number: float
    barista_fire_number: float
    annual_expenses: float
    withdrawal_rate: float
    safety_margin: float
    cost_of_living_adjustment: float
    adjusted_fire_number: float
    healthcare_costs: Optional[HealthcareCostEstimate]
    social_security_impact: Optional[SocialSecurityImpact]
    stress_test_results: tuple[StressTestResult, ...]
    recommendations: tuple[Recommendation, ...]
    expense_breakdown: tuple[ExpenseBreakdownRow, ...]


# Expense-based FIRE with geographic adjustment

@dataclass(frozen=True)
class ExpenseBasedFireParams:
    expense_categories: tuple[ExpenseCategory, ...]
    geographic_location: Optional[str] = None
    cost_of_living_index: float = 1.0
    withdrawal_rate: Optional[float] = None
    projection_years: int = 10


@dataclass(frozen=True)
class CategoryProjection:
    category: str
    current_annual: float
    projected_annual: float
    fire_contribution: float
    essential: bool
    geographic_adjustment: float


@dataclass(frozen=True)
class GeographicAdjustment:
    location: str
    cost_of_living_index: float
    total_adjustment: float
    adjusted_fire_number: float


@dataclass(frozen=True)
class InflationImpact:
    current_total: float
    projected_total: float
    inflation_increase: float
    fire_number_increase: float


@dataclass(frozen=True)
class OptimizationSuggestion:
    category: str
    suggestion: str
    potential_savings: float
    difficulty: Difficulty


@dataclass(frozen=True)
class ExpenseBasedFireResult:
    total_fire_number: float
    category_breakdown: tuple[CategoryProjection, ...]
    geographic_adjustments: GeographicAdjustment
    inflation_impact: InflationImpact
    optimization_suggestions: tuple[OptimizationSuggestion, ...]
