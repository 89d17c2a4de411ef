"""Early-retirement healthcare projection parameters and results."""

from dataclasses import dataclass
from typing import Optional

from .common import Difficulty, RiskLevel


@dataclass(frozen=True)
class EmployerCoverage:
    monthly_premium: float
    employer_contribution: float = 0.0
    cobra_months: int = 18


@dataclass(frozen=True)
class MarketplacePlan:
    plan_type: str              # bronze, silver, gold, platinum
    monthly_premium: float
    deductible: float
    out_of_pocket_max: float
    subsidy_eligible: bool = False


DEFAULT_MARKETPLACE_PLAN = MarketplacePlan(
    plan_type="silver",
    monthly_premium=800.0,
    deductible=5000.0,
    out_of_pocket_max=8000.0,
)


@dataclass(frozen=True)
class ChronicCondition:
    condition: str
    annual_cost: float
    inflation_rate: float


@dataclass(frozen=True)
class HealthcareProjectionParams:
    """Bridge-period healthcare costs between retirement and Medicare."""
    current_age: int
    retirement_age: int
    current_healthcare_cost: float
    healthcare_inflation_rate: Optional[float] = None
    employer_coverage: Optional[EmployerCoverage] = None
    marketplace_plans: tuple[MarketplacePlan, ...] = ()
    medicare_age: int = 65
    chronic_conditions: tuple[ChronicCondition, ...] = ()
    total_fire_number: Optional[float] = None


@dataclass(frozen=True)
class HealthcareYear:
    age: int
    year: int
    coverage_type: str
    monthly_premium: float
    annual_premium: float
    estimated_out_of_pocket: float
    total_annual_cost: float
    cumulative_cost: float


@dataclass(frozen=True)
class CoverageGap:
    start_age: int
    end_age: int
    gap_type: str
    estimated_cost: float
    risk_level: RiskLevel


@dataclass(frozen=True)
class HealthcareRecommendation:
    category: str
    recommendation: str
    estimated_savings: float
    implementation_difficulty: Difficulty


@dataclass(frozen=True)
class HealthcareFireImpact:
    healthcare_fire_number: float
    percentage_of_total_fire: Optional[float]
    monthly_reserve_needed: float


@dataclass(frozen=True)
class HealthcareProjectionResult:
    total_projected_cost: float
    yearly_breakdown: tuple[HealthcareYear, ...]
    coverage_gaps: tuple[CoverageGap, ...]
    recommendations: tuple[HealthcareRecommendation, ...]
    fire_impact: HealthcareFireImpact
