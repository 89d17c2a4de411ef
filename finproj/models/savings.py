"""Savings-rate and goal allocation parameters and results."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .common import Difficulty, Priority
from .fire import ExpenseCategory


class GoalType(str, Enum):
    RETIREMENT = "retirement"
    EMERGENCY_FUND = "emergency_fund"
    HOUSE_DOWN_PAYMENT = "house_down_payment"
    EDUCATION = "education"
    VACATION = "vacation"
    DEBT_PAYOFF = "debt_payoff"
    OTHER = "other"


class RiskTolerance(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class Feasibility(str, Enum):
    ACHIEVABLE = "achievable"
    CHALLENGING = "challenging"
    UNREALISTIC = "unrealistic"


@dataclass(frozen=True)
class Goal:
    id: str
    name: str
    target_amount: float
    target_date: date
    priority: Priority = Priority.MEDIUM
    current_progress: float = 0.0
    is_flexible: bool = False
    goal_type: GoalType = GoalType.OTHER        # Caller label, not read by the allocator
    inflation_adjusted: bool = False


@dataclass(frozen=True)
class Promotion:
    year: int
    salary_increase: float      # Fractional raise, 0.1 = 10%


@dataclass(frozen=True)
class IncomeGrowth:
    annual_growth_rate: float = 0.0
    promotions: tuple[Promotion, ...] = ()


@dataclass(frozen=True)
class BudgetConstraints:
    max_savings_rate: Optional[float] = None
    essential_expenses: float = 0.0             # Informational; not read by the allocator
    discretionary_expenses: float = 0.0
    emergency_fund_months: int = 6              # Informational; not read by the allocator


@dataclass(frozen=True)
class OptimizationPreferences:
    prioritize_high_priority_goals: bool = True
    allow_timeline_adjustments: bool = True
    prefer_earlier_goals: bool = False
    risk_tolerance: RiskTolerance = RiskTolerance.MODERATE


@dataclass(frozen=True)
class SavingsRateParams:
    """
    Inputs for multi-goal savings allocation.

    ``current_income`` is annual. ``as_of`` defaults to the engine clock's
    date; target dates must fall strictly after it.
    """
    current_age: int
    current_income: float
    current_savings: float
    monthly_expenses: float
    goals: tuple[Goal, ...]
    expected_return: Optional[float] = None
    inflation_rate: Optional[float] = None
    income_growth: Optional[IncomeGrowth] = None
    budget_constraints: Optional[BudgetConstraints] = None
    preferences: Optional[OptimizationPreferences] = None
    expense_categories: tuple[ExpenseCategory, ...] = ()
    as_of: Optional[date] = None


@dataclass(frozen=True)
class TimelineAdjustment:
    original_date: date
    adjusted_date: date
    reason: str


@dataclass(frozen=True)
class GoalAllocation:
    goal_id: str
    goal_name: str
    priority: Priority
    months_to_target: int
    inflation_adjusted_target: float
    required_monthly_savings: float
    allocated_monthly_savings: float
    achievability_score: float
    timeline_adjustment: Optional[TimelineAdjustment] = None


@dataclass(frozen=True)
class BudgetAdjustment:
    category: str
    current_amount: float
    recommended_amount: float
    potential_savings: float
    difficulty: Difficulty
    impact: str                 # low, medium, high


@dataclass(frozen=True)
class IncomeStrategy:
    strategy: str
    potential_income_increase: float
    timeframe: str
    effort: str
    probability: float


@dataclass(frozen=True)
class TimelineAnalysis:
    earliest_goal_completion: date
    latest_goal_completion: date
    total_savings_period: float         # Years
    peak_savings_rate: float
    average_savings_rate: float


@dataclass(frozen=True)
class ScenarioOutcome:
    scenario: str
    required_savings_rate: float
    goal_achievement_rate: float        # Percent of goals fully funded
    tradeoffs: tuple[str, ...]


@dataclass(frozen=True)
class GoalProgress:
    goal_id: str
    progress_percent: float


@dataclass(frozen=True)
class Milestone:
    date: date
    description: str
    target_savings: float
    goal_progress: tuple[GoalProgress, ...]


@dataclass(frozen=True)
class SavingsRateResult:
    recommended_savings_rate: float
    required_monthly_savings: float
    max_monthly_savings: float
    current_savings_gap: float
    goal_breakdown: tuple[GoalAllocation, ...]
    budget_adjustments: tuple[BudgetAdjustment, ...]
    income_optimization: tuple[IncomeStrategy, ...]
    timeline_analysis: TimelineAnalysis
    scenario_analysis: tuple[ScenarioOutcome, ...]
    milestones: tuple[Milestone, ...]
    feasibility: Feasibility
