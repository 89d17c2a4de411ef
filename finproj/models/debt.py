"""Debt payoff parameters and results."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DebtStrategy(str, Enum):
    SNOWBALL = "snowball"       # Smallest balance first
    AVALANCHE = "avalanche"     # Highest rate first
    CUSTOM = "custom"           # Caller-supplied id order


class DebtToIncomeRating(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    DANGEROUS = "dangerous"


@dataclass(frozen=True)
class DebtAccount:
    id: str
    name: str
    balance: float
    annual_interest_rate: float
    minimum_payment: float
    credit_limit: Optional[float] = None     # Revolving accounts only


@dataclass(frozen=True)
class FinancialContext:
    """Household figures used by the extended analyses."""
    monthly_income: float
    monthly_expenses: float
    emergency_fund: float = 0.0
    expected_return: float = 0.07
    consolidation_rate: Optional[float] = None
    consolidation_term_months: Optional[int] = None
    current_credit_score: Optional[int] = None


@dataclass(frozen=True)
class DebtPayoffParams:
    debts: tuple[DebtAccount, ...]
    extra_payment: float = 0.0
    strategy: DebtStrategy = DebtStrategy.SNOWBALL
    custom_order: tuple[str, ...] = ()
    financial_context: Optional[FinancialContext] = None


@dataclass(frozen=True)
class ScheduleRow:
    month: int
    debt_id: str
    debt_name: str
    payment: float
    principal_payment: float
    interest_payment: float
    remaining_balance: float
    is_paid_off: bool


@dataclass(frozen=True)
class PayoffOrderEntry:
    debt_id: str
    debt_name: str
    order: int
    payoff_month: int
    total_interest: float


@dataclass(frozen=True)
class StrategyOutcome:
    """Totals for one strategy; both are None when it never pays off."""
    total_interest: Optional[float]
    total_months: Optional[int]
    completed: bool = True


@dataclass(frozen=True)
class StrategyComparison:
    snowball: StrategyOutcome
    avalanche: StrategyOutcome
    interest_savings: Optional[float]       # Snowball minus avalanche
    time_savings: Optional[int]


@dataclass(frozen=True)
class ConsolidationAnalysis:
    loan_amount: float
    interest_rate: float
    term_months: int
    monthly_payment: float
    total_interest: float
    interest_savings: float     # Versus the chosen strategy
    recommended: bool


@dataclass(frozen=True)
class DebtToIncomeAnalysis:
    monthly_debt_payments: float
    monthly_income: float
    ratio_percent: float
    rating: DebtToIncomeRating


@dataclass(frozen=True)
class CreditScorePoint:
    year: int
    remaining_balance: float
    utilization_percent: float
    estimated_score: int


@dataclass(frozen=True)
class FireIntegration:
    freed_monthly_cash_flow: float
    debt_free_month: int
    invested_value_after_10_years: float
    annual_passive_income: float


@dataclass(frozen=True)
class EmergencyFundTradeoff:
    current_emergency_fund: float
    recommended_emergency_fund: float
    shortfall: float
    months_to_build: float
    recommendation: str


@dataclass(frozen=True)
class DebtPayoffResult:
    strategy: DebtStrategy
    total_interest: float
    total_months: int
    monthly_savings: float
    payoff_schedule: tuple[ScheduleRow, ...]
    debt_order: tuple[PayoffOrderEntry, ...]
    comparison: StrategyComparison
    consolidation: Optional[ConsolidationAnalysis] = None
    debt_to_income: Optional[DebtToIncomeAnalysis] = None
    credit_score_projection: tuple[CreditScorePoint, ...] = ()
    fire_integration: Optional[FireIntegration] = None
    emergency_fund: Optional[EmergencyFundTradeoff] = None
