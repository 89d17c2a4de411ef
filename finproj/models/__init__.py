"""Frozen parameter and result types for every calculator."""

from .common import Difficulty, Priority, Recommendation, RiskLevel
from .compound import CompoundInterestParams, CompoundInterestResult, ContributionTiming
from .debt import DebtAccount, DebtPayoffParams, DebtPayoffResult, DebtStrategy, FinancialContext
from .fire import (
    ExpenseBasedFireParams,
    ExpenseBasedFireResult,
    ExpenseCategory,
    FireNumberParams,
    FireNumberResult,
    HealthcareProfile,
    SocialSecurityProfile,
    StressScenario,
)
from .healthcare import (
    ChronicCondition,
    EmployerCoverage,
    HealthcareProjectionParams,
    HealthcareProjectionResult,
    MarketplacePlan,
)
from .monte_carlo import MonteCarloParams, MonteCarloResult
from .savings import (
    BudgetConstraints,
    Goal,
    GoalType,
    IncomeGrowth,
    OptimizationPreferences,
    Promotion,
    RiskTolerance,
    SavingsRateParams,
    SavingsRateResult,
)
from .social_security import RetirementStressScenario, SocialSecurityParams, SocialSecurityResult

__all__ = [
    "Difficulty",
    "Priority",
    "Recommendation",
    "RiskLevel",
    "CompoundInterestParams",
    "CompoundInterestResult",
    "ContributionTiming",
    "DebtAccount",
    "DebtPayoffParams",
    "DebtPayoffResult",
    "DebtStrategy",
    "FinancialContext",
    "ExpenseBasedFireParams",
    "ExpenseBasedFireResult",
    "ExpenseCategory",
    "FireNumberParams",
    "FireNumberResult",
    "HealthcareProfile",
    "SocialSecurityProfile",
    "StressScenario",
    "ChronicCondition",
    "EmployerCoverage",
    "HealthcareProjectionParams",
    "HealthcareProjectionResult",
    "MarketplacePlan",
    "MonteCarloParams",
    "MonteCarloResult",
    "BudgetConstraints",
    "Goal",
    "GoalType",
    "IncomeGrowth",
    "OptimizationPreferences",
    "Promotion",
    "RiskTolerance",
    "SavingsRateParams",
    "SavingsRateResult",
    "RetirementStressScenario",
    "SocialSecurityParams",
    "SocialSecurityResult",
]
