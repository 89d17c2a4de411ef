"""Calculators, one per projection family."""

from .base import BaseCalculator
from .compound import CompoundInterestCalculator
from .debt import DebtPayoffPlanner, order_debts, simulate_payoff
from .fire import ExpenseBasedFireCalculator, FireNumberCalculator
from .healthcare import HealthcareCostCalculator
from .monte_carlo import MonteCarloSimulator
from .savings import SavingsRateOptimizer
from .social_security import SocialSecurityCalculator

__all__ = [
    "BaseCalculator",
    "CompoundInterestCalculator",
    "DebtPayoffPlanner",
    "ExpenseBasedFireCalculator",
    "FireNumberCalculator",
    "HealthcareCostCalculator",
    "MonteCarloSimulator",
    "SavingsRateOptimizer",
    "SocialSecurityCalculator",
    "order_debts",
    "simulate_payoff",
]
