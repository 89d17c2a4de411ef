"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest

from finproj.config.defaults import get_default_config
from finproj.engine import FinancialCalculationEngine
from finproj.models.debt import DebtAccount
from finproj.models.savings import Goal
from finproj.models.common import Priority
from finproj.utils.time import FixedClock

AS_OF = date(2024, 1, 1)


@pytest.fixture
def clock() -> FixedClock:
    """Fake clock pinned at t=0 and 2024-01-01."""
    return FixedClock(start=0.0, today=AS_OF)


@pytest.fixture
def config():
    """Built-in default configuration."""
    return get_default_config()


@pytest.fixture
def engine(clock: FixedClock) -> FinancialCalculationEngine:
    """Engine wired to the fake clock."""
    return FinancialCalculationEngine(clock=clock)


@pytest.fixture
def sample_debts() -> tuple[DebtAccount, ...]:
    """Three debts with distinct balances and rates."""
    return (
        DebtAccount(id="card", name="Credit Card", balance=5000.0,
                    annual_interest_rate=0.22, minimum_payment=150.0, credit_limit=10000.0),
        DebtAccount(id="car", name="Car Loan", balance=12000.0,
                    annual_interest_rate=0.06, minimum_payment=300.0),
        DebtAccount(id="store", name="Store Card", balance=800.0,
                    annual_interest_rate=0.18, minimum_payment=40.0, credit_limit=2000.0),
    )


@pytest.fixture
def sample_goals() -> tuple[Goal, ...]:
    """Goals of mixed priority and flexibility."""
    return (
        Goal(id="emergency", name="Emergency Fund", target_amount=15000.0,
             target_date=date(2025, 1, 1), priority=Priority.HIGH),
        Goal(id="house", name="House Down Payment", target_amount=60000.0,
             target_date=date(2029, 1, 1), priority=Priority.MEDIUM, is_flexible=True),
        Goal(id="vacation", name="Vacation", target_amount=5000.0,
             target_date=date(2025, 7, 1), priority=Priority.LOW, is_flexible=True),
    )
