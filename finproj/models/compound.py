"""Compound growth parameters and results."""

from dataclasses import dataclass
from enum import Enum


class ContributionTiming(str, Enum):
    END = "end"
    BEGINNING = "beginning"


@dataclass(frozen=True)
class CompoundInterestParams:
    """Inputs for a deterministic future-value projection."""
    principal: float
    annual_rate: float
    compounding_frequency: int
    time_in_years: float
    contribution: float = 0.0                   # Amount per contribution
    contribution_frequency: int = 12            # Contributions per year
    contribution_timing: ContributionTiming = ContributionTiming.END


@dataclass(frozen=True)
class GrowthBreakdown:
    principal_growth: float
    contribution_growth: float
    compound_interest: float


@dataclass(frozen=True)
class CompoundInterestResult:
    future_value: float
    total_contributions: float
    total_interest_earned: float
    effective_annual_rate: float
    breakdown: GrowthBreakdown
