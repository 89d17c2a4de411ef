"""Monte Carlo simulation parameters and results."""

from dataclasses import dataclass
from typing import Optional

PERCENTILES = (5, 10, 25, 50, 75, 90, 95)


@dataclass(frozen=True)
class MonteCarloParams:
    """
    Inputs for a stochastic portfolio projection.

    ``iterations`` and ``inflation_rate`` fall back to the engine
    configuration when omitted. Supplying ``seed`` makes a run repeatable.
    """
    initial_value: float
    monthly_contribution: float
    years_to_project: int
    expected_return: float
    volatility: float
    iterations: Optional[int] = None
    inflation_rate: Optional[float] = None
    target_value: Optional[float] = None
    seed: Optional[int] = None


@dataclass(frozen=True)
class PercentileProjection:
    percentile: int
    final_value: float
    real_value: float           # Deflated to today's money


@dataclass(frozen=True)
class ConfidenceBand:
    min: float
    max: float


@dataclass(frozen=True)
class ConfidenceIntervals:
    p90: ConfidenceBand         # 5th to 95th percentile
    p80: ConfidenceBand         # 10th to 90th percentile
    p50: ConfidenceBand         # 25th to 75th percentile


@dataclass(frozen=True)
class PercentileSet:
    p5: float
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float
    p95: float


@dataclass(frozen=True)
class YearlyProjection:
    year: int
    percentiles: PercentileSet


@dataclass(frozen=True)
class SimulationStatistics:
    mean: float
    median: float
    standard_deviation: float
    skewness: float
    kurtosis: float             # Excess kurtosis
    probability_of_loss: float
    probability_of_target: Optional[float] = None


@dataclass(frozen=True)
class MonteCarloResult:
    iterations: int
    projections: tuple[PercentileProjection, ...]
    confidence_intervals: ConfidenceIntervals
    statistics: SimulationStatistics
    yearly_projections: tuple[YearlyProjection, ...]
    total_contributed: float
