"""
Monte Carlo portfolio projection.

All paths are simulated together as one numpy vector: each month adds the
contribution, applies one normal return draw per path and floors at zero.
"""

import math
from typing import Optional

import numpy as np

from ..config.defaults import EngineConfig
from ..models.monte_carlo import (
    PERCENTILES,
    ConfidenceBand,
    ConfidenceIntervals,
    MonteCarloParams,
    MonteCarloResult,
    PercentileProjection,
    PercentileSet,
    SimulationStatistics,
    YearlyProjection,
)
from ..utils.numeric import percentile, sample_moments
from ..utils.random import RandomSource, create_random_source
from .base import (
    BaseCalculator,
    require_finite,
    require_non_negative,
    require_number,
    require_positive_int,
)


def _percentile_set(sorted_values: list[float]) -> PercentileSet:
    return PercentileSet(**{f"p{p}": percentile(sorted_values, p) for p in PERCENTILES})


class MonteCarloSimulator(BaseCalculator[MonteCarloParams, MonteCarloResult]):
    """Stochastic projection with percentile and distribution-shape outputs."""

    name = "monte_carlo"

    def __init__(self, config: Optional[EngineConfig] = None,
                 random_source: Optional[RandomSource] = None) -> None:
        super().__init__(config)
        self.random_source = random_source

    def validate(self, params: MonteCarloParams) -> None:
        require_non_negative(params.initial_value, "initial_value", self.name)
        require_non_negative(params.monthly_contribution, "monthly_contribution", self.name)
        require_positive_int(params.years_to_project, "years_to_project", self.name)
        require_number(params.expected_return, "expected_return", self.name)
        require_non_negative(params.volatility, "volatility", self.name)
        if params.iterations is not None:
            require_positive_int(params.iterations, "iterations", self.name)
        if params.inflation_rate is not None:
            require_number(params.inflation_rate, "inflation_rate", self.name)
        if params.target_value is not None:
            require_non_negative(params.target_value, "target_value", self.name)

    def compute(self, params: MonteCarloParams) -> MonteCarloResult:
        iterations = params.iterations or self.config.monte_carlo.iterations
        inflation_rate = (params.inflation_rate if params.inflation_rate is not None
                          else self.config.monte_carlo.inflation_rate)
        source = create_random_source(params.seed, self.random_source)

        total_months = params.years_to_project * 12
        monthly_return = params.expected_return / 12
        monthly_volatility = params.volatility / math.sqrt(12)

        values = np.full(iterations, float(params.initial_value))
        yearly_values: list[np.ndarray] = []

        for month in range(1, total_months + 1):
            values += params.monthly_contribution
            values *= 1.0 + source.normal(monthly_return, monthly_volatility, iterations)
            np.maximum(values, 0.0, out=values)

            if month % 12 == 0:
                yearly_values.append(values.copy())

        final_values = np.sort(values).tolist()
        deflator = math.pow(1 + inflation_rate, params.years_to_project)

        projections = tuple(
            PercentileProjection(
                percentile=p,
                final_value=percentile(final_values, p),
                real_value=percentile(final_values, p) / deflator,
            )
            for p in PERCENTILES
        )

        confidence_intervals = ConfidenceIntervals(
            p90=ConfidenceBand(min=percentile(final_values, 5), max=percentile(final_values, 95)),
            p80=ConfidenceBand(min=percentile(final_values, 10), max=percentile(final_values, 90)),
            p50=ConfidenceBand(min=percentile(final_values, 25), max=percentile(final_values, 75)),
        )

        mean, std_dev, skewness, kurtosis = sample_moments(final_values)
        require_finite(mean, "mean", self.name)

        total_contributed = params.initial_value + params.monthly_contribution * total_months
        probability_of_loss = sum(1 for v in final_values if v < total_contributed) / iterations

        probability_of_target = None
        if params.target_value is not None:
            probability_of_target = sum(1 for v in final_values if v >= params.target_value) / iterations

        yearly_projections = tuple(
            YearlyProjection(year=index + 1, percentiles=_percentile_set(np.sort(snapshot).tolist()))
            for index, snapshot in enumerate(yearly_values)
        )

        return MonteCarloResult(
            iterations=iterations,
            projections=projections,
            confidence_intervals=confidence_intervals,
            statistics=SimulationStatistics(
                mean=mean,
                median=percentile(final_values, 50),
                standard_deviation=std_dev,
                skewness=skewness,
                kurtosis=kurtosis,
                probability_of_loss=probability_of_loss,
                probability_of_target=probability_of_target,
            ),
            yearly_projections=yearly_projections,
            total_contributed=total_contributed,
        )
