"""Deterministic compound growth with periodic contributions."""

from ..errors import InvalidParametersError
from ..models.compound import (
    CompoundInterestParams,
    CompoundInterestResult,
    ContributionTiming,
    GrowthBreakdown,
)
from ..utils.numeric import (
    effective_annual_rate,
    future_value_of_annuity,
    future_value_of_lump_sum,
)
from .base import (
    BaseCalculator,
    require_finite,
    require_non_negative,
    require_positive,
)


class CompoundInterestCalculator(BaseCalculator[CompoundInterestParams, CompoundInterestResult]):
    """Future value of a principal plus a level contribution stream."""

    name = "compound_interest"

    def validate(self, params: CompoundInterestParams) -> None:
        require_non_negative(params.principal, "principal", self.name)
        require_non_negative(params.annual_rate, "annual_rate", self.name)
        require_positive(params.compounding_frequency, "compounding_frequency", self.name)
        require_positive(params.time_in_years, "time_in_years", self.name)
        require_non_negative(params.contribution, "contribution", self.name)
        require_positive(params.contribution_frequency, "contribution_frequency", self.name)
        try:
            ContributionTiming(params.contribution_timing)
        except ValueError as e:
            raise InvalidParametersError(
                f"contribution_timing must be 'end' or 'beginning', got {params.contribution_timing!r}",
                field="contribution_timing", rule="enum",
                value=params.contribution_timing, calculator=self.name
            ) from e

    def compute(self, params: CompoundInterestParams) -> CompoundInterestResult:
        periods_per_year = params.compounding_frequency
        total_periods = params.time_in_years * periods_per_year
        rate_per_period = params.annual_rate / periods_per_year

        principal_growth = future_value_of_lump_sum(params.principal, rate_per_period, total_periods)

        contribution_growth = 0.0
        total_contributions = 0.0
        if params.contribution > 0:
            # Contributions are spread evenly over compounding periods
            contribution_per_period = params.contribution * params.contribution_frequency / periods_per_year
            total_contributions = params.contribution * params.contribution_frequency * params.time_in_years
            contribution_growth = future_value_of_annuity(
                contribution_per_period,
                rate_per_period,
                total_periods,
                timing=ContributionTiming(params.contribution_timing).value,
            )

        future_value = principal_growth + contribution_growth
        total_interest_earned = future_value - params.principal - total_contributions
        require_finite(future_value, "future_value", self.name)

        return CompoundInterestResult(
            future_value=future_value,
            total_contributions=total_contributions,
            total_interest_earned=total_interest_earned,
            effective_annual_rate=effective_annual_rate(params.annual_rate, periods_per_year),
            breakdown=GrowthBreakdown(
                principal_growth=principal_growth - params.principal,
                contribution_growth=contribution_growth - total_contributions,
                compound_interest=total_interest_earned,
            ),
        )
