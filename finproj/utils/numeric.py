"""
Numeric primitives for time-value-of-money and sample statistics.

All functions are pure. They raise ``InvalidParametersError`` on invalid
shape (for example a negative number of periods) and never clamp inputs.
"""

import math
import random
from typing import Callable, Optional, Sequence

from ..errors import InvalidParametersError

TIMING_END = "end"
TIMING_BEGINNING = "beginning"


def _require_periods(periods: float) -> None:
    if periods < 0:
        raise InvalidParametersError(
            f"periods must be non-negative, got {periods}",
            field="periods", rule="non_negative", value=periods
        )


def future_value_of_lump_sum(principal: float, periodic_rate: float, periods: float) -> float:
    """Grow a single amount: ``principal * (1 + rate) ** periods``."""
    _require_periods(periods)
    return principal * math.pow(1 + periodic_rate, periods)


def future_value_of_annuity(payment: float, periodic_rate: float, periods: float,
                            timing: str = TIMING_END) -> float:
    """
    Future value of a level stream of payments.

    Args:
        payment: Amount paid each period
        periodic_rate: Interest rate per period
        periods: Number of periods
        timing: ``"end"`` (ordinary annuity) or ``"beginning"`` (annuity due)

    Returns:
        Accumulated value after ``periods``. A zero rate degrades to
        ``payment * periods``.
    """
    _require_periods(periods)
    if timing not in (TIMING_END, TIMING_BEGINNING):
        raise InvalidParametersError(
            f"timing must be 'end' or 'beginning', got {timing!r}",
            field="timing", rule="enum", value=timing
        )

    if periodic_rate == 0:
        value = payment * periods
    else:
        value = payment * ((math.pow(1 + periodic_rate, periods) - 1) / periodic_rate)

    if timing == TIMING_BEGINNING:
        value *= 1 + periodic_rate
    return value


def effective_annual_rate(nominal_rate: float, periods_per_year: float) -> float:
    """Convert a nominal annual rate compounded ``n`` times to an effective rate."""
    if periods_per_year <= 0:
        raise InvalidParametersError(
            f"periods_per_year must be positive, got {periods_per_year}",
            field="periods_per_year", rule="positive", value=periods_per_year
        )
    return math.pow(1 + nominal_rate / periods_per_year, periods_per_year) - 1


def required_periodic_payment(future_value: float, periodic_rate: float, periods: float) -> float:
    """
    Payment per period needed to accumulate ``future_value`` (annuity inverse).

    ``PMT = FV / (((1 + r) ** n - 1) / r)``; a zero rate degrades to ``FV / n``.
    """
    if periods <= 0:
        raise InvalidParametersError(
            f"periods must be positive, got {periods}",
            field="periods", rule="positive", value=periods
        )
    if periodic_rate == 0:
        return future_value / periods
    return future_value / ((math.pow(1 + periodic_rate, periods) - 1) / periodic_rate)


def present_value(future_value: float, periodic_rate: float, periods: float) -> float:
    """Discount ``future_value`` back ``periods`` periods."""
    _require_periods(periods)
    return future_value / math.pow(1 + periodic_rate, periods)


def loan_payment(principal: float, periodic_rate: float, periods: int) -> float:
    """Level payment that fully amortizes ``principal`` over ``periods``."""
    if periods <= 0:
        raise InvalidParametersError(
            f"periods must be positive, got {periods}",
            field="periods", rule="positive", value=periods
        )
    if periodic_rate == 0:
        return principal / periods
    growth = math.pow(1 + periodic_rate, periods)
    return principal * periodic_rate * growth / (growth - 1)


def periods_to_target(current: float, payment: float, target: float, periodic_rate: float) -> float:
    """
    Number of periods until ``current`` plus contributions reaches ``target``.

    Returns ``0.0`` when the target is already met and ``math.inf`` when it
    can never be reached.
    """
    remaining = target - current
    if remaining <= 0:
        return 0.0
    if periodic_rate == 0:
        if payment <= 0:
            return math.inf
        return remaining / payment

    numerator = target * periodic_rate + payment
    denominator = current * periodic_rate + payment
    if denominator <= 0 or numerator <= 0:
        return math.inf
    return max(0.0, math.log(numerator / denominator) / math.log(1 + periodic_rate))


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """
    Linear-interpolation percentile over values already sorted ascending.

    Sorting is the caller's responsibility.
    """
    count = len(sorted_values)
    if count == 0:
        return 0.0
    if p <= 0:
        return float(sorted_values[0])
    if p >= 100:
        return float(sorted_values[count - 1])

    index = (p / 100) * (count - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    if lower == upper:
        return float(sorted_values[lower])

    weight = index - lower
    return float(sorted_values[lower]) * (1 - weight) + float(sorted_values[upper]) * weight


def normal_random(mean: float = 0.0, std_dev: float = 1.0,
                  uniform: Optional[Callable[[], float]] = None) -> float:
    """
    Draw one sample from N(mean, std_dev) with the Box-Muller transform.

    Args:
        mean: Distribution mean
        std_dev: Distribution standard deviation
        uniform: Source of floats in [0, 1); zero draws are rejected.
            Defaults to ``random.random``.
    """
    if std_dev < 0:
        raise InvalidParametersError(
            f"std_dev must be non-negative, got {std_dev}",
            field="std_dev", rule="non_negative", value=std_dev
        )
    draw = uniform or random.random

    u = 0.0
    while u == 0.0:
        u = draw()
    v = 0.0
    while v == 0.0:
        v = draw()

    z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
    return z * std_dev + mean


def sample_moments(values: Sequence[float]) -> tuple[float, float, float, float]:
    """
    Population moments of a sample.

    Returns:
        ``(mean, standard_deviation, skewness, excess_kurtosis)``; skewness
        and kurtosis are 0.0 for a degenerate (zero-variance) sample.
    """
    count = len(values)
    if count == 0:
        return 0.0, 0.0, 0.0, 0.0

    mean = math.fsum(values) / count
    variance = math.fsum((v - mean) ** 2 for v in values) / count
    std_dev = math.sqrt(variance)
    if std_dev == 0:
        return mean, 0.0, 0.0, 0.0

    skewness = math.fsum(((v - mean) / std_dev) ** 3 for v in values) / count
    kurtosis = math.fsum(((v - mean) / std_dev) ** 4 for v in values) / count - 3
    return mean, std_dev, skewness, kurtosis
