"""Numeric, random-source and time helpers."""

from .numeric import (
    effective_annual_rate,
    future_value_of_annuity,
    future_value_of_lump_sum,
    loan_payment,
    normal_random,
    percentile,
    periods_to_target,
    present_value,
    required_periodic_payment,
    sample_moments,
)
from .random import BoxMullerRandomSource, NumpyRandomSource, RandomSource
from .time import Clock, FixedClock, add_months, months_between

__all__ = [
    "effective_annual_rate",
    "future_value_of_annuity",
    "future_value_of_lump_sum",
    "loan_payment",
    "normal_random",
    "percentile",
    "periods_to_target",
    "present_value",
    "required_periodic_payment",
    "sample_moments",
    "BoxMullerRandomSource",
    "NumpyRandomSource",
    "RandomSource",
    "Clock",
    "FixedClock",
    "add_months",
    "months_between",
]
