"""
Error classification system for the calculation engine.

This module provides the exception hierarchy raised by calculators:
parameter errors raised before computation and failures raised during it.
"""

from .parameters import (
    CalculationError,
    InvalidParametersError,
    ConfigurationError,
)
from .computation import (
    ComputationFailureError,
    DebtNeverAmortizesError,
)

__all__ = [
    # Base
    "CalculationError",
    # Parameter errors
    "InvalidParametersError",
    "ConfigurationError",
    # Computation failures
    "ComputationFailureError",
    "DebtNeverAmortizesError",
]
