"""
Parameter error classifications for calculation inputs.

These exceptions are raised synchronously before any computation starts,
when caller-supplied parameters violate a documented invariant.
"""

from typing import Any, Dict, Optional


class CalculationError(Exception):
    """Base class for all calculation engine errors."""

    def __init__(self, message: str, calculator: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.calculator = calculator
        self.context = context or {}


class InvalidParametersError(CalculationError):
    """Input invariant violated (negative amounts, non-positive horizons, past dates)."""

    def __init__(self, message: str, field: Optional[str] = None,
                 rule: Optional[str] = None, value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.rule = rule
        self.value = value


class ConfigurationError(CalculationError):
    """Engine configuration overrides failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
