"""
Computation failure classifications.

These exceptions represent failures inside an algorithm body after its
inputs passed validation. They are never cached and never retried.
"""

from typing import Optional, Sequence

from .parameters import CalculationError


class ComputationFailureError(CalculationError):
    """Unexpected runtime failure while computing a result.

    The original exception, when there is one, is chained as ``__cause__``.
    """

    def __init__(self, message: str, stage: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.stage = stage


class DebtNeverAmortizesError(ComputationFailureError):
    """Debt simulation hit its month bound with balances still outstanding."""

    def __init__(self, message: str, debt_ids: Optional[Sequence[str]] = None,
                 months_simulated: Optional[int] = None, **kwargs):
        super().__init__(message, stage="debt_simulation", **kwargs)
        self.debt_ids = list(debt_ids or [])
        self.months_simulated = months_simulated
