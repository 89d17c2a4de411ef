"""Shared validation and failure handling for calculators."""

import math
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

import structlog

from ..config.defaults import EngineConfig, get_default_config
from ..errors import CalculationError, ComputationFailureError, InvalidParametersError

logger = structlog.get_logger(__name__)

P = TypeVar("P")
R = TypeVar("R")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require_number(value: Any, field: str, calculator: str) -> None:
    if not _is_number(value) or math.isnan(value):
        raise InvalidParametersError(
            f"{field} must be a number, got {value!r}",
            field=field, rule="number", value=value, calculator=calculator
        )


def require_non_negative(value: Any, field: str, calculator: str) -> None:
    require_number(value, field, calculator)
    if value < 0:
        raise InvalidParametersError(
            f"{field} must be non-negative, got {value}",
            field=field, rule="non_negative", value=value, calculator=calculator
        )


def require_positive(value: Any, field: str, calculator: str) -> None:
    require_number(value, field, calculator)
    if value <= 0:
        raise InvalidParametersError(
            f"{field} must be positive, got {value}",
            field=field, rule="positive", value=value, calculator=calculator
        )


def require_positive_int(value: Any, field: str, calculator: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise InvalidParametersError(
            f"{field} must be a positive integer, got {value!r}",
            field=field, rule="positive_integer", value=value, calculator=calculator
        )


def require_finite(value: float, field: str, calculator: str) -> None:
    """Reject NaN or infinite aggregates produced by pathological inputs."""
    if not math.isfinite(value):
        raise ComputationFailureError(
            f"{field} is not finite ({value})",
            stage="result", calculator=calculator, context={"field": field}
        )


class BaseCalculator(ABC, Generic[P, R]):
    """
    Validate-then-compute template.

    Subclasses implement ``validate`` and ``compute``. Known calculation
    errors propagate unchanged; anything else is wrapped in
    ``ComputationFailureError`` with the original exception chained.
    """

    name = "calculator"

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or get_default_config()

    def calculate(self, params: P) -> R:
        self.validate(params)

        try:
            return self.compute(params)
        except CalculationError:
            raise
        except Exception as e:
            logger.error("Calculation raised unexpectedly",
                         calculator=self.name, error=str(e), error_type=type(e).__name__)
            raise ComputationFailureError(
                f"{self.name} failed: {e}",
                stage="compute", calculator=self.name
            ) from e

    @abstractmethod
    def validate(self, params: P) -> None:
        """Raise InvalidParametersError on the first violated invariant."""
        pass

    @abstractmethod
    def compute(self, params: P) -> R:
        """Produce the result from validated parameters."""
        pass
