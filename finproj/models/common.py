"""Value types shared by several calculators."""

from dataclasses import dataclass
from enum import Enum


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank, high first."""
        return {"high": 0, "medium": 1, "low": 2}[self.value]


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def rank(self) -> int:
        return {"easy": 0, "medium": 1, "hard": 2}[self.value]


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EXTREME = "extreme"


@dataclass(frozen=True)
class Recommendation:
    """Rule-based suggestion with an estimated dollar impact."""
    category: str
    suggestion: str
    impact: float
    priority: Priority
