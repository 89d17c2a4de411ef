"""Performance recording."""

from .performance import COMPLEXITY, PerformanceRecorder, PerformanceSample

__all__ = ["COMPLEXITY", "PerformanceRecorder", "PerformanceSample"]
