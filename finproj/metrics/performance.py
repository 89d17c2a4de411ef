"""Per-call performance samples for diagnostics."""

import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Optional

from ..utils.time import Clock

COMPLEXITY = {
    "calculate_compound_interest": "O(1)",
    "run_monte_carlo_simulation": "O(n²)",
    "calculate_debt_payoff": "O(n)",
}
DEFAULT_COMPLEXITY = "O(n)"


@dataclass(frozen=True)
class PerformanceSample:
    """One recorded calculator invocation."""
    function_name: str
    execution_time_ms: float
    cache_hit: bool
    input_size: int
    complexity: str
    timestamp: float


class PerformanceRecorder:
    """FIFO ring buffer of performance samples."""

    def __init__(self, max_samples: int = 1000, clock: Optional[Clock] = None) -> None:
        self.max_samples = max_samples
        self.clock = clock or Clock()
        self._samples: deque[PerformanceSample] = deque(maxlen=max_samples)
        self._lock = threading.Lock()

    def record(self, function_name: str, execution_time_ms: float,
               cache_hit: bool, input_size: int) -> PerformanceSample:
        """Append a sample; the oldest one is dropped once the buffer is full."""
        sample = PerformanceSample(
            function_name=function_name,
            execution_time_ms=execution_time_ms,
            cache_hit=cache_hit,
            input_size=input_size,
            complexity=COMPLEXITY.get(function_name, DEFAULT_COMPLEXITY),
            timestamp=self.clock.now(),
        )
        with self._lock:
            self._samples.append(sample)
        return sample

    def get_samples(self) -> list[PerformanceSample]:
        with self._lock:
            return list(self._samples)

    def clear(self) -> None:
        with self._lock:
            self._samples.clear()

    def get_stats(self) -> dict[str, Any]:
        """
        Aggregate statistics over buffered samples.

        Average computation time only counts calls that missed the cache.
        """
        samples = self.get_samples()
        total = len(samples)
        hits = sum(1 for s in samples if s.cache_hit)
        computed = [s.execution_time_ms for s in samples if not s.cache_hit]

        calls_by_function: dict[str, int] = {}
        for s in samples:
            calls_by_function[s.function_name] = calls_by_function.get(s.function_name, 0) + 1

        return {
            "total_calls": total,
            "cache_hits": hits,
            "hit_rate": hits / total if total else 0.0,
            "average_computation_time_ms": sum(computed) / len(computed) if computed else 0.0,
            "calls_by_function": calls_by_function,
        }
