"""
Injectable random sources for stochastic projections.

The Monte Carlo simulator never touches a global generator; it asks a
``RandomSource`` for one normal draw per simulated path per month.
"""

from typing import Callable, Optional, Protocol

import numpy as np

from .numeric import normal_random


class RandomSource(Protocol):
    """Anything that can produce a vector of normal samples."""

    def normal(self, mean: float, std_dev: float, size: int) -> np.ndarray:
        ...


class NumpyRandomSource:
    """Default source backed by ``numpy.random.default_rng``."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def normal(self, mean: float, std_dev: float, size: int) -> np.ndarray:
        return self._rng.normal(mean, std_dev, size)


class BoxMullerRandomSource:
    """
    Source that draws through ``normal_random`` from a scripted uniform stream.

    Useful in tests that need a hand-built, fully predictable sequence.
    """

    def __init__(self, uniform: Callable[[], float]) -> None:
        self._uniform = uniform

    def normal(self, mean: float, std_dev: float, size: int) -> np.ndarray:
        return np.array(
            [normal_random(mean, std_dev, self._uniform) for _ in range(size)],
            dtype=float,
        )


def create_random_source(seed: Optional[int] = None,
                         fallback: Optional[RandomSource] = None) -> RandomSource:
    """Pick a fresh seeded source when a seed is given, else the fallback."""
    if seed is not None:
        return NumpyRandomSource(seed)
    if fallback is not None:
        return fallback
    return NumpyRandomSource()
