"""Tests for injectable random sources."""

import numpy as np

from finproj.utils.random import (
    BoxMullerRandomSource,
    NumpyRandomSource,
    create_random_source,
)


class TestNumpyRandomSource:
    """Test the numpy-backed source."""

    def test_same_seed_same_draws(self):
        """Two sources with the same seed produce identical vectors."""
        first = NumpyRandomSource(seed=42).normal(0.0, 1.0, 100)
        second = NumpyRandomSource(seed=42).normal(0.0, 1.0, 100)
        np.testing.assert_array_equal(first, second)

    def test_different_seeds_differ(self):
        first = NumpyRandomSource(seed=1).normal(0.0, 1.0, 100)
        second = NumpyRandomSource(seed=2).normal(0.0, 1.0, 100)
        assert not np.array_equal(first, second)

    def test_vector_size(self):
        assert NumpyRandomSource(seed=7).normal(0.0, 1.0, 25).shape == (25,)


class TestBoxMullerRandomSource:
    """Test the scripted Box-Muller source."""

    def test_constant_uniform_stream(self):
        """A constant stream yields one repeated value per draw."""
        source = BoxMullerRandomSource(lambda: 0.5)
        draws = source.normal(0.0, 1.0, 4)
        assert draws.shape == (4,)
        assert np.all(draws == draws[0])


class TestCreateRandomSource:
    """Test source selection."""

    def test_seed_creates_fresh_source(self):
        source = create_random_source(seed=123)
        assert isinstance(source, NumpyRandomSource)
        assert source.seed == 123

    def test_seed_takes_precedence_over_fallback(self):
        fallback = NumpyRandomSource(seed=1)
        assert create_random_source(seed=5, fallback=fallback) is not fallback

    def test_fallback_used_without_seed(self):
        fallback = NumpyRandomSource(seed=1)
        assert create_random_source(fallback=fallback) is fallback

    def test_default_source(self):
        assert isinstance(create_random_source(), NumpyRandomSource)
