"""Tests for the TTL result cache."""

from dataclasses import dataclass
from datetime import date

import pytest

from finproj.cache import ResultCache, build_cache_key
from finproj.models.compound import CompoundInterestParams, ContributionTiming
from finproj.utils.time import FixedClock


@dataclass(frozen=True)
class _TaggedParams:
    names: frozenset
    when: date


@pytest.fixture
def cache(clock: FixedClock) -> ResultCache:
    """Small cache on the fake clock."""
    return ResultCache(ttl_seconds=60.0, max_entries=3, clock=clock)


class TestBuildCacheKey:
    """Test canonical key construction."""

    def test_structurally_equal_params_share_key(self):
        """Distinct but equal parameter objects produce one key."""
        first = CompoundInterestParams(1000, 0.05, 12, 10)
        second = CompoundInterestParams(1000, 0.05, 12, 10)
        assert first is not second
        assert build_cache_key("compound_interest", first) == build_cache_key("compound_interest", second)

    def test_different_params_differ(self):
        first = CompoundInterestParams(1000, 0.05, 12, 10)
        second = CompoundInterestParams(1000, 0.06, 12, 10)
        assert build_cache_key("compound_interest", first) != build_cache_key("compound_interest", second)

    def test_calculator_name_prefixes_key(self):
        params = CompoundInterestParams(1000, 0.05, 12, 10)
        assert build_cache_key("compound_interest", params).startswith("compound_interest:")
        assert build_cache_key("a", params) != build_cache_key("b", params)

    def test_enum_and_string_values_match(self):
        """A str-valued enum and its raw value encode the same."""
        first = CompoundInterestParams(1000, 0.05, 12, 10, contribution_timing=ContributionTiming.BEGINNING)
        second = CompoundInterestParams(1000, 0.05, 12, 10, contribution_timing="beginning")
        assert build_cache_key("c", first) == build_cache_key("c", second)

    def test_sets_are_order_independent(self):
        """Sets serialize as sorted lists."""
        first = _TaggedParams(names=frozenset(["b", "a", "c"]), when=date(2024, 1, 1))
        second = _TaggedParams(names=frozenset(["c", "b", "a"]), when=date(2024, 1, 1))
        key = build_cache_key("tagged", first)
        assert key == build_cache_key("tagged", second)
        assert '["a","b","c"]' in key
        assert "2024-01-01" in key


class TestResultCacheReadWrite:
    """Test get/put semantics."""

    def test_miss_then_hit(self, cache: ResultCache):
        assert cache.get("k") is None
        cache.put("k", 42)
        assert cache.get("k") == 42

        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_entry_fields(self, cache: ResultCache, clock: FixedClock):
        """Entries carry tags and expire ttl seconds after creation."""
        clock.advance(10.0)
        entry = cache.put("k", "v", dependency_tags=["a", "b"], compute_duration_ms=1.5)
        assert entry.created_at == 10.0
        assert entry.expires_at == 70.0
        assert entry.dependency_tags == frozenset({"a", "b"})
        assert entry.compute_duration_ms == 1.5
        assert cache.get_entry("k") == entry

    def test_expired_entry_is_purged_on_read(self, cache: ResultCache, clock: FixedClock):
        """Reads after the TTL miss and delete the entry."""
        cache.put("k", 42)
        clock.advance(60.0)
        assert cache.get("k") == 42

        clock.advance(0.001)
        assert cache.get("k") is None
        assert "k" not in cache
        assert cache.stats()["expirations"] == 1

    def test_reput_replaces_value(self, cache: ResultCache):
        cache.put("k", 1)
        cache.put("k", 2)
        assert cache.get("k") == 2
        assert len(cache) == 1


class TestResultCacheEviction:
    """Test capacity eviction."""

    def test_oldest_inserted_is_evicted(self, cache: ResultCache):
        """Access does not protect an entry from eviction."""
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("c", 3)
        cache.get("a")

        cache.put("d", 4)

        assert "a" not in cache
        assert all(key in cache for key in ("b", "c", "d"))
        assert cache.stats()["evictions"] == 1

    def test_reput_refreshes_insertion_slot(self, cache: ResultCache):
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("c", 3)
        cache.put("a", 10)

        cache.put("d", 4)

        assert "b" not in cache
        assert cache.get("a") == 10

    def test_size_never_exceeds_capacity(self, cache: ResultCache):
        for index in range(20):
            cache.put(f"k{index}", index)
            assert len(cache) <= 3


class TestResultCacheInvalidation:
    """Test tag invalidation."""

    def test_invalidate_by_tag(self, cache: ResultCache):
        """Only entries sharing a tag are removed."""
        cache.put("a", 1, dependency_tags=["debt-1"])
        cache.put("b", 2, dependency_tags=["debt-2"])
        cache.put("c", 3, dependency_tags=["debt-1", "debt-2"])

        removed = cache.invalidate(["debt-1"])

        assert removed == 2
        assert "b" in cache
        assert "a" not in cache and "c" not in cache

    def test_invalidate_unknown_tag(self, cache: ResultCache):
        cache.put("a", 1, dependency_tags=["x"])
        assert cache.invalidate(["y"]) == 0
        assert len(cache) == 1

    def test_invalidate_all(self, cache: ResultCache):
        cache.put("a", 1)
        cache.put("b", 2, dependency_tags=["x"])
        assert cache.invalidate() == 2
        assert len(cache) == 0

    def test_stats_shape(self, cache: ResultCache):
        stats = cache.stats()
        assert stats == {
            "size": 0,
            "capacity": 3,
            "ttl_seconds": 60.0,
            "hits": 0,
            "misses": 0,
            "evictions": 0,
            "expirations": 0,
        }
