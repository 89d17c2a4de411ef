"""
TTL result cache with insertion-order eviction and tag invalidation.

Entries expire a fixed number of seconds after insertion and are purged
lazily when read. At capacity the oldest-inserted entry is evicted; access
does not refresh an entry's position.
"""

import dataclasses
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Optional

import orjson
import structlog

from ..utils.time import Clock

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A cached calculation result."""
    key: str
    result: Any
    created_at: float
    expires_at: float
    dependency_tags: frozenset[str]
    compute_duration_ms: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


def _json_default(obj: Any) -> Any:
    """Serialize values orjson does not handle natively."""
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=lambda item: orjson.dumps(item, default=_json_default))
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def _to_plain(params: Any) -> Any:
    if dataclasses.is_dataclass(params) and not isinstance(params, type):
        return dataclasses.asdict(params)
    return params


def build_cache_key(calculator_name: str, params: Any) -> str:
    """
    Build a canonical cache key for a calculator call.

    Dataclasses are flattened to dicts and encoded with sorted keys, so
    structurally equal parameters always produce the same key.
    """
    payload = orjson.dumps(
        {"calculator": calculator_name, "params": _to_plain(params)},
        default=_json_default,
        option=orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS,
    )
    return f"{calculator_name}:{payload.decode()}"


class ResultCache:
    """
    Bounded key/result store.

    All reads and mutations happen under a single lock; contention is
    negligible next to the cost of the calculations being cached.
    """

    def __init__(self, ttl_seconds: float = 300.0, max_entries: int = 1000,
                 clock: Optional[Clock] = None) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.clock = clock or Clock()

        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    def get(self, key: str) -> Optional[Any]:
        """Return the cached result, or ``None`` when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            if entry.is_expired(self.clock.now()):
                del self._entries[key]
                self._expirations += 1
                self._misses += 1
                logger.debug("Cache entry expired", key=key)
                return None

            self._hits += 1
            return entry.result

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        """Return the raw entry without touching hit/miss counters."""
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, result: Any, dependency_tags: Optional[Iterable[str]] = None,
            compute_duration_ms: float = 0.0) -> CacheEntry:
        """Insert a result, evicting the oldest entry when full."""
        now = self.clock.now()
        entry = CacheEntry(
            key=key,
            result=result,
            created_at=now,
            expires_at=now + self.ttl_seconds,
            dependency_tags=frozenset(dependency_tags or ()),
            compute_duration_ms=compute_duration_ms,
        )

        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_entries:
                evicted_key, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("Cache entry evicted", key=evicted_key)
            self._entries[key] = entry

        return entry

    def invalidate(self, tags: Optional[Iterable[str]] = None) -> int:
        """
        Remove entries by dependency tag.

        Args:
            tags: Tags to match; ``None`` clears the whole cache

        Returns:
            Number of entries removed
        """
        tag_set = None if tags is None else frozenset(tags)
        with self._lock:
            if tag_set is None:
                removed = len(self._entries)
                self._entries.clear()
            else:
                stale = [key for key, entry in self._entries.items()
                         if entry.dependency_tags & tag_set]
                for key in stale:
                    del self._entries[key]
                removed = len(stale)

        logger.debug("Cache invalidated", tags=sorted(tag_set) if tag_set is not None else None,
                     removed=removed)
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def stats(self) -> dict[str, Any]:
        """Snapshot of size, configuration and counters."""
        with self._lock:
            return {
                "size": len(self._entries),
                "capacity": self.max_entries,
                "ttl_seconds": self.ttl_seconds,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "expirations": self._expirations,
            }
