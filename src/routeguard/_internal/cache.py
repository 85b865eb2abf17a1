"""Bounded memoizing cache with LRU eviction and hit/miss accounting.

Relies on ``dict`` insertion order: the first key is the least recently
used, the last key the most recently used. Not thread-safe; each
``Analyzer`` owns its caches.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from routeguard.errors import ConfigurationError

# Default capacities, one per cache owned by an Analyzer
NORMALIZATION_CACHE_SIZE = 2000
PREFIX_CACHE_SIZE = 1000


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Point-in-time counters for a ``BoundedCache``."""

    hits: int
    misses: int
    size: int


K = TypeVar("K")
V = TypeVar("V")


class BoundedCache(Generic[K, V]):
    """Fixed-capacity ``K -> V`` store.

    Usage::

        cache: BoundedCache[str, str] = BoundedCache(2)
        cache.set("a", "1")
        cache.set("b", "2")
        cache.get("a")        # "a" is now most recently used
        cache.set("c", "3")   # evicts "b"
    """

    __slots__ = ("_capacity", "_data", "_hits", "_misses")

    def __init__(self, capacity: int = 1000) -> None:
        if capacity < 1:
            msg = f"Cache capacity must be a positive integer, got {capacity!r}."
            raise ConfigurationError(msg)
        self._capacity = capacity
        self._data: dict[K, V] = {}
        self._hits = 0
        self._misses = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K) -> V | None:
        """Return the cached value, refreshing its recency, or ``None``."""
        if key not in self._data:
            self._misses += 1
            return None
        self._hits += 1
        value = self._data.pop(key)
        self._data[key] = value
        return value

    def set(self, key: K, value: V) -> None:
        """Store *value*, evicting the least recently used entry when full."""
        if key in self._data:
            del self._data[key]
        elif len(self._data) >= self._capacity:
            oldest = next(iter(self._data))
            del self._data[oldest]
        self._data[key] = value

    def clear(self) -> None:
        """Drop every entry and reset the hit/miss counters."""
        self._data.clear()
        self._hits = 0
        self._misses = 0

    def stats(self) -> CacheStats:
        return CacheStats(hits=self._hits, misses=self._misses, size=len(self._data))

    def hit_rate(self) -> float:
        """Fraction of ``get()`` calls that hit; ``0.0`` before any lookup."""
        total = self._hits + self._misses
        if total == 0:
            return 0.0
        return self._hits / total

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data
