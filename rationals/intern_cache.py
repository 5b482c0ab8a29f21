from __future__ import annotations
from collections import OrderedDict
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from .config import CacheConfig

if TYPE_CHECKING:
    from .rational import Rational


logger = logging.getLogger(__name__)

CacheKey = str | tuple[int, int] | tuple[str, int | float]


@dataclass
class _CacheStat:
    hits: int = 0
    misses: int = 0
    puts: int = 0
    eviction_passes: int = 0
    evicted: int = 0


class InternCache:
    # Bounded store of canonical rationals keyed by their source representation.
    #
    # Eviction is approximate LRU (clock-like): keys hit since the last pass are kept
    # in a recency set; when the cache is full, these keys are moved to the recent end
    # all at once, and then low_water entries are dropped from the old end.
    # Not thread-safe: guard get/put with a single lock if shared between threads.

    _entries: OrderedDict[CacheKey, Rational]
    _recent: dict[CacheKey, None]  # insertion-ordered set

    def __init__(self, config: CacheConfig | None = None) -> None:
        self.config = config if config is not None else CacheConfig()
        self._entries = OrderedDict()
        self._recent = {}
        self.stats = _CacheStat()

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def get(self, key: CacheKey) -> Rational | None:
        """Cached rational for key, or None; a hit marks key as recently used."""
        rational = self._entries.get(key)
        if rational is None:
            self.stats.misses += 1
            return None
        self.stats.hits += 1
        self._recent[key] = None
        return rational

    def put(self, rational: Rational, key: CacheKey) -> None:
        if not self.enabled:
            return
        if len(self._entries) >= self.config.high_water and key not in self._entries:
            self._evict()
        self._entries[key] = rational
        self.stats.puts += 1

    def clear(self) -> None:
        self._entries.clear()
        self._recent.clear()
        self.stats = _CacheStat()

    def _evict(self) -> None:
        refreshed = 0
        for key in self._recent:
            if key in self._entries:
                self._entries.move_to_end(key)
                refreshed += 1
        self._recent.clear()

        count = min(self.config.low_water, len(self._entries))
        for _ in range(count):
            self._entries.popitem(last=False)

        self.stats.eviction_passes += 1
        self.stats.evicted += count
        logger.debug('eviction pass: refreshed %d keys, dropped %d, size now %d', refreshed, count, len(self._entries))
