"""Configuration of the interning cache."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class CacheConfig:
    """
    Bounds of the interning cache.

    Attributes:
        high_water: size at which an eviction pass is run before insertion
        low_water: number of least recently touched entries dropped per pass
        enabled: if False, the cache never stores anything and every lookup misses
    """
    high_water: int = 2**16
    low_water: int = 2**12
    enabled: bool = True

    def __post_init__(self) -> None:
        if not 0 < self.low_water <= self.high_water:
            raise ValueError(
                f"Bad cache bounds: need 0 < low_water <= high_water, "
                f"got low_water={self.low_water}, high_water={self.high_water}"
            )

    @classmethod
    def disabled(cls) -> CacheConfig:
        return cls(enabled=False)

    @classmethod
    def small(cls, high_water: int = 16, low_water: int = 4) -> CacheConfig:
        """Tiny bounds, eviction is easy to trigger."""
        return cls(high_water=high_water, low_water=low_water)
