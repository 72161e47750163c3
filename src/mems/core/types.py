"""Core package types shared by the caches and the memoizer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheInfo:
    """Snapshot of one memoized function's cache counters."""

    hits: int
    misses: int
    max_cache_size: int
    size: int
    history_size: int
