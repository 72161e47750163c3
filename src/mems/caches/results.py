"""Bounded result store with FIFO eviction."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Sequence

from mems.core.options import MemsOptions
from mems.ops.keys import canonical_key

logger = logging.getLogger(__name__)


class ResultStore:
    """Results keyed by the canonical key of their argument list.

    Holds at most ``max_cache_size`` entries. Inserting a new key into a full
    store evicts the oldest key first. Overwriting a key moves it to the newest
    position and never evicts.
    """

    def __init__(self, options: MemsOptions):
        self.max_cache_size = options.max_cache_size
        self._results: OrderedDict[str, Any] = OrderedDict()

    @staticmethod
    def key_for(args: Sequence[Any]) -> str:
        return canonical_key(args)

    def add_result(self, args: Sequence[Any], result: Any) -> None:
        key = self.key_for(args)
        if key in self._results:
            self._results.move_to_end(key)
        elif len(self._results) >= self.max_cache_size:
            oldest_key, _ = self._results.popitem(last=False)
            logger.debug("Evicted oldest result (capacity %d): %s", self.max_cache_size, oldest_key)
        self._results[key] = result

    def get_result(self, args: Sequence[Any], default: Any = None) -> Any:
        return self._results.get(self.key_for(args), default)

    def has_result(self, args: Sequence[Any]) -> bool:
        return self.key_for(args) in self._results

    def remove_result(self, args: Sequence[Any]) -> bool:
        key = self.key_for(args)
        if key not in self._results:
            return False
        del self._results[key]
        return True

    def clear(self) -> None:
        self._results.clear()

    @property
    def size(self) -> int:
        return len(self._results)

    def __len__(self) -> int:
        return len(self._results)
