"""History of every argument list a memoized function has been called with."""

from __future__ import annotations

from typing import Any, Sequence

from mems.core.options import MemsOptions
from mems.ops.equality import Equality, select_equality


class ArgumentHistory:
    """Unbounded, insertion-ordered record of argument lists.

    Lookups scan the whole history with the equality selected by
    ``should_deep_compare_args`` and hand back the stored list, never the
    probe, because results are keyed by the stored list.
    """

    def __init__(self, options: MemsOptions):
        self._is_equal: Equality = select_equality(options.should_deep_compare_args)
        self._history: list[Sequence[Any]] = []

    def add_args(self, args: Sequence[Any]) -> None:
        self._history.append(args)

    def match_args(self, args: Sequence[Any]) -> Sequence[Any] | None:
        for old_args in self._history:
            if self._is_equal(old_args, args):
                return old_args
        return None

    def clear(self) -> None:
        self._history.clear()

    def __len__(self) -> int:
        return len(self._history)
