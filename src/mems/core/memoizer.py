"""Memoization wrappers."""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, TypeVar, Union

from mems.caches.history import ArgumentHistory
from mems.caches.results import ResultStore
from mems.core.options import MemsOptions, resolve_options
from mems.core.registry import BINDINGS_ATTR, FunctionRegistry, RegistryError, default_registry
from mems.core.types import CacheInfo
from mems.ops.keys import ArgumentKeyError, argument_list

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])
OptionsLike = Optional[Union[MemsOptions, Mapping[str, Any]]]

_MISSING = object()


class Memoizer:
    """Builds memoized wrappers that share one function registry."""

    def __init__(self, registry: FunctionRegistry | None = None):
        self.registry = registry if registry is not None else default_registry()

    def memoize(
        self,
        target: Callable[..., Any] | OptionsLike = None,
        options: OptionsLike = None,
        *,
        max_cache_size: int | None = None,
        should_deep_compare_args: bool | None = None,
    ):
        """Return the memoized wrapper of ``target``, or a decorator when no target is given.

        When the target already has a wrapper in the registry that wrapper is
        returned and the options of this call are ignored, invalid or not.
        Otherwise options are validated before the wrapper is built.
        """

        if target is None or isinstance(target, (MemsOptions, Mapping)):
            factory_options = options if target is None else target

            def decorator(func: F) -> F:
                return self.memoize(
                    func,
                    factory_options,
                    max_cache_size=max_cache_size,
                    should_deep_compare_args=should_deep_compare_args,
                )

            return decorator

        if not callable(target):
            raise RegistryError(f"Cannot memoize non-callable {type(target).__name__}")

        if isinstance(getattr(target, "__mems_options__", None), MemsOptions):
            return target

        cached = self.registry.get_memorizer(target)
        if cached is not None:
            logger.debug("Reusing memoized wrapper for %s", _describe(target))
            return cached

        resolved = resolve_options(
            options,
            overrides={
                "max_cache_size": max_cache_size,
                "should_deep_compare_args": should_deep_compare_args,
            },
        )

        wrapper = _build_memorizer(target, resolved)
        self.registry.add_memorizer(target, wrapper)
        logger.debug(
            "Memoized %s (max_cache_size=%d, deep=%s)",
            _describe(target),
            resolved.max_cache_size,
            resolved.should_deep_compare_args,
        )
        return wrapper

    def deep_memoize(self, target: Callable[..., Any] | None = None, *, max_cache_size: int | None = None):
        return self.memoize(target, max_cache_size=max_cache_size, should_deep_compare_args=True)


def memoize(
    target: Callable[..., Any] | OptionsLike = None,
    options: OptionsLike = None,
    *,
    max_cache_size: int | None = None,
    should_deep_compare_args: bool | None = None,
    registry: FunctionRegistry | None = None,
):
    return Memoizer(registry).memoize(
        target,
        options,
        max_cache_size=max_cache_size,
        should_deep_compare_args=should_deep_compare_args,
    )


def deep_memoize(
    target: Callable[..., Any] | None = None,
    *,
    max_cache_size: int | None = None,
    registry: FunctionRegistry | None = None,
):
    return Memoizer(registry).deep_memoize(target, max_cache_size=max_cache_size)


def _build_memorizer(target: Callable[..., Any], options: MemsOptions) -> Callable[..., Any]:
    results = ResultStore(options)
    history = ArgumentHistory(options)
    counters = {"hits": 0, "misses": 0}

    @functools.wraps(target)
    def memorizer(*args: Any, **kwargs: Any) -> Any:
        call_args = argument_list(args, kwargs)
        matched = history.match_args(call_args)
        if matched is not None:
            result = results.get_result(matched, _MISSING)
            if result is not _MISSING:
                counters["hits"] += 1
                return result
            # history outlives the bounded store; refill under the stored list
            logger.debug("Result for %s was evicted; recomputing", _describe(target))
            counters["misses"] += 1
            result = target(*args, **kwargs)
            results.add_result(matched, result)
            return result

        try:
            results.key_for(call_args)
        except ArgumentKeyError:
            logger.debug("Arguments to %s cannot be keyed", _describe(target))
            raise
        counters["misses"] += 1
        result = target(*args, **kwargs)
        history.add_args(call_args)
        results.add_result(call_args, result)
        return result

    def cache_info() -> CacheInfo:
        return CacheInfo(
            hits=counters["hits"],
            misses=counters["misses"],
            max_cache_size=results.max_cache_size,
            size=results.size,
            history_size=len(history),
        )

    def cache_clear() -> None:
        history.clear()
        results.clear()
        counters["hits"] = 0
        counters["misses"] = 0

    memorizer.cache_info = cache_info  # type: ignore[attr-defined]
    memorizer.cache_clear = cache_clear  # type: ignore[attr-defined]
    memorizer.__mems_options__ = options  # type: ignore[attr-defined]
    memorizer.__dict__.pop(BINDINGS_ATTR, None)
    return memorizer


def _describe(target: Callable[..., Any]) -> str:
    return getattr(target, "__qualname__", None) or repr(target)
