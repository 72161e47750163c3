"""Options, registry and orchestration for memoized functions."""

from mems.core.memoizer import Memoizer, deep_memoize, memoize
from mems.core.options import (
    ConfigError,
    MemsOptions,
    dump_options,
    fill_options,
    load_options,
    resolve_options,
)
from mems.core.registry import FunctionRegistry, RegistryError, clear_registry, default_registry
from mems.core.types import CacheInfo

__all__ = [
    "CacheInfo",
    "ConfigError",
    "FunctionRegistry",
    "Memoizer",
    "MemsOptions",
    "RegistryError",
    "clear_registry",
    "deep_memoize",
    "default_registry",
    "dump_options",
    "fill_options",
    "load_options",
    "memoize",
    "resolve_options",
]
