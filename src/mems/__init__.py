"""Function memoization with argument history, bounded results and a wrapper registry."""

import logging

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
from mems.core.versioning import package_version
from mems.ops.keys import ArgumentKeyError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = package_version()

__all__ = [
    "ArgumentKeyError",
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
