"""Memoizer options loading and resolution."""

from __future__ import annotations

import numbers
from copy import deepcopy
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml


class ConfigError(ValueError):
    """Raised when memoizer options are invalid."""


DEFAULT_OPTIONS: dict[str, Any] = {
    "max_cache_size": 1000,
    "should_deep_compare_args": False,
}

CONFIG_SECTION = "mems"


@dataclass(frozen=True)
class MemsOptions:
    """Resolved options for one memoized function."""

    max_cache_size: int = 1000
    should_deep_compare_args: bool = False

    def __post_init__(self) -> None:
        _validate_options(asdict(self))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries and return a new dictionary."""

    out = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(out.get(key), dict):
            out[key] = deep_merge(out[key], value)
        else:
            out[key] = value
    return out


def load_options(path: str | Path) -> dict[str, Any]:
    """Read raw options from a YAML file, either at the root or under ``mems:``."""

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Options file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Options file is not valid YAML: {p}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Options must be a mapping at root: {p}")
    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"'{CONFIG_SECTION}' section must be a mapping: {p}")
    return section


def fill_options(options: MemsOptions | Mapping[str, Any] | None = None) -> MemsOptions:
    """Fill unset options with defaults."""

    if isinstance(options, MemsOptions):
        return options
    return resolve_options(options)


def resolve_options(
    options: MemsOptions | Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> MemsOptions:
    """Resolve options from defaults, an optional YAML file, explicit options and overrides."""

    resolved = deepcopy(DEFAULT_OPTIONS)
    if config_path is not None:
        resolved = deep_merge(resolved, load_options(config_path))
    if isinstance(options, MemsOptions):
        resolved = deep_merge(resolved, options.to_dict())
    elif options is not None:
        if not isinstance(options, Mapping):
            raise ConfigError(f"Options must be a mapping or MemsOptions, got {type(options).__name__}")
        resolved = deep_merge(resolved, _drop_unset(options))
    if overrides:
        resolved = deep_merge(resolved, _drop_unset(overrides))
    _validate_options(resolved)
    return MemsOptions(**resolved)


def dump_options(options: MemsOptions, out_path: str | Path) -> None:
    p = Path(out_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        yaml.safe_dump({CONFIG_SECTION: options.to_dict()}, f, sort_keys=False)


def _drop_unset(options: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in options.items() if value is not None}


def _validate_options(cfg: Mapping[str, Any]) -> None:
    unknown = sorted(set(cfg) - set(DEFAULT_OPTIONS))
    if unknown:
        supported = "|".join(DEFAULT_OPTIONS)
        raise ConfigError(f"Unsupported option(s) {', '.join(unknown)}. Supported: {supported}")

    size = cfg.get("max_cache_size")
    if isinstance(size, bool) or not isinstance(size, numbers.Integral):
        raise ConfigError(f"max_cache_size must be a positive integer, got {size!r}")
    if size < 1:
        raise ConfigError(f"max_cache_size must be a positive integer, got {size}")

    deep = cfg.get("should_deep_compare_args")
    if not isinstance(deep, bool):
        raise ConfigError(f"should_deep_compare_args must be a boolean, got {deep!r}")
