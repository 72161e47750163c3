"""Canonical string keys for argument lists.

A key is the compact JSON text of a type-tagged encoding of the arguments.
Containers are always tagged (``__map__``, ``__tuple__``, ``__set__`` ...) so
a user value can never impersonate another type's encoding. Mapping items and
set members are ordered by their encoded text, which makes the key independent
of insertion order.

Values without structural state (functions, modules, opaque objects) are keyed
by identity. Callers keep such arguments alive in the argument history, so an
id is not reused while a key built from it is still stored.
"""

from __future__ import annotations

import dataclasses
import enum
import json
import numbers
import types
from collections.abc import Mapping, Set
from typing import Any, Sequence

import numpy as np
import pandas as pd

from mems.utils.hash import array_sha256, pandas_sha256


class ArgumentKeyError(TypeError):
    """Raised when an argument list cannot be turned into a canonical key."""


class KeywordArguments(dict):
    """Keyword arguments of one call, carried as the last item of an argument list."""

    __slots__ = ()


def argument_list(args: Sequence[Any], kwargs: Mapping[str, Any] | None = None) -> list[Any]:
    out = list(args)
    if kwargs:
        out.append(KeywordArguments(kwargs))
    return out


def canonical_key(args: Sequence[Any]) -> str:
    try:
        encoded = _encode(list(args), {})
        return json.dumps(encoded, separators=(",", ":"), ensure_ascii=True, allow_nan=True)
    except ArgumentKeyError:
        raise
    except (TypeError, ValueError, RecursionError) as exc:
        raise ArgumentKeyError(f"Arguments cannot be keyed: {exc}") from exc


def _qualname(value: Any) -> str:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def _text(encoded: Any) -> str:
    return json.dumps(encoded, separators=(",", ":"), ensure_ascii=True, allow_nan=True)


def _encode(value: Any, path: dict[int, int]) -> Any:
    if isinstance(value, enum.Enum):
        return {"__enum__": f"{_qualname(value)}.{value.name}"}
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, np.generic):
        return _encode(value.item(), path)
    if isinstance(value, (bytes, bytearray)):
        return {"__bytes__": value.hex()}
    if isinstance(value, complex):
        return {"__complex__": [value.real, value.imag]}
    if isinstance(value, numbers.Number):
        return {"__number__": _qualname(value), "value": str(value)}
    if isinstance(value, (types.FunctionType, types.BuiltinFunctionType, types.MethodType, types.ModuleType, type)):
        return _identity(value)

    ident = id(value)
    if ident in path:
        return {"__cycle__": path[ident]}
    path[ident] = len(path)
    try:
        return _encode_container(value, path)
    finally:
        del path[ident]


def _encode_container(value: Any, path: dict[int, int]) -> Any:
    if isinstance(value, list):
        return [_encode(item, path) for item in value]
    if isinstance(value, tuple):
        return {"__tuple__": [_encode(item, path) for item in value]}
    if isinstance(value, KeywordArguments):
        return {"__kwargs__": _encode_items(value, path)}
    if isinstance(value, Mapping):
        return {"__map__": _encode_items(value, path)}
    if isinstance(value, Set):
        members = [_encode(item, path) for item in value]
        return {"__set__": sorted(members, key=_text)}
    if isinstance(value, np.ndarray):
        return _encode_array(value, path)
    if isinstance(value, (pd.DataFrame, pd.Series, pd.Index)):
        return _encode_pandas(value, path)
    if dataclasses.is_dataclass(value):
        state = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        return {"__dataclass__": _qualname(value), "fields": _encode_items(state, path)}
    if callable(value):
        return _identity(value)
    state = getattr(value, "__dict__", None)
    if isinstance(state, dict):
        return {"__object__": _qualname(value), "state": _encode_items(state, path)}
    if type(value).__repr__ is not object.__repr__:
        return {"__repr__": _qualname(value), "value": repr(value)}
    return _identity(value)


def _encode_items(mapping: Mapping[Any, Any], path: dict[int, int]) -> list[list[Any]]:
    items = [[_encode(key, path), _encode(item, path)] for key, item in mapping.items()]
    return sorted(items, key=lambda pair: _text(pair[0]))


def _encode_array(arr: np.ndarray, path: dict[int, int]) -> dict[str, Any]:
    out: dict[str, Any] = {"__ndarray__": arr.dtype.str, "shape": list(arr.shape)}
    if arr.dtype.hasobject:
        out["data"] = _encode(arr.tolist(), path)
    else:
        out["sha256"] = array_sha256(arr)
    return out


def _encode_pandas(obj: pd.DataFrame | pd.Series | pd.Index, path: dict[int, int]) -> dict[str, Any]:
    out: dict[str, Any] = {"__pandas__": _qualname(obj), "shape": list(obj.shape)}
    if isinstance(obj, pd.DataFrame):
        out["columns"] = _encode(list(obj.columns), path)
        out["dtypes"] = [str(dtype) for dtype in obj.dtypes]
    else:
        out["name"] = _encode(obj.name, path)
        out["dtypes"] = [str(obj.dtype)]
    out["sha256"] = pandas_sha256(obj)
    return out


def _identity(value: Any) -> dict[str, Any]:
    name = getattr(value, "__qualname__", None) or _qualname(value)
    return {"__id__": str(name), "id": id(value)}
