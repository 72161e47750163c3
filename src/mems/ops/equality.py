"""Shallow and deep equality of argument lists."""

from __future__ import annotations

import enum
import math
import numbers
from collections.abc import Mapping, Set
from typing import Any, Callable, Sequence

import numpy as np
import pandas as pd

from mems.ops.keys import KeywordArguments

Equality = Callable[[Sequence[Any], Sequence[Any]], bool]

_ATOMS = (str, bytes, numbers.Number, np.generic)


def _is_nan(value: Any) -> bool:
    if isinstance(value, (float, np.floating)):
        return math.isnan(value)
    return False


def _is_atom(value: Any) -> bool:
    return value is None or isinstance(value, _ATOMS)


def same_value(a: Any, b: Any) -> bool:
    """Identity, NaN-aware equality for scalars. Containers only match themselves."""

    if a is b:
        return True
    if _is_nan(a) and _is_nan(b):
        return True
    if _is_atom(a) and _is_atom(b):
        return _scalar_kind(a) is _scalar_kind(b) and bool(a == b)
    return False


def _scalar_kind(value: Any) -> type:
    # booleans and enums never equal plain numbers; ints and floats share one kind
    if isinstance(value, enum.Enum):
        return type(value)
    if isinstance(value, (bool, np.bool_)):
        return bool
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float
    if isinstance(value, (complex, np.complexfloating)):
        return complex
    if isinstance(value, str):
        return str
    if isinstance(value, bytes):
        return bytes
    return type(value)


def shallow_equal(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """Compare two argument lists one level deep."""

    if len(a) != len(b):
        return False
    return all(_shallow_item_equal(x, y) for x, y in zip(a, b))


def _shallow_item_equal(a: Any, b: Any) -> bool:
    # keyword arguments belong to the argument list level, not to the values
    if type(a) is KeywordArguments and type(b) is KeywordArguments:
        return a.keys() == b.keys() and all(same_value(a[key], b[key]) for key in a)
    return same_value(a, b)


def deep_equal(a: Any, b: Any) -> bool:
    """Recursive structural equality. Cycles compare equal when revisited in step."""

    return _deep_equal(a, b, set())


def _deep_equal(a: Any, b: Any, path: set[tuple[int, int]]) -> bool:
    if same_value(a, b):
        return True
    if _is_atom(a) or _is_atom(b):
        return False
    if type(a) is not type(b):
        return False

    if isinstance(a, np.ndarray):
        return _arrays_equal(a, b)
    if isinstance(a, (pd.DataFrame, pd.Series, pd.Index)):
        return bool(a.equals(b))
    if isinstance(a, Set):
        return a == b

    pair = (id(a), id(b))
    if pair in path:
        return True
    path.add(pair)
    try:
        if isinstance(a, Mapping):
            if a.keys() != b.keys():
                return False
            return all(_deep_equal(a[key], b[key], path) for key in a)
        if isinstance(a, (list, tuple)):
            if len(a) != len(b):
                return False
            return all(_deep_equal(x, y, path) for x, y in zip(a, b))
        state_a = getattr(a, "__dict__", None)
        state_b = getattr(b, "__dict__", None)
        if state_a is not None and state_b is not None:
            return _deep_equal(state_a, state_b, path)
    finally:
        path.discard(pair)

    return bool(a == b)


def _arrays_equal(a: np.ndarray, b: np.ndarray) -> bool:
    if a.shape != b.shape:
        return False
    try:
        return bool(np.array_equal(a, b, equal_nan=True))
    except TypeError:
        # equal_nan needs a numeric dtype
        return bool(np.array_equal(a, b))


def select_equality(should_deep_compare_args: bool) -> Equality:
    return deep_equal if should_deep_compare_args else shallow_equal
