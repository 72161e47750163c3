import math
from fractions import Fraction

import numpy as np
import pandas as pd

from mems.ops.equality import deep_equal, same_value, select_equality, shallow_equal
from mems.ops.keys import KeywordArguments


def test_same_value_scalars_and_nan():
    assert same_value(1, 1)
    assert same_value("abc", "ab" + "c")
    assert same_value(math.nan, float("nan"))
    assert same_value(np.float64("nan"), math.nan)
    assert not same_value(1, 2)
    assert not same_value([1], [1])


def test_shallow_equal_compares_aggregates_by_identity():
    shared = {"a": 1}
    assert shallow_equal([1, shared, "x"], [1, shared, "x"])
    assert not shallow_equal([1, {"a": 1}, [2]], [1, {"a": 1}, [2]])
    assert not shallow_equal([1, 2], [1, 2, 3])


def test_deep_equal_nested_structures():
    left = [1, {"a": [1, 2, {"b": (3, 4)}]}, {5, 6}]
    right = [1, {"a": [1, 2, {"b": (3, 4)}]}, {6, 5}]
    assert deep_equal(left, right)
    assert not deep_equal([{"a": 1}], [{"a": 2}])
    assert not deep_equal([(1, 2)], [[1, 2]])
    assert not deep_equal([{"a": 1}], [{"b": 1}])


def test_deep_equal_handles_cycles():
    a: list = [1]
    a.append(a)
    b: list = [1]
    b.append(b)
    assert deep_equal(a, b)

    c: dict = {"x": 1}
    c["self"] = c
    d: dict = {"x": 2}
    d["self"] = d
    assert not deep_equal(c, d)


def test_deep_equal_arrays_and_frames():
    assert deep_equal([np.array([1.0, np.nan])], [np.array([1.0, np.nan])])
    assert not deep_equal([np.array([1, 2])], [np.array([1, 2, 3])])
    assert deep_equal([np.array(["a", None], dtype=object)], [np.array(["a", None], dtype=object)])

    frame = pd.DataFrame({"x": [1, 2], "y": [0.5, np.nan]})
    assert deep_equal([frame], [frame.copy()])
    assert not deep_equal([frame], [frame.assign(x=[1, 3])])


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


def test_deep_equal_plain_objects_by_state():
    assert deep_equal([Point(1, 2)], [Point(1, 2)])
    assert not deep_equal([Point(1, 2)], [Point(2, 1)])
    assert not shallow_equal([Point(1, 2)], [Point(1, 2)])


def test_select_equality():
    assert select_equality(True) is deep_equal
    assert select_equality(False) is shallow_equal


def test_shallow_equal_compares_keyword_arguments_by_value():
    shared = [1]
    assert shallow_equal([1, KeywordArguments(a=1, b=shared)], [1, KeywordArguments(b=shared, a=1)])
    assert not shallow_equal([1, KeywordArguments(a=1)], [1, KeywordArguments(a=2)])
    assert not shallow_equal([KeywordArguments(b=[1])], [KeywordArguments(b=[1])])
    assert not shallow_equal([KeywordArguments(a=1)], [{"a": 1}])


def test_booleans_and_numbers_are_different_values():
    assert not same_value(True, 1)
    assert not same_value(0, False)
    assert not same_value(1, Fraction(1))
    assert same_value(1, 1.0)
    assert same_value(np.int64(3), 3)
    assert same_value(np.bool_(True), True)
    assert not shallow_equal([True], [1])
    assert not deep_equal([{"flag": True}], [{"flag": 1}])
