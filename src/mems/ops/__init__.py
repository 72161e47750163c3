"""Argument comparison and keying."""

from .equality import deep_equal, same_value, select_equality, shallow_equal
from .keys import ArgumentKeyError, KeywordArguments, argument_list, canonical_key

__all__ = [
    "ArgumentKeyError",
    "KeywordArguments",
    "argument_list",
    "canonical_key",
    "deep_equal",
    "same_value",
    "select_equality",
    "shallow_equal",
]
