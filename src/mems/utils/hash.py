"""Hashing helpers used for canonical argument keys."""

from __future__ import annotations

import hashlib

import numpy as np
import pandas as pd


def bytes_sha256(payload: bytes) -> str:
    return hashlib.sha256(payload).hexdigest()


def array_sha256(arr: np.ndarray) -> str:
    return bytes_sha256(np.ascontiguousarray(arr).tobytes())


def pandas_sha256(obj: pd.DataFrame | pd.Series | pd.Index) -> str:
    """Content hash of a pandas object, index included."""

    if isinstance(obj, pd.Index):
        hashed = pd.util.hash_pandas_object(obj)
    else:
        hashed = pd.util.hash_pandas_object(obj, index=True)
    return array_sha256(hashed.to_numpy(dtype="uint64"))
