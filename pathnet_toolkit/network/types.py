"""Closed enumerations and numeric checks shared by the network code.

Distance functions follow the usual vector definitions:

- euclidean: sqrt(sum((a - b)^2))
- manhattan: sum(|a - b|)
- cosine: 1 - (a . b) / (||a|| x ||b||), with 1.0 when either vector is all zero
"""

from __future__ import annotations

from enum import Enum
from typing import Union

import numpy as np


class Direction(Enum):
    """Orientation of a matrix view: groups as rows, or features as rows."""

    ROW = "row"
    COLUMN = "column"

    def is_row(self) -> bool:
        if self is Direction.ROW:
            return True
        if self is Direction.COLUMN:
            return False
        raise ValueError(f"Unknown direction: {self!r}")

    @classmethod
    def parse(cls, value: Union[str, "Direction"]) -> "Direction":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown direction: {value!r} (expected 'row' or 'column')") from None


class DistanceMetric(Enum):
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    COSINE = "cosine"

    @classmethod
    def parse(cls, value: Union[str, "DistanceMetric"]) -> "DistanceMetric":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown distance metric: {value!r} (expected one of: {choices})") from None

    def distance(self, a, b) -> float:
        """Distance between two equal-length vectors."""
        a = np.asarray(a, dtype=np.float64).ravel()
        b = np.asarray(b, dtype=np.float64).ravel()
        if a.shape != b.shape:
            raise ValueError(f"Vectors must have the same length ({a.shape[0]} != {b.shape[0]})")

        if self is DistanceMetric.EUCLIDEAN:
            return float(np.sqrt(np.sum((a - b) ** 2)))
        if self is DistanceMetric.MANHATTAN:
            return float(np.sum(np.abs(a - b)))
        if self is DistanceMetric.COSINE:
            norm_a = np.linalg.norm(a)
            norm_b = np.linalg.norm(b)
            if norm_a == 0 or norm_b == 0:
                return 1.0
            return float(1.0 - np.dot(a, b) / (norm_a * norm_b))
        raise ValueError(f"Unknown distance metric: {self!r}")


DEFAULT_WEIGHT_DTYPE = np.dtype(np.float32)


def check_weight_dtype(dtype) -> np.dtype:
    """Return `dtype` as a numpy dtype if it can hold member weights.

    Weights need zero-initialisation, addition and ordering, so any real
    integer or floating dtype works; bool, complex and object dtypes do not.
    """
    dt = np.dtype(dtype)
    if dt == np.bool_ or not (np.issubdtype(dt, np.integer) or np.issubdtype(dt, np.floating)):
        raise TypeError(f"Unsupported weight dtype: {dt} (expected an integer or floating dtype)")
    return dt
