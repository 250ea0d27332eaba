"""Axis-wise reductions.

Axis 0 reduces every row into a ``rows x 1`` column, axis 1 reduces every
column into a ``1 x cols`` row. Reducing an empty matrix yields an empty
matrix. ``mean`` and ``std`` are gated on the matrix dtype before any value
is looked at, and always produce ``float`` results.
"""

from __future__ import annotations

import copy
import functools
import operator
from typing import Any, Callable

import numpy as np

from .dtypes import default_value, infer_dtype, require_arithmetic
from .errors import InvalidArgumentError
from .validation import check_axis


def _lanes(matrix: Any, axis: int) -> list[list[Any]]:
    if axis == 0:
        return [list(row) for row in matrix._rows]
    return [list(col) for col in zip(*matrix._rows)]


def _reduce(matrix: Any, axis: Any, fn: Callable[[list[Any]], Any], dtype: type | None = None) -> Any:
    axis = check_axis(axis)
    cls = type(matrix)
    values = [fn(lane) for lane in _lanes(matrix, axis)]
    if dtype is None:
        dtype = matrix.dtype if matrix.dtype is object else infer_dtype(values, default=matrix.dtype)
    if not values:
        return cls._from_rows([], dtype)
    rows = [[v] for v in values] if axis == 0 else [values]
    return cls._from_rows(rows, dtype)


def reduce_min(matrix: Any, axis: Any = 0) -> Any:
    return _reduce(matrix, axis, lambda lane: copy.deepcopy(min(lane)))


def reduce_max(matrix: Any, axis: Any = 0) -> Any:
    return _reduce(matrix, axis, lambda lane: copy.deepcopy(max(lane)))


def reduce_sum(matrix: Any, axis: Any = 0, zero: Any = None) -> Any:
    """Fold each lane with ``+`` starting from ``zero`` (default ``dtype()``)."""

    check_axis(axis)
    seed = default_value(matrix.dtype) if zero is None else zero
    return _reduce(matrix, axis, lambda lane: functools.reduce(operator.add, lane, seed))


def reduce_mean(matrix: Any, axis: Any = 0) -> Any:
    require_arithmetic(matrix.dtype, "mean")
    return _reduce(
        matrix, axis, lambda lane: float(np.mean(np.asarray(lane, dtype=np.float64))), float
    )


def _population_std(lane: list[Any]) -> float:
    if len(lane) < 2:
        raise InvalidArgumentError(
            f"std requires at least 2 values along the reduced axis, got {len(lane)}"
        )
    return float(np.std(np.asarray(lane, dtype=np.float64)))


def reduce_std(matrix: Any, axis: Any = 0) -> Any:
    require_arithmetic(matrix.dtype, "std")
    return _reduce(matrix, axis, _population_std, float)


def _lower_median(lane: list[Any]) -> Any:
    # Even counts take the lower middle value, never an average.
    ordered = sorted(lane)
    return copy.deepcopy(ordered[(len(ordered) - 1) // 2])


def reduce_median(matrix: Any, axis: Any = 0) -> Any:
    return _reduce(matrix, axis, _lower_median)

