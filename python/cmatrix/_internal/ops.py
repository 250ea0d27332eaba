from __future__ import annotations

import logging
import operator
from typing import Any, Callable

from .cbool import CBool
from .coercion import flatten_rows
from .dtypes import default_value, infer_dtype, unit_value
from .errors import InvalidArgumentError
from .validation import check_dim

logger = logging.getLogger("cmatrix.ops")

BinaryFn = Callable[[Any, Any], Any]


def _result(source: Any, rows: list[list[Any]]) -> Any:
    dtype = source.dtype
    if dtype is not object:
        dtype = infer_dtype(flatten_rows(rows), default=dtype)
    return type(source)._from_rows(rows, dtype)


def elementwise(a: Any, b: Any, fn: BinaryFn) -> Any:
    check_dim(a, b)
    rows = [
        [fn(x, y) for x, y in zip(row_a, row_b)]
        for row_a, row_b in zip(a._rows, b._rows)
    ]
    return _result(a, rows)


def broadcast(a: Any, scalar: Any, fn: BinaryFn, *, reflected: bool = False) -> Any:
    if reflected:
        rows = [[fn(scalar, x) for x in row] for row in a._rows]
    else:
        rows = [[fn(x, scalar) for x in row] for row in a._rows]
    return _result(a, rows)


def negate(a: Any) -> Any:
    return _result(a, [[-x for x in row] for row in a._rows])


def divide(a: Any, scalar: Any) -> Any:
    if scalar == 0:
        raise InvalidArgumentError("Division by zero")
    return broadcast(a, scalar, operator.truediv)


def matmul(a: Any, b: Any) -> Any:
    """Matrix product ``a @ b`` via the triple sum; ``a.cols`` must equal ``b.rows``."""

    r, k = a.dim()
    k2, c = b.dim()
    if k != k2:
        raise InvalidArgumentError(f"matmul dimension mismatch: {a.shape} @ {b.shape}")

    out: list[list[Any]] = []
    for i in range(r):
        row: list[Any] = []
        for j in range(c):
            acc = None
            for kk in range(k):
                term = a._rows[i][kk] * b._rows[kk][j]
                acc = term if acc is None else (acc + term)
            row.append(acc)
        out.append(row)
    return _result(a, out)


def identity_like(source: Any, n: int) -> Any:
    dtype = source.dtype
    zero = default_value(dtype)
    one = unit_value(dtype)
    rows = [[one if i == j else zero for j in range(n)] for i in range(n)]
    return type(source)._from_rows(rows, dtype)


def power(a: Any, exponent: Any) -> Any:
    """Integer power by repeated multiplication; ``a ** 0`` is the identity."""

    if isinstance(exponent, bool):
        raise InvalidArgumentError("exponent must be a non-negative integer, got bool")
    try:
        n = operator.index(exponent)
    except TypeError:
        raise InvalidArgumentError(
            f"exponent must be a non-negative integer, got {exponent!r}"
        ) from None
    if n < 0:
        raise InvalidArgumentError(f"exponent must be a non-negative integer, got {n}")
    if not a.is_square():
        raise InvalidArgumentError(f"power requires a square matrix, got {a.dim_v()}x{a.dim_h()}")

    if n == 0:
        return identity_like(a, a.dim_v())

    logger.debug("power: %d multiplications on a %dx%d matrix", n - 1, a.dim_v(), a.dim_h())
    result = a.copy()
    for _ in range(n - 1):
        result = matmul(result, a)
    return result


def compare(a: Any, scalar: Any, fn: BinaryFn) -> Any:
    rows = [[CBool(fn(x, scalar)) for x in row] for row in a._rows]
    return type(a)._from_rows(rows, CBool)


def matrices_equal(a: Any, b: Any) -> bool:
    if a.dim() != b.dim():
        return False
    return all(
        bool(x == y)
        for row_a, row_b in zip(a._rows, b._rows)
        for x, y in zip(row_a, row_b)
    )
