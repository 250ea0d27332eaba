"""Precondition checks shared by every shape-sensitive matrix operation.

Checks only look at shape metadata (``matrix.dim()``) and at the lengths of
supplied vectors. Shape and length problems raise ``InvalidArgumentError``;
positions outside their valid range raise ``MatrixIndexError``.
"""

from __future__ import annotations

import operator
from typing import Any, Sized

from .errors import InvalidArgumentError, MatrixIndexError


def _shape_of(obj: Any) -> tuple[int, int]:
    dim = getattr(obj, "dim", None)
    if callable(dim):
        rows, cols = dim()
        return int(rows), int(cols)
    if isinstance(obj, tuple) and len(obj) == 2:
        return int(obj[0]), int(obj[1])
    raise TypeError("expected a matrix or a (rows, cols) tuple")


def as_index(n: Any) -> int:
    try:
        return operator.index(n)
    except TypeError:
        raise TypeError(f"matrix indices must be integers, got {type(n).__name__}") from None


def check_dim(matrix: Any, expected: Any) -> None:
    have = _shape_of(matrix)
    want = _shape_of(expected)
    if have != want:
        raise InvalidArgumentError(
            f"Shape mismatch: expected {want[0]}x{want[1]}, got {have[0]}x{have[1]}"
        )


def check_valid_row(matrix: Any, row: Sized) -> None:
    _, cols = _shape_of(matrix)
    if len(row) != cols:
        raise InvalidArgumentError(f"Row length {len(row)} does not match column count {cols}")


def check_valid_col(matrix: Any, col: Sized) -> None:
    rows, _ = _shape_of(matrix)
    if len(col) != rows:
        raise InvalidArgumentError(f"Column length {len(col)} does not match row count {rows}")


def check_valid_diag(matrix: Any, diag: Sized) -> None:
    rows, cols = _shape_of(matrix)
    size = min(rows, cols)
    if len(diag) != size:
        raise InvalidArgumentError(f"Diagonal length {len(diag)} does not match diagonal size {size}")


def check_id_row(matrix: Any, n: Any) -> None:
    rows, _ = _shape_of(matrix)
    n = as_index(n)
    if n < 0 or n >= rows:
        raise MatrixIndexError(f"Row index {n} out of range [0, {rows})")


def check_id_col(matrix: Any, n: Any) -> None:
    _, cols = _shape_of(matrix)
    n = as_index(n)
    if n < 0 or n >= cols:
        raise MatrixIndexError(f"Column index {n} out of range [0, {cols})")


def check_id_expected(n: Any, expected: int, end: int | None = None) -> None:
    """Check ``n`` against an inclusive range.

    With one bound the range is ``[0, expected]``, with two it is
    ``[expected, end]``.
    """

    n = as_index(n)
    low, high = (0, expected) if end is None else (expected, end)
    if n < low or n > high:
        raise MatrixIndexError(f"Index {n} out of range [{low}, {high}]")


def check_axis(axis: Any) -> int:
    if isinstance(axis, (bool, float)) or axis not in (0, 1):
        raise InvalidArgumentError(f"axis must be 0 (rows) or 1 (columns), got {axis!r}")
    return int(axis)


def check_non_empty_vector(vec: Sized, what: str) -> None:
    if len(vec) == 0:
        raise InvalidArgumentError(f"{what} must not be empty")
