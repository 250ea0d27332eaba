from __future__ import annotations

import sys
from typing import Any, TextIO

import numpy as np


def _format_value(value: Any) -> str:
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _format_row(row: list[Any], sep: str) -> str:
    return sep.join(_format_value(value) for value in row)


def matrix_str(matrix: Any) -> str:
    """Render ``[[1, 2, 3], [4, 5, 6]]``; the empty matrix renders ``[]``."""

    if matrix.is_empty():
        return "[]"
    rows = ", ".join(f"[{_format_row(row, ', ')}]" for row in matrix.to_vector())
    return f"[{rows}]"


def matrix_repr(matrix: Any) -> str:
    dtype = getattr(matrix.dtype, "__name__", repr(matrix.dtype))
    return f"<{type(matrix).__name__} shape={matrix.shape} dtype={dtype}>"


def print_matrix(matrix: Any, file: TextIO | None = None) -> None:
    """Write the matrix row-major, one row per line, cells separated by a space."""

    out = sys.stdout if file is None else file
    for row in matrix.to_vector():
        out.write(_format_row(row, " ") + "\n")
