from __future__ import annotations

from collections.abc import Sequence as _SequenceABC
from typing import Any

import numpy as np

from .dtypes import normalize_dtype
from .errors import InvalidArgumentError


def is_sequence_like(value: Any) -> bool:
    return isinstance(value, _SequenceABC) and not isinstance(value, (str, bytes, bytearray))


def is_matrix(candidate: Any) -> bool:
    """True when ``candidate`` is a nested sequence with equal-length rows."""

    if isinstance(candidate, np.ndarray):
        return candidate.ndim == 2
    if not is_sequence_like(candidate):
        return False
    width: int | None = None
    for row in candidate:
        if not is_sequence_like(row):
            return False
        if width is None:
            width = len(row)
        elif len(row) != width:
            return False
    return True


def flatten_rows(rows: Any) -> list[Any]:
    return [value for row in rows for value in row]


def coerce_sequence_rows(candidate: Any) -> list[list[Any]]:
    if not is_sequence_like(candidate):
        raise TypeError("Matrix data must be provided as a nested sequence or a NumPy array.")
    rows: list[list[Any]] = []
    for row in candidate:
        if not is_sequence_like(row):
            raise TypeError("Each matrix row must be a sequence of entries.")
        rows.append(list(row))
    if not is_matrix(rows):
        raise InvalidArgumentError(
            "Matrix data must be rectangular (every row must have the same length)."
        )
    if not rows or not rows[0]:
        return []
    return rows


def coerce_literal(candidate: Any) -> tuple[list[list[Any]], type | None]:
    """Turn a literal (nested sequence or 2-D array) into rows plus a dtype hint.

    The hint is only known for NumPy input, where the array dtype decides.
    """

    if isinstance(candidate, np.ndarray):
        if candidate.ndim != 2:
            raise InvalidArgumentError("Matrix input must be a 2D structure.")
        hint = normalize_dtype(candidate.dtype)
        if candidate.shape[0] == 0 or candidate.shape[1] == 0:
            return [], hint
        return candidate.tolist(), hint

    return coerce_sequence_rows(candidate), None
