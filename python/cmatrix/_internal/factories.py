from __future__ import annotations

import logging
import operator
from typing import Any

import numpy as np

from .errors import InvalidArgumentError
from .runtime import Runtime, default_runtime

logger = logging.getLogger("cmatrix.factories")


def zeros(dim_h: int, dim_v: int, *, matrix_cls: Any) -> Any:
    """``int`` matrix of zeros with ``dim_v`` rows and ``dim_h`` columns."""

    return matrix_cls(dim_v, dim_h, 0, dtype=int)


def identity(n: int, *, matrix_cls: Any) -> Any:
    n = operator.index(n)
    if n < 0:
        raise InvalidArgumentError(f"identity size must be non-negative, got {n}")
    return matrix_cls([[1 if i == j else 0 for j in range(n)] for i in range(n)], dtype=int)


def randint(
    dim_v: int,
    dim_h: int,
    low: int,
    high: int,
    seed: int | None = None,
    *,
    matrix_cls: Any,
    runtime: Runtime | None = None,
) -> Any:
    """``int`` matrix of independent uniform draws from ``[low, high]``.

    The same seed always reproduces the same matrix. Without a seed the
    runtime default applies (``CMATRIX_SEED`` or the wall clock).
    """

    dim_v = operator.index(dim_v)
    dim_h = operator.index(dim_h)
    low = operator.index(low)
    high = operator.index(high)
    if dim_v < 0 or dim_h < 0:
        raise InvalidArgumentError(f"randint dimensions must be non-negative, got {dim_v}x{dim_h}")
    if low > high:
        raise InvalidArgumentError(f"randint requires low <= high, got [{low}, {high}]")

    if seed is None:
        seed = (runtime or default_runtime()).default_seed()
    seed = operator.index(seed)
    if seed < 0:
        raise InvalidArgumentError(f"randint seed must be non-negative, got {seed}")

    logger.debug("randint %dx%d in [%d, %d] seed=%d", dim_v, dim_h, low, high, seed)
    rng = np.random.default_rng(seed)
    values = rng.integers(low, high, size=(dim_v, dim_h), endpoint=True)
    return matrix_cls(values.tolist(), dtype=int)
