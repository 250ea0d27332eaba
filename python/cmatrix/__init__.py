"""Generic dense matrices with strict shape rules and a boolean cell wrapper."""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _dist_version

try:
    __version__ = _dist_version("cmatrix")
except PackageNotFoundError:
    __version__ = "unknown"

from ._internal import factories as _factories
from ._internal.cbool import CBool
from ._internal.errors import CMatrixError, InvalidArgumentError, MatrixIndexError
from ._internal.matrix import CellRef, Matrix
from ._internal.runtime import default_runtime as _default_runtime
from ._internal.warnings import CMatrixDTypeWarning, CMatrixWarning


def zeros(dim_h: int, dim_v: int) -> Matrix[int]:
    """``int`` zeros with ``dim_v`` rows and ``dim_h`` columns."""

    return _factories.zeros(dim_h, dim_v, matrix_cls=Matrix)


def identity(n: int) -> Matrix[int]:
    return _factories.identity(n, matrix_cls=Matrix)


def randint(dim_v: int, dim_h: int, low: int, high: int, seed: int | None = None) -> Matrix[int]:
    """Uniform integers in ``[low, high]``; see ``set_default_seed`` for unseeded calls."""

    return _factories.randint(dim_v, dim_h, low, high, seed, matrix_cls=Matrix)


def set_default_seed(seed: int | None) -> None:
    """Override (or with ``None`` clear) the seed used by unseeded ``randint`` calls."""

    _default_runtime().set_default_seed(seed)


is_matrix = Matrix.is_matrix
flatten_vector = Matrix.flatten_vector

__all__ = [
    "CBool",
    "CMatrixDTypeWarning",
    "CMatrixError",
    "CMatrixWarning",
    "CellRef",
    "InvalidArgumentError",
    "Matrix",
    "MatrixIndexError",
    "flatten_vector",
    "identity",
    "is_matrix",
    "randint",
    "set_default_seed",
    "zeros",
]
