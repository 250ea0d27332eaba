from __future__ import annotations

import copy
import operator
import warnings
from collections.abc import Iterable, Iterator
from typing import Any, Callable, Generic, TypeVar

import numpy as np

from . import factories, ops, statistics, validation
from .cbool import CBool
from .coercion import coerce_literal, flatten_rows, is_matrix as _is_matrix_literal
from .dtypes import (
    check_valid_type,
    coerce_value,
    default_value,
    dtype_name,
    infer_dtype,
    is_narrowing,
    normalize_dtype,
    unit_value,
)
from .errors import InvalidArgumentError
from .formatting import matrix_repr, matrix_str, print_matrix
from .warnings import CMatrixDTypeWarning

T = TypeVar("T")

_MISSING = object()

_NUMPY_DTYPES: dict[type, Any] = {
    int: np.int64,
    float: np.float64,
    complex: np.complex128,
    str: np.str_,
    CBool: np.bool_,
}


def _index_list(ids: Any) -> list[int]:
    try:
        return [operator.index(ids)]
    except TypeError:
        pass
    if isinstance(ids, (str, bytes)) or not isinstance(ids, Iterable):
        raise TypeError(f"expected an index or an iterable of indices, got {type(ids).__name__}")
    return [validation.as_index(i) for i in ids]


_CELLS_FORMS = "cells() expects (row, col), a (row, col) tuple, or an iterable of (row, col) pairs"


def _is_index_pair(candidate: Any) -> bool:
    if not isinstance(candidate, (tuple, list)) or len(candidate) != 2:
        return False
    try:
        operator.index(candidate[0])
        operator.index(candidate[1])
    except TypeError:
        return False
    return True


def _same_vector(values: list[Any], vec: Any) -> bool:
    if len(values) != len(vec):
        return False
    return all(bool(x == y) for x, y in zip(values, vec))


class CellRef(Generic[T]):
    """Mutable handle on one matrix cell.

    The index is checked when the handle is created and again on every read
    or write, so a handle outliving a shrinking matrix fails instead of
    touching the wrong cell.
    """

    __slots__ = ("_matrix", "_row", "_col")

    def __init__(self, matrix: "Matrix[T]", row: int, col: int) -> None:
        matrix.check_id_row(row)
        matrix.check_id_col(col)
        self._matrix = matrix
        self._row = validation.as_index(row)
        self._col = validation.as_index(col)

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def value(self) -> T:
        return self._matrix.cell(self._row, self._col)

    @value.setter
    def value(self, value: T) -> None:
        self._matrix.set_cell(self._row, self._col, value)

    def __repr__(self) -> str:
        return f"CellRef(row={self._row}, col={self._col}, value={self.value!r})"


class Matrix(Generic[T]):
    """Dense, rectangular, row-major matrix over one element type.

    Construction:
    - ``Matrix()``: the empty 0x0 matrix.
    - ``Matrix(rows, cols[, fill], dtype=None)``: every cell is ``fill``, or
      ``dtype()`` when no fill is given. A zero dimension yields 0x0.
    - ``Matrix(literal, dtype=None)``: nested sequence or 2-D NumPy array.
    - ``Matrix(other, dtype=None)``: deep copy, converting cells when a
      different dtype is requested.

    ``bool`` is never a valid element type; truth-valued results are
    ``Matrix[CBool]``.
    """

    __slots__ = ("_rows", "_dtype")
    __hash__ = None  # type: ignore[assignment]
    # NumPy scalars defer to the reflected Matrix operators.
    __array_ufunc__ = None

    def __init__(
        self,
        data: Any = None,
        cols: Any = None,
        fill: Any = _MISSING,
        *,
        dtype: Any = None,
    ) -> None:
        dt = normalize_dtype(dtype)
        if dt is not None:
            check_valid_type(dt)

        if data is None:
            if cols is not None or fill is not _MISSING:
                raise TypeError("Matrix(rows, cols) requires both dimensions")
            self._rows: list[list[Any]] = []
            self._dtype: type = float if dt is None else dt
            return

        if isinstance(data, Matrix):
            if cols is not None or fill is not _MISSING:
                raise TypeError("Matrix(other) takes no cols or fill")
            if dt is None or dt is data._dtype:
                self._rows = copy.deepcopy(data._rows)
                self._dtype = data._dtype
            else:
                self._rows = [[coerce_value(copy.deepcopy(v), dt) for v in row] for row in data._rows]
                self._dtype = dt
            return

        if isinstance(data, (int, np.integer)) and not isinstance(data, (bool, np.bool_)):
            self._init_dims(int(data), cols, fill, dt)
            return

        if cols is not None or fill is not _MISSING:
            raise TypeError("Matrix(literal) takes no cols or fill")
        rows, hint = coerce_literal(data)
        if dt is None:
            dt = hint if hint is not None else infer_dtype(flatten_rows(rows), default=float)
        check_valid_type(dt)
        self._rows = [[coerce_value(copy.deepcopy(v), dt) for v in row] for row in rows]
        self._dtype = dt

    def _init_dims(self, n_rows: int, cols: Any, fill: Any, dt: type | None) -> None:
        if cols is None:
            raise TypeError("Matrix(rows, cols) requires both dimensions")
        n_cols = validation.as_index(cols)
        if n_rows < 0 or n_cols < 0:
            raise InvalidArgumentError(
                f"Matrix dimensions must be non-negative, got {n_rows}x{n_cols}"
            )

        if dt is None:
            dt = float if fill is _MISSING else infer_dtype([fill], default=float)
        check_valid_type(dt)
        self._dtype = dt

        if n_rows == 0 or n_cols == 0:
            self._rows = []
            return

        value = default_value(dt) if fill is _MISSING else coerce_value(fill, dt)
        self._rows = [[copy.deepcopy(value) for _ in range(n_cols)] for _ in range(n_rows)]

    @classmethod
    def _from_rows(cls, rows: list[list[Any]], dtype: type) -> "Matrix[Any]":
        check_valid_type(dtype)
        out = cls.__new__(cls)
        if not rows or not rows[0]:
            out._rows = []
        else:
            out._rows = [[coerce_value(v, dtype) for v in row] for row in rows]
        out._dtype = dtype
        return out

    def _assign(self, other: "Matrix[Any]") -> "Matrix[Any]":
        self._rows = other._rows
        self._dtype = other._dtype
        return self

    # --- shape ---

    def dim(self) -> tuple[int, int]:
        if not self._rows:
            return (0, 0)
        return (len(self._rows), len(self._rows[0]))

    def dim_v(self) -> int:
        return len(self._rows)

    def dim_h(self) -> int:
        return len(self._rows[0]) if self._rows else 0

    @property
    def shape(self) -> tuple[int, int]:
        return self.dim()

    @property
    def dtype(self) -> type:
        return self._dtype

    def is_empty(self) -> bool:
        return not self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[list[T]]:
        for row in self._rows:
            yield list(row)

    # --- access ---

    def cell(self, row: int, col: int) -> T:
        validation.check_id_row(self, row)
        validation.check_id_col(self, col)
        return self._rows[row][col]

    def cell_ref(self, row: int, col: int) -> CellRef[T]:
        return CellRef(self, row, col)

    def __getitem__(self, key: Any) -> T:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("Matrix indices must be a (row, col) pair")
        return self.cell(key[0], key[1])

    def __setitem__(self, key: Any, value: Any) -> None:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("Matrix indices must be a (row, col) pair")
        self.set_cell(key[0], key[1], value)

    def rows(self, ids: Any) -> "Matrix[T]":
        """Rows ``ids`` (one index or an iterable of indices) as a new matrix."""

        ids = _index_list(ids)
        for i in ids:
            validation.check_id_row(self, i)
        return type(self)._from_rows([copy.deepcopy(self._rows[i]) for i in ids], self._dtype)

    def columns(self, ids: Any) -> "Matrix[T]":
        """Columns ``ids`` (one index or an iterable of indices) as a new matrix."""

        ids = _index_list(ids)
        for j in ids:
            validation.check_id_col(self, j)
        out = [[copy.deepcopy(row[j]) for j in ids] for row in self._rows]
        return type(self)._from_rows(out, self._dtype)

    def rows_vec(self, n: int) -> list[T]:
        validation.check_id_row(self, n)
        return copy.deepcopy(self._rows[n])

    def columns_vec(self, n: int) -> list[T]:
        validation.check_id_col(self, n)
        return [copy.deepcopy(row[n]) for row in self._rows]

    def cells(self, ids: Any, col: Any = None) -> "Matrix[T]":
        """1xN matrix of the named cells.

        ``cells(row, col)`` and ``cells((row, col))`` select a single cell;
        ``cells(ids)`` takes an iterable of ``(row, col)`` pairs, in order.
        """

        if col is not None:
            pairs = [(ids, col)]
        elif _is_index_pair(ids):
            pairs = [tuple(ids)]
        else:
            if not isinstance(ids, Iterable):
                raise TypeError(_CELLS_FORMS)
            pairs = []
            for pair in ids:
                if not _is_index_pair(pair):
                    raise TypeError(_CELLS_FORMS)
                pairs.append(tuple(pair))
        for pair in pairs:
            validation.check_id_row(self, pair[0])
            validation.check_id_col(self, pair[1])
        values = [copy.deepcopy(self._rows[r][c]) for r, c in pairs]
        return type(self)._from_rows([values], self._dtype)

    def transpose(self) -> "Matrix[T]":
        cols = [copy.deepcopy(list(col)) for col in zip(*self._rows)]
        return type(self)._from_rows(cols, self._dtype)

    def diag(self) -> list[T]:
        size = min(self.dim())
        return [copy.deepcopy(self._rows[i][i]) for i in range(size)]

    # --- mutation ---

    def _coerce_vector(self, vec: Iterable[Any]) -> list[Any]:
        return [coerce_value(v, self._dtype) for v in vec]

    def set_cell(self, row: int, col: int, value: Any) -> None:
        validation.check_id_row(self, row)
        validation.check_id_col(self, col)
        self._rows[row][col] = coerce_value(value, self._dtype)

    def set_row(self, n: int, vec: Any) -> None:
        validation.check_id_row(self, n)
        validation.check_valid_row(self, vec)
        self._rows[n] = self._coerce_vector(vec)

    def set_column(self, n: int, vec: Any) -> None:
        validation.check_id_col(self, n)
        validation.check_valid_col(self, vec)
        for row, value in zip(self._rows, self._coerce_vector(vec)):
            row[n] = value

    def set_diag(self, vec: Any) -> None:
        validation.check_valid_diag(self, vec)
        for i, value in enumerate(self._coerce_vector(vec)):
            self._rows[i][i] = value

    def insert_row(self, pos: int, vec: Any) -> None:
        validation.check_id_expected(pos, self.dim_v())
        if self.is_empty():
            validation.check_non_empty_vector(vec, "row")
            self._rows = [self._coerce_vector(vec)]
            return
        validation.check_valid_row(self, vec)
        self._rows.insert(pos, self._coerce_vector(vec))

    def insert_column(self, pos: int, vec: Any) -> None:
        validation.check_id_expected(pos, self.dim_h())
        if self.is_empty():
            validation.check_non_empty_vector(vec, "column")
            self._rows = [[value] for value in self._coerce_vector(vec)]
            return
        validation.check_valid_col(self, vec)
        for row, value in zip(self._rows, self._coerce_vector(vec)):
            row.insert(pos, value)

    def push_row_front(self, vec: Any) -> None:
        self.insert_row(0, vec)

    def push_row_back(self, vec: Any) -> None:
        self.insert_row(self.dim_v(), vec)

    def push_col_front(self, vec: Any) -> None:
        self.insert_column(0, vec)

    def push_col_back(self, vec: Any) -> None:
        self.insert_column(self.dim_h(), vec)

    def remove_row(self, n: int) -> None:
        validation.check_id_row(self, n)
        del self._rows[n]

    def remove_column(self, n: int) -> None:
        validation.check_id_col(self, n)
        for row in self._rows:
            del row[n]
        if not self._rows[0]:
            self._rows = []

    def fill(self, value: Any) -> None:
        value = coerce_value(value, self._dtype)
        for row in self._rows:
            for j in range(len(row)):
                row[j] = copy.deepcopy(value)

    def clear(self) -> None:
        self._rows = []

    def apply(self, func: Callable[..., Any], indexed: bool = False) -> None:
        """Replace every cell with ``func(value)`` (or ``func(value, row, col)``)."""

        for i, row in enumerate(self._rows):
            for j, value in enumerate(row):
                result = func(value, i, j) if indexed else func(value)
                row[j] = coerce_value(result, self._dtype)

    # --- search ---

    def find_row(self, target: Any) -> int:
        """Index of the first row matching ``target`` (a predicate or a vector), else -1."""

        for i, row in enumerate(self._rows):
            if callable(target):
                if target(list(row)):
                    return i
            elif _same_vector(row, target):
                return i
        return -1

    def find_column(self, target: Any) -> int:
        for j, col in enumerate(zip(*self._rows)):
            if callable(target):
                if target(list(col)):
                    return j
            elif _same_vector(list(col), target):
                return j
        return -1

    def find(self, target: Any) -> tuple[int, int]:
        """Row-major position of the first cell matching ``target``, else ``(-1, -1)``."""

        for i, row in enumerate(self._rows):
            for j, value in enumerate(row):
                hit = target(value) if callable(target) else value == target
                if hit:
                    return (i, j)
        return (-1, -1)

    # --- predicates ---

    def is_square(self) -> bool:
        rows, cols = self.dim()
        return rows == cols

    def is_diag(self) -> bool:
        if self.is_empty():
            return True
        zero = default_value(self._dtype)
        return all(
            bool(value == zero)
            for i, row in enumerate(self._rows)
            for j, value in enumerate(row)
            if i != j
        )

    def is_identity(self) -> bool:
        if self.is_empty():
            return True
        if not self.is_square() or not self.is_diag():
            return False
        one = unit_value(self._dtype)
        return all(bool(self._rows[i][i] == one) for i in range(self.dim_v()))

    def is_symetric(self) -> bool:
        if not self.is_square():
            return False
        n = self.dim_v()
        return all(
            bool(self._rows[i][j] == self._rows[j][i]) for i in range(n) for j in range(i + 1, n)
        )

    is_symmetric = is_symetric

    def is_triangular_up(self) -> bool:
        if not self.is_square():
            return False
        zero = default_value(self._dtype) if self._rows else None
        return all(bool(self._rows[i][j] == zero) for i in range(self.dim_v()) for j in range(i))

    def is_triangular_low(self) -> bool:
        if not self.is_square():
            return False
        zero = default_value(self._dtype) if self._rows else None
        n = self.dim_v()
        return all(bool(self._rows[i][j] == zero) for i in range(n) for j in range(i + 1, n))

    def all(self, target: Any) -> bool:
        """True when every cell matches ``target`` (a predicate or a value)."""

        test = target if callable(target) else (lambda v: v == target)
        return all(bool(test(value)) for row in self._rows for value in row)

    def any(self, target: Any) -> bool:
        test = target if callable(target) else (lambda v: v == target)
        return any(bool(test(value)) for row in self._rows for value in row)

    # --- reductions ---

    def min(self, axis: int = 0) -> "Matrix[T]":
        return statistics.reduce_min(self, axis)

    def max(self, axis: int = 0) -> "Matrix[T]":
        return statistics.reduce_max(self, axis)

    def sum(self, axis: int = 0, zero: Any = None) -> "Matrix[T]":
        return statistics.reduce_sum(self, axis, zero)

    def mean(self, axis: int = 0) -> "Matrix[float]":
        return statistics.reduce_mean(self, axis)

    def std(self, axis: int = 0) -> "Matrix[float]":
        return statistics.reduce_std(self, axis)

    def median(self, axis: int = 0) -> "Matrix[T]":
        return statistics.reduce_median(self, axis)

    # --- transforms and conversion ---

    def map(self, func: Callable[..., Any], indexed: bool = False, dtype: Any = None) -> "Matrix[Any]":
        """New matrix of ``func(value)`` (or ``func(value, row, col)``) per cell.

        The result dtype is ``dtype`` when given, otherwise inferred from the
        produced values (the receiver's dtype when there are none).
        """

        rows = [
            [func(value, i, j) if indexed else func(value) for j, value in enumerate(row)]
            for i, row in enumerate(self._rows)
        ]
        dt = normalize_dtype(dtype)
        if dt is None:
            dt = infer_dtype(flatten_rows(rows), default=self._dtype)
        return type(self)._from_rows(rows, dt)

    def cast(self, dtype: Any) -> "Matrix[Any]":
        dt = normalize_dtype(dtype)
        if dt is None:
            raise InvalidArgumentError("cast() requires a dtype")
        check_valid_type(dt)
        if is_narrowing(self._dtype, dt):
            warnings.warn(
                f"cast from {dtype_name(self._dtype)} to {dtype_name(dt)} drops fractional parts",
                CMatrixDTypeWarning,
                stacklevel=2,
            )
        return type(self)(self, dtype=dt)

    def copy(self) -> "Matrix[T]":
        return type(self)(self)

    def __copy__(self) -> "Matrix[T]":
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> "Matrix[T]":
        return type(self)._from_rows(copy.deepcopy(self._rows, memo), self._dtype)

    def to_vector(self) -> list[list[T]]:
        return copy.deepcopy(self._rows)

    def to_numpy(self) -> np.ndarray:
        np_dtype = _NUMPY_DTYPES.get(self._dtype, object)
        if self.is_empty():
            return np.empty((0, 0), dtype=np_dtype)
        if self._dtype is CBool:
            return np.array([[bool(v) for v in row] for row in self._rows], dtype=np.bool_)
        if np_dtype is object:
            out = np.empty(self.dim(), dtype=object)
            for i, row in enumerate(self._rows):
                for j, value in enumerate(row):
                    out[i, j] = value
            return out
        return np.array(self._rows, dtype=np_dtype)

    # --- static helpers and generators ---

    @staticmethod
    def is_matrix(candidate: Any) -> bool:
        """True for a Matrix or a rectangular nested sequence / 2-D array."""

        return isinstance(candidate, Matrix) or _is_matrix_literal(candidate)

    @staticmethod
    def flatten_vector(rows: Any) -> list[Any]:
        if isinstance(rows, Matrix):
            return flatten_rows(rows._rows)
        return flatten_rows(rows)

    @classmethod
    def zeros(cls, dim_h: int, dim_v: int) -> "Matrix[int]":
        return factories.zeros(dim_h, dim_v, matrix_cls=cls)

    @classmethod
    def identity(cls, n: int) -> "Matrix[int]":
        return factories.identity(n, matrix_cls=cls)

    @classmethod
    def randint(cls, dim_v: int, dim_h: int, low: int, high: int, seed: int | None = None) -> "Matrix[int]":
        return factories.randint(dim_v, dim_h, low, high, seed, matrix_cls=cls)

    # --- precondition checks ---

    def check_dim(self, expected: Any) -> None:
        validation.check_dim(self, expected)

    def check_valid_row(self, row: Any) -> None:
        validation.check_valid_row(self, row)

    def check_valid_col(self, col: Any) -> None:
        validation.check_valid_col(self, col)

    def check_valid_diag(self, diag: Any) -> None:
        validation.check_valid_diag(self, diag)

    def check_id_row(self, n: int) -> None:
        validation.check_id_row(self, n)

    def check_id_col(self, n: int) -> None:
        validation.check_id_col(self, n)

    @staticmethod
    def check_id_expected(n: int, expected: int, end: int | None = None) -> None:
        validation.check_id_expected(n, expected, end)

    # --- operators ---

    def __eq__(self, other: Any) -> Any:  # type: ignore[override]
        if isinstance(other, Matrix):
            return ops.matrices_equal(self, other)
        return ops.compare(self, other, operator.eq)

    def __ne__(self, other: Any) -> Any:  # type: ignore[override]
        if isinstance(other, Matrix):
            return not ops.matrices_equal(self, other)
        return ops.compare(self, other, operator.ne)

    def __lt__(self, other: Any) -> Any:
        if isinstance(other, Matrix):
            return NotImplemented
        return ops.compare(self, other, operator.lt)

    def __le__(self, other: Any) -> Any:
        if isinstance(other, Matrix):
            return NotImplemented
        return ops.compare(self, other, operator.le)

    def __gt__(self, other: Any) -> Any:
        if isinstance(other, Matrix):
            return NotImplemented
        return ops.compare(self, other, operator.gt)

    def __ge__(self, other: Any) -> Any:
        if isinstance(other, Matrix):
            return NotImplemented
        return ops.compare(self, other, operator.ge)

    def __bool__(self) -> bool:
        raise InvalidArgumentError(
            "The truth value of a Matrix is ambiguous; use all() or any()"
        )

    def __add__(self, other: Any) -> "Matrix[Any]":
        if isinstance(other, Matrix):
            return ops.elementwise(self, other, operator.add)
        return ops.broadcast(self, other, operator.add)

    def __radd__(self, other: Any) -> "Matrix[Any]":
        return ops.broadcast(self, other, operator.add, reflected=True)

    def __sub__(self, other: Any) -> "Matrix[Any]":
        if isinstance(other, Matrix):
            return ops.elementwise(self, other, operator.sub)
        return ops.broadcast(self, other, operator.sub)

    def __rsub__(self, other: Any) -> "Matrix[Any]":
        return ops.broadcast(self, other, operator.sub, reflected=True)

    def __mul__(self, other: Any) -> "Matrix[Any]":
        if isinstance(other, Matrix):
            return ops.elementwise(self, other, operator.mul)
        return ops.broadcast(self, other, operator.mul)

    def __rmul__(self, other: Any) -> "Matrix[Any]":
        return ops.broadcast(self, other, operator.mul, reflected=True)

    def __matmul__(self, other: Any) -> "Matrix[Any]":
        if not isinstance(other, Matrix):
            return NotImplemented
        return ops.matmul(self, other)

    def matmul(self, other: "Matrix[Any]") -> "Matrix[Any]":
        if not isinstance(other, Matrix):
            raise TypeError(f"matmul() expects a Matrix, got {type(other).__name__}")
        return ops.matmul(self, other)

    def __truediv__(self, other: Any) -> "Matrix[Any]":
        if isinstance(other, Matrix):
            return NotImplemented
        return ops.divide(self, other)

    def __pow__(self, exponent: Any) -> "Matrix[T]":
        return ops.power(self, exponent)

    def power(self, exponent: int) -> "Matrix[T]":
        return ops.power(self, exponent)

    def __neg__(self) -> "Matrix[T]":
        return ops.negate(self)

    def __iadd__(self, other: Any) -> "Matrix[Any]":
        return self._assign(self + other)

    def __isub__(self, other: Any) -> "Matrix[Any]":
        return self._assign(self - other)

    def __imul__(self, other: Any) -> "Matrix[Any]":
        return self._assign(self * other)

    def __imatmul__(self, other: Any) -> "Matrix[Any]":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._assign(ops.matmul(self, other))

    def __itruediv__(self, other: Any) -> "Matrix[Any]":
        if isinstance(other, Matrix):
            return NotImplemented
        return self._assign(ops.divide(self, other))

    def __ipow__(self, exponent: Any) -> "Matrix[Any]":
        return self._assign(ops.power(self, exponent))

    # --- text ---

    def __str__(self) -> str:
        return matrix_str(self)

    def __repr__(self) -> str:
        return matrix_repr(self)

    def print(self, file: Any = None) -> None:
        print_matrix(self, file)
