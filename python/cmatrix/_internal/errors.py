"""cmatrix exception categories.

Every failure raised by the library derives from ``CMatrixError`` and from
the builtin exception a caller would naturally expect (``ValueError`` for
bad arguments, ``IndexError`` for bad positions), so both styles of
``except`` clause work.

Keep this module lightweight and dependency-free to avoid import cycles.
"""


class CMatrixError(Exception):
    """Base class for all cmatrix failures."""


class InvalidArgumentError(CMatrixError, ValueError):
    """An argument violates a shape, type or value precondition."""


class MatrixIndexError(CMatrixError, IndexError):
    """A row, column or cell index lies outside the valid range."""
