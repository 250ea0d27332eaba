"""cmatrix warning categories.

These exist so users can filter/suppress cmatrix warnings without
catching all UserWarning.

Keep this module lightweight and dependency-free to avoid import cycles.
"""


class CMatrixWarning(UserWarning):
    """Base warning category for all cmatrix user-facing warnings."""


class CMatrixDTypeWarning(CMatrixWarning):
    """Warnings about element-type conversions that may lose information."""
