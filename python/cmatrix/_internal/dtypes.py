from __future__ import annotations

import numbers
from typing import Any, Iterable

import numpy as np

from .errors import InvalidArgumentError

_TOKENS: dict[str, type] = {
    "int": int,
    "integer": int,
    "i64": int,
    "int64": int,
    "float": float,
    "double": float,
    "f64": float,
    "float64": float,
    "complex": complex,
    "complex128": complex,
    "str": str,
    "string": str,
    "bool": bool,
    "bool_": bool,
    "object": object,
}

_NUMPY_KINDS: dict[str, type] = {
    "i": int,
    "u": int,
    "f": float,
    "c": complex,
    "b": bool,
    "U": str,
    "O": object,
}


def dtype_name(dtype: Any) -> str:
    return getattr(dtype, "__name__", repr(dtype))


def normalize_dtype(dtype: Any) -> type | None:
    """Normalize user-provided dtype tokens into element types.

    Returns a Python type or None.

    Accepted inputs include:
    - Python types: int, float, str, CBool, user classes, ...
    - Case-insensitive strings: "int", "FLOAT", "f64", "complex", "str", ...
    - NumPy dtypes/scalar types: np.int16, np.dtype("float32"), ...
      (mapped onto the matching Python builtin)

    ``bool`` is returned as is so that callers can reject it with a precise
    message; see ``check_valid_type``.
    """

    if dtype is None:
        return None

    if isinstance(dtype, str):
        token = dtype.strip().lower()
        if token == "cbool":
            from .cbool import CBool

            return CBool
        if token in _TOKENS:
            return _TOKENS[token]
        raise InvalidArgumentError(f"Unknown dtype token: {dtype!r}")

    if isinstance(dtype, np.dtype) or (isinstance(dtype, type) and issubclass(dtype, np.generic)):
        kind = np.dtype(dtype).kind
        if kind not in _NUMPY_KINDS:
            raise InvalidArgumentError(f"Unsupported NumPy dtype: {np.dtype(dtype)}")
        return _NUMPY_KINDS[kind]

    if isinstance(dtype, type):
        return dtype

    raise InvalidArgumentError(f"dtype must be a type or a dtype token, got {dtype!r}")


def check_valid_type(dtype: Any) -> None:
    if dtype is bool:
        raise InvalidArgumentError(
            "bool is not a valid matrix element type; use CBool for truth values"
        )


def _is_number_type(tp: type) -> bool:
    return issubclass(tp, numbers.Number) and not issubclass(tp, (bool, np.bool_))


def infer_dtype(values: Iterable[Any], default: type) -> type:
    """Pick the element type describing every value.

    A single value type is used as is (NumPy scalars map onto builtins).
    Numeric mixes promote: int + float -> float, anything + complex -> complex.
    Any other mix is ambiguous and must be resolved with an explicit dtype.
    """

    seen: list[type] = []
    for value in values:
        tp = type(value)
        if tp not in seen:
            seen.append(tp)

    if not seen:
        return default

    if len(seen) == 1:
        tp = seen[0]
        if issubclass(tp, np.generic):
            return normalize_dtype(tp)  # type: ignore[return-value]
        return tp

    if all(_is_number_type(tp) for tp in seen):
        if any(not issubclass(tp, numbers.Real) for tp in seen):
            return complex
        if any(not issubclass(tp, numbers.Integral) for tp in seen):
            return float
        return int

    names = ", ".join(sorted(dtype_name(tp) for tp in seen))
    raise InvalidArgumentError(
        f"Matrix cells mix element types ({names}); pass dtype explicitly"
    )


def coerce_value(value: Any, dtype: type) -> Any:
    if dtype is object or type(value) is dtype:
        return value
    try:
        return dtype(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(
            f"Cannot convert {dtype_name(type(value))} value {value!r} to {dtype_name(dtype)}"
        ) from exc


def default_value(dtype: type) -> Any:
    """Default-constructed value of ``dtype`` (the additive "zero")."""

    try:
        return dtype()
    except TypeError as exc:
        raise InvalidArgumentError(
            f"{dtype_name(dtype)} is not default-constructible; pass an explicit value"
        ) from exc


def unit_value(dtype: type) -> Any:
    """Multiplicative unit of ``dtype`` (``dtype(1)``)."""

    try:
        return dtype(1)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{dtype_name(dtype)} has no unit value") from exc


def is_arithmetic(dtype: Any) -> bool:
    return isinstance(dtype, type) and _is_number_type(dtype) and issubclass(dtype, numbers.Real)


def require_arithmetic(dtype: Any, op: str) -> None:
    if not is_arithmetic(dtype):
        raise InvalidArgumentError(
            f"{op} requires an arithmetic element type, got {dtype_name(dtype)}"
        )


def is_narrowing(source: type, target: type) -> bool:
    """True when converting ``source`` values to ``target`` drops fractions."""

    return (
        is_arithmetic(source)
        and not issubclass(source, numbers.Integral)
        and isinstance(target, type)
        and issubclass(target, numbers.Integral)
    )
