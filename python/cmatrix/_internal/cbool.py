from __future__ import annotations

from typing import Any


def _to_bit(value: Any) -> int:
    if isinstance(value, CBool):
        return value._value
    return 1 if value else 0


class CBool:
    """Truth value usable as a matrix element type.

    The builtin ``bool`` is rejected as a matrix dtype because it silently
    behaves as an integer under arithmetic. ``CBool`` keeps a single 0/1 value
    and gives the arithmetic operators a logical meaning instead:

    - ``a + b`` is logical OR (summing a truth matrix answers "any true")
    - ``a * b`` is logical AND
    - ``a - b`` is the signed difference of the 0/1 values, converted back
      to a truth value (true when the operands differ)

    Comparisons return ``CBool``; the other operand is first converted through
    its own truthiness. Instances are immutable, so in-place operators rebind
    to a new value.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any = False) -> None:
        self._value = _to_bit(value)

    def value(self) -> int:
        return self._value

    # --- conversions ---

    def __bool__(self) -> bool:
        return self._value == 1

    def __int__(self) -> int:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"CBool({bool(self)})"

    def __str__(self) -> str:
        return str(self._value)

    # --- logical ---

    def logical_not(self) -> "CBool":
        return CBool(not self._value)

    def logical_and(self, other: Any) -> "CBool":
        return CBool(self._value and _to_bit(other))

    def logical_or(self, other: Any) -> "CBool":
        return CBool(self._value or _to_bit(other))

    def __invert__(self) -> "CBool":
        return self.logical_not()

    def __and__(self, other: Any) -> "CBool":
        return self.logical_and(other)

    def __rand__(self, other: Any) -> "CBool":
        return self.logical_and(other)

    def __or__(self, other: Any) -> "CBool":
        return self.logical_or(other)

    def __ror__(self, other: Any) -> "CBool":
        return self.logical_or(other)

    # --- comparison ---

    def __eq__(self, other: Any) -> "CBool":  # type: ignore[override]
        return CBool(self._value == _to_bit(other))

    def __ne__(self, other: Any) -> "CBool":  # type: ignore[override]
        return CBool(self._value != _to_bit(other))

    def __lt__(self, other: Any) -> "CBool":
        return CBool(self._value < _to_bit(other))

    def __le__(self, other: Any) -> "CBool":
        return CBool(self._value <= _to_bit(other))

    def __gt__(self, other: Any) -> "CBool":
        return CBool(self._value > _to_bit(other))

    def __ge__(self, other: Any) -> "CBool":
        return CBool(self._value >= _to_bit(other))

    # --- arithmetic ---

    def __add__(self, other: Any) -> "CBool":
        return self.logical_or(other)

    def __radd__(self, other: Any) -> "CBool":
        return self.logical_or(other)

    def __sub__(self, other: Any) -> "CBool":
        return CBool(self._value - _to_bit(other))

    def __rsub__(self, other: Any) -> "CBool":
        return CBool(_to_bit(other) - self._value)

    def __mul__(self, other: Any) -> "CBool":
        return self.logical_and(other)

    def __rmul__(self, other: Any) -> "CBool":
        return self.logical_and(other)
