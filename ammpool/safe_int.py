"""Safe integer wrapper for arithmetic on pool amounts.

Pool amounts are unsigned 64-bit values, but intermediate products (for
example ``reserve * claim_in``) need the full 128-bit width before the
division narrows them again. SafeInt keeps the unbounded Python int for
intermediates and checks the things that matter:
- Division by zero raises DivideByZero
- Subtraction underflow raises Underflow
- Values that do not fit in u64 raise Overflow on to_u64()

Usage pattern:
    from ammpool.safe_int import S

    def share_of(reserve: int, claim: int, supply: int) -> int:
        # Wrap at entry
        sr, sc, ss = S(reserve), S(claim), S(supply)

        # Wide intermediate, floor division
        result = (sr * sc) // ss  # Raises if ss == 0

        # Narrow at exit
        return result.to_u64()
"""

from __future__ import annotations

from ammpool.constants import U64_MAX
from ammpool.errors import DivideByZero, Overflow, Underflow


class SafeInt:
    """Integer with checked arithmetic for pool amounts.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt (bool is rejected)
        """
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division.

        Raises:
            DivideByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivideByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __rfloordiv__(self, other: int) -> SafeInt:
        if self._value == 0:
            raise DivideByZero(f"Division by zero: {other} // 0")
        return SafeInt(other // self._value)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def to_u64(self) -> int:
        """Narrow to an int, validating u64 bounds.

        Raises:
            Overflow: If value is negative or exceeds 2^64-1
        """
        if self._value < 0:
            raise Overflow(f"Negative value cannot be u64: {self._value}")
        if self._value > U64_MAX:
            raise Overflow(f"Value exceeds u64 max: {self._value}")
        return self._value

    def is_u64(self) -> bool:
        """Check if value fits in u64 without raising."""
        return 0 <= self._value <= U64_MAX


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


def u64(value: int) -> SafeInt:
    """Wrap an operand that must already be a valid u64 amount.

    Raises:
        TypeError: If value is not an int
        Overflow: If value is negative or exceeds 2^64-1
    """
    wrapped = SafeInt(value)
    wrapped.to_u64()
    return wrapped


# Convenience alias for concise code
S = SafeInt
