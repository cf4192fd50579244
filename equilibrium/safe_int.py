"""Safe integer wrapper for arithmetic on token amounts.

This module provides SafeInt, a lightweight wrapper that makes arithmetic
operations safe by default:
- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Addition/multiplication beyond the intermediate width raise ArithmeticOverflow
- Amounts wider than 64 bits are caught on conversion

Usage pattern:
    from equilibrium.safe_int import SafeInt, S

    def calculate(a: int, b: int, c: int) -> int:
        # Wrap at entry
        sa, sb, sc = S(a), S(b), S(c)

        # Natural arithmetic - automatically safe
        result = (sa * sb) // sc  # Raises if sc == 0
        remainder = sa - sb       # Raises if sb > sa

        # Unwrap at exit
        return result.to_amount()
"""

from __future__ import annotations

from equilibrium.errors import ArithmeticOverflow, DivisionByZero, Underflow

# Token amounts, reserves and LP supply are 64-bit unsigned quantities
AMOUNT_MAX = 2**64 - 1

# Intermediates (D^2, products of reserves) may use up to 256 bits
UINT256_MAX = 2**256 - 1


class SafeInt:
    """Integer with safe arithmetic operations.

    Wraps an integer and provides arithmetic operators that raise
    descriptive errors instead of producing invalid results:
    - Division by zero raises DivisionByZero
    - Negative results from subtraction raise Underflow
    - Results wider than 256 bits raise ArithmeticOverflow
    - Values exceeding the amount width raise ArithmeticOverflow on to_amount()

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Args:
            value: Integer value to wrap, or SafeInt to copy

        Raises:
            TypeError: If value is not an int or SafeInt
            ArithmeticOverflow: If value is wider than 256 bits
        """
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            if abs(value) > UINT256_MAX:
                raise ArithmeticOverflow(f"Value exceeds 256-bit intermediate width: {value}")
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
        """Add two values.

        Raises:
            ArithmeticOverflow: If the sum is wider than 256 bits
        """
        other_val = _extract_value(other)
        return _checked(self._value + other_val, "+", self._value, other_val)

    def __radd__(self, other: int) -> SafeInt:
        return _checked(other + self._value, "+", other, self._value)

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
        """Subtract self from other (other - self).

        Raises:
            Underflow: If result would be negative
        """
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        """Multiply two values.

        Raises:
            ArithmeticOverflow: If the product is wider than 256 bits
        """
        other_val = _extract_value(other)
        return _checked(self._value * other_val, "*", self._value, other_val)

    def __rmul__(self, other: int) -> SafeInt:
        return _checked(other * self._value, "*", other, self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __rfloordiv__(self, other: int) -> SafeInt:
        """Integer division (other // self).

        Raises:
            DivisionByZero: If self is zero
        """
        if self._value == 0:
            raise DivisionByZero(f"Division by zero: {other} // 0")
        return SafeInt(other // self._value)

    def __mod__(self, other: SafeInt | int) -> SafeInt:
        """Modulo operation.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Modulo by zero: {self._value} % 0")
        return SafeInt(self._value % other_val)

    def __abs__(self) -> SafeInt:
        """Absolute value."""
        return SafeInt(abs(self._value))

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

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

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Ceiling division (rounds up).

        Equivalent to: (self + other - 1) // other

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return SafeInt((self._value + other_val - 1) // other_val)

    def abs_diff(self, other: SafeInt | int) -> SafeInt:
        """Return |self - other| without raising Underflow."""
        return SafeInt(abs(self._value - _extract_value(other)))

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return SafeInt(min(self._value, _extract_value(other)))

    def to_amount(self) -> int:
        """Convert to int, validating the 64-bit amount width.

        Raises:
            ArithmeticOverflow: If value is negative or exceeds 2^64-1
        """
        if self._value < 0:
            raise ArithmeticOverflow(f"Negative value cannot be an amount: {self._value}")
        if self._value > AMOUNT_MAX:
            raise ArithmeticOverflow(f"Value exceeds amount max: {self._value}")
        return self._value

    @classmethod
    def zero(cls) -> SafeInt:
        """Create a SafeInt with value 0."""
        return cls(0)


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


def _checked(result: int, op: str, left: int, right: int) -> SafeInt:
    if abs(result) > UINT256_MAX:
        raise ArithmeticOverflow(f"Overflow: {left} {op} {right} exceeds 256-bit width")
    return SafeInt(result)


def to_amount(value: int) -> int:
    """Validate a raw caller-supplied integer as an amount."""
    return SafeInt(value).to_amount()


# Convenience alias for concise code
S = SafeInt
