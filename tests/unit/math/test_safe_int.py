"""Tests for SafeInt safe arithmetic wrapper."""

import pytest

from equilibrium.errors import ArithmeticOverflow, DivisionByZero, EquilibriumError, Underflow
from equilibrium.safe_int import AMOUNT_MAX, UINT256_MAX, S, SafeInt, to_amount


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_from_negative(self):
        """SafeInt can hold negative values (validated on conversion)."""
        assert SafeInt(-10).value == -10

    def test_from_invalid_type_raises(self):
        """SafeInt rejects invalid types."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore

    def test_from_bool_raises(self):
        """Booleans are not amounts."""
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_wider_than_256_bits_raises(self):
        """Values outside the intermediate width are rejected on construction."""
        assert SafeInt(UINT256_MAX).value == UINT256_MAX
        with pytest.raises(ArithmeticOverflow):
            SafeInt(UINT256_MAX + 1)

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt

    def test_zero_constructor(self):
        """SafeInt.zero() creates zero value."""
        assert SafeInt.zero().value == 0


class TestSafeIntArithmetic:
    """Tests for SafeInt arithmetic operations."""

    def test_add(self):
        """Addition works with SafeInt and int operands."""
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15
        assert (5 + S(10)).value == 15

    def test_add_overflow_raises(self):
        """Sums wider than 256 bits raise ArithmeticOverflow."""
        with pytest.raises(ArithmeticOverflow):
            S(UINT256_MAX) + 1
        with pytest.raises(ArithmeticOverflow):
            1 + S(UINT256_MAX)

    def test_sub_positive_result(self):
        """Subtraction with positive result works."""
        assert (S(10) - S(3)).value == 7
        assert (S(10) - 3).value == 7
        assert (10 - S(3)).value == 7

    def test_sub_zero_result(self):
        """Subtraction resulting in zero works."""
        assert (S(5) - S(5)).value == 0

    def test_sub_underflow_raises(self):
        """Subtraction underflow raises Underflow."""
        with pytest.raises(Underflow) as exc_info:
            S(5) - S(10)
        assert "5 - 10" in str(exc_info.value)

    def test_rsub_underflow_raises(self):
        """Reverse subtraction underflow raises Underflow."""
        with pytest.raises(Underflow):
            5 - S(10)

    def test_underflow_is_arithmetic_overflow(self):
        """Underflow is caught by handlers for ArithmeticOverflow."""
        with pytest.raises(ArithmeticOverflow):
            S(0) - 1

    def test_mul(self):
        """Multiplication works correctly."""
        assert (S(6) * S(7)).value == 42
        assert (6 * S(7)).value == 42

    def test_mul_within_intermediate_width(self):
        """Products of two 64-bit amounts fit the intermediate width."""
        assert (S(AMOUNT_MAX) * S(AMOUNT_MAX)).value == AMOUNT_MAX * AMOUNT_MAX

    def test_mul_overflow_raises(self):
        """Products wider than 256 bits raise ArithmeticOverflow."""
        with pytest.raises(ArithmeticOverflow):
            S(2**200) * S(2**100)

    def test_floordiv(self):
        """Floor division rounds down."""
        assert (S(10) // S(3)).value == 3
        assert (10 // S(3)).value == 3

    def test_floordiv_by_zero_raises(self):
        """Division by zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            S(10) // 0
        with pytest.raises(DivisionByZero):
            10 // S(0)

    def test_mod_by_zero_raises(self):
        """Modulo by zero raises DivisionByZero."""
        assert (S(10) % 3).value == 1
        with pytest.raises(DivisionByZero):
            S(10) % 0

    def test_ceiling_div(self):
        """Ceiling division rounds up."""
        assert S(10).ceiling_div(3).value == 4
        assert S(9).ceiling_div(3).value == 3
        assert S(0).ceiling_div(3).value == 0

    def test_ceiling_div_by_zero_raises(self):
        """Ceiling division by zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            S(10).ceiling_div(0)

    def test_abs_diff(self):
        """abs_diff never underflows."""
        assert S(3).abs_diff(10).value == 7
        assert S(10).abs_diff(3).value == 7

    def test_min(self):
        """min returns the smaller operand."""
        assert S(3).min(10).value == 3
        assert S(30).min(10).value == 10


class TestSafeIntComparison:
    """Tests for comparisons and conversions."""

    def test_equality_with_int(self):
        """SafeInt compares equal to plain ints."""
        assert S(5) == 5
        assert S(5) == S(5)
        assert S(5) != 6

    def test_ordering(self):
        """Ordering works across SafeInt and int."""
        assert S(3) < 5
        assert S(5) <= S(5)
        assert S(7) > S(5)
        assert S(7) >= 7

    def test_bool_and_int(self):
        """Truthiness and int() follow the wrapped value."""
        assert not S(0)
        assert S(1)
        assert int(S(42)) == 42

    def test_hash_matches_int(self):
        """SafeInt can be used as a dict key interchangeably with int."""
        assert hash(S(42)) == hash(42)


class TestToAmount:
    """Tests for the 64-bit amount width check."""

    def test_in_range(self):
        """Values in [0, 2^64-1] convert."""
        assert S(0).to_amount() == 0
        assert S(AMOUNT_MAX).to_amount() == AMOUNT_MAX

    def test_too_wide_raises(self):
        """Values above 2^64-1 raise ArithmeticOverflow."""
        with pytest.raises(ArithmeticOverflow):
            S(AMOUNT_MAX + 1).to_amount()

    def test_negative_raises(self):
        """Negative values are not amounts."""
        with pytest.raises(ArithmeticOverflow):
            S(-1).to_amount()

    def test_module_helper(self):
        """to_amount() validates raw integers."""
        assert to_amount(123) == 123
        with pytest.raises(ArithmeticOverflow):
            to_amount(2**64)

    def test_errors_share_base(self):
        """Arithmetic errors are engine errors and ArithmeticErrors."""
        assert issubclass(ArithmeticOverflow, EquilibriumError)
        assert issubclass(ArithmeticOverflow, ArithmeticError)
        assert issubclass(DivisionByZero, ArithmeticError)
