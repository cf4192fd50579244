"""Scaled-fraction helpers on top of SafeInt.

All monetary values are non-negative integers in an asset's native scale
(6 decimals by default). Ratios are expressed in basis points out of 10000.
"""

from __future__ import annotations

from equilibrium.safe_int import S, SafeInt

__all__ = [
    # Constants
    "BPS_DENOMINATOR",
    "LP_DECIMALS",
    "NEUTRAL_CONCENTRATION",
    # Functions
    "mul_div",
    "mul_div_up",
    "bps_mul_up",
    "ratio_bps",
    "format_basis_points",
]

# 10000 bps = 100%
BPS_DENOMINATOR = 10_000

# LP-share mints use the same scale as the underlying stablecoins
LP_DECIMALS = 6

# Concentration factor of 1.0
NEUTRAL_CONCENTRATION = 1_000


def mul_div(a: SafeInt | int, b: SafeInt | int, c: SafeInt | int) -> SafeInt:
    """Compute floor(a * b / c) with a 256-bit intermediate.

    Raises:
        DivisionByZero: If c is zero
        ArithmeticOverflow: If a * b exceeds the intermediate width
    """
    return (S(a) * S(b)) // S(c)


def mul_div_up(a: SafeInt | int, b: SafeInt | int, c: SafeInt | int) -> SafeInt:
    """Compute ceil(a * b / c) with a 256-bit intermediate."""
    return (S(a) * S(b)).ceiling_div(S(c))


def bps_mul_up(amount: SafeInt | int, bps: int) -> SafeInt:
    """Apply a basis-point ratio to an amount, rounding up."""
    return mul_div_up(amount, bps, BPS_DENOMINATOR)


def ratio_bps(part: SafeInt | int, whole: SafeInt | int) -> SafeInt:
    """Express part/whole in basis points, rounding down."""
    return mul_div(part, BPS_DENOMINATOR, whole)


def format_basis_points(bps: int) -> str:
    """Format basis points as a percentage string.

    Examples:
        format_basis_points(50) == "0.50%"
        format_basis_points(4500) == "45.00%"
    """
    whole, fraction = divmod(bps, 100)
    return f"{whole}.{fraction:02d}%"
