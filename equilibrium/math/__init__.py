"""Mathematical utilities for the Equilibrium AMM.

This package provides the numeric primitives for pool calculations:
- fixed_point: basis-point and mul_div helpers on SafeInt
- stable_math: StableSwap invariant solver (D and y)
"""

from equilibrium.math.fixed_point import (
    BPS_DENOMINATOR,
    LP_DECIMALS,
    NEUTRAL_CONCENTRATION,
    bps_mul_up,
    format_basis_points,
    mul_div,
    mul_div_up,
    ratio_bps,
)
from equilibrium.math.stable_math import MAX_ITERATIONS, calc_out_given_in, compute_d, compute_y

__all__ = [
    "BPS_DENOMINATOR",
    "LP_DECIMALS",
    "NEUTRAL_CONCENTRATION",
    "MAX_ITERATIONS",
    "bps_mul_up",
    "format_basis_points",
    "mul_div",
    "mul_div_up",
    "ratio_bps",
    "compute_d",
    "compute_y",
    "calc_out_given_in",
]
