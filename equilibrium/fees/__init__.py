"""Weighted dynamic fee model for Equilibrium pools."""

from equilibrium.fees.calculator import (
    FeeQuote,
    current_weights,
    dynamic_fee_bps,
    quote_fee,
    weight_deviation,
)
from equilibrium.fees.config import BASE_FEE_BPS, DEFAULT_FEE_CONFIG, MAX_FEE_BPS, FeeConfig

__all__ = [
    "BASE_FEE_BPS",
    "MAX_FEE_BPS",
    "DEFAULT_FEE_CONFIG",
    "FeeConfig",
    "FeeQuote",
    "current_weights",
    "weight_deviation",
    "dynamic_fee_bps",
    "quote_fee",
]
