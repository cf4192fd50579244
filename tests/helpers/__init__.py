"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Mints, users and reference pool parameters
- factories: Engine, clock and pool factory functions
"""

from tests.helpers.constants import (
    ALICE,
    AMPLIFICATION,
    AUTHORITY,
    BOB,
    CAROL,
    COW,
    DAI,
    GNO,
    INITIAL_RESERVE,
    SEED_MINTS,
    T0,
    TARGET_WEIGHTS,
    USDC,
    USDT,
)
from tests.helpers.factories import FixedClock, fund, make_engine, make_growth_pool, make_seed_pool

__all__ = [
    # Constants
    "USDC",
    "USDT",
    "DAI",
    "SEED_MINTS",
    "GNO",
    "COW",
    "AUTHORITY",
    "ALICE",
    "BOB",
    "CAROL",
    "AMPLIFICATION",
    "TARGET_WEIGHTS",
    "INITIAL_RESERVE",
    "T0",
    # Factories
    "FixedClock",
    "fund",
    "make_engine",
    "make_seed_pool",
    "make_growth_pool",
]
