"""Shared identity constants for tests.

All identities are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import USDC, ALICE
    # or
    from tests.helpers.constants import USDC, ALICE
"""

# =============================================================================
# Stablecoin mints (Seed pool assets)
# =============================================================================

USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
USDT = "0xdac17f958d2ee523a2206206994597c13d831ec7"
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"

SEED_MINTS = (USDC, USDT, DAI)

# =============================================================================
# Partner tokens (Growth pool assets)
# =============================================================================

GNO = "0x6810e776880c02933d47db1b9fc05908e5386b96"
COW = "0xdef1ca1fb7fbcdc777520aa7f396b4e015f497ab"

# =============================================================================
# Users
# =============================================================================

AUTHORITY = "0x" + "0a" * 20
ALICE = "0x" + "a1" * 20
BOB = "0x" + "b0" * 20
CAROL = "0x" + "c4" * 20

# =============================================================================
# Pool parameters used by the reference scenario
# =============================================================================

AMPLIFICATION = 200
TARGET_WEIGHTS = (4_500, 3_500, 2_000)
INITIAL_RESERVE = 1_000_000

# Fixed clock start (2026-01-01T00:00:00Z)
T0 = 1_767_225_600
