"""Pool dataclasses.

Pools are immutable records: every state transition builds a new Pool and the
engine commits it in one step, so a failed operation never leaves a partially
updated pool behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from equilibrium.addressing import normalize_address

# Growth pools trade hub vs partner around an implicit 50/50 target
GROWTH_TARGET_WEIGHTS = (5_000, 5_000)

# Index of the hub asset (parent Seed pool's LP share) in a Growth pool
HUB_INDEX = 0


class PoolKind(str, Enum):
    """Whether the pool is the 3-asset hub or a 2-asset spoke."""

    SEED = "seed"
    GROWTH = "growth"


@dataclass(frozen=True)
class SeedPoolRef:
    """Typed reference from a Growth pool to the Seed pool whose LP it trades.

    Attributes:
        pool_id: Identity of the parent Seed pool
        lp_mint: LP mint the Growth pool expects as its hub asset
    """

    pool_id: str
    lp_mint: str


@dataclass(frozen=True)
class Pool:
    """Seed or Growth pool state.

    Attributes:
        pool_id: Derived pool identity
        kind: PoolKind.SEED or PoolKind.GROWTH
        config_id: AmmConfig the pool was created under
        lp_mint: Identity of the pool's LP-share mint
        mints: Asset mints, in reserve order (hub first for Growth pools)
        token_accounts: Pool-owned ledger accounts, one per mint
        reserves: Current reserves in native units
        amplification: Amplification coefficient A
        lp_supply: Outstanding LP shares
        target_weights: Target weights in bps (Seed pools only)
        seed_pool: Parent reference (Growth pools only)
        fees_collected: Cumulative fees retained per asset
        created_at: Creation timestamp (unix seconds)
        updated_at: Last state change timestamp (unix seconds)
    """

    pool_id: str
    kind: PoolKind
    config_id: str
    lp_mint: str
    mints: tuple[str, ...]
    token_accounts: tuple[str, ...]
    reserves: tuple[int, ...]
    amplification: int
    lp_supply: int
    target_weights: tuple[int, ...] | None = None
    seed_pool: SeedPoolRef | None = None
    fees_collected: tuple[int, ...] = ()
    created_at: int = 0
    updated_at: int = 0

    @property
    def n_assets(self) -> int:
        return len(self.reserves)

    @property
    def effective_target_weights(self) -> tuple[int, ...]:
        """Weights the fee model prices against."""
        if self.target_weights is not None:
            return self.target_weights
        return GROWTH_TARGET_WEIGHTS

    @property
    def is_growth(self) -> bool:
        return self.kind is PoolKind.GROWTH

    def index_of(self, mint: str) -> int | None:
        """Reserve index of a mint, or None if the pool does not hold it."""
        mint_norm = normalize_address(mint)
        for i, pool_mint in enumerate(self.mints):
            if pool_mint == mint_norm:
                return i
        return None
