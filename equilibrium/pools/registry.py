"""Pool registry for the hub-and-spoke network.

This module provides PoolRegistry for storing pools by identity and for the
hub glue between Growth pools and the Seed pool whose LP share they trade:
- Seed pools (3 stablecoins, the hub)
- Growth pools (hub LP share + one partner token)

Pools are registered once and never removed; state transitions replace the
stored record through commit().
"""

from __future__ import annotations

import structlog

from equilibrium.errors import PoolAlreadyExists, PoolMismatch, UnknownPool
from equilibrium.pools.types import HUB_INDEX, Pool, PoolKind

logger = structlog.get_logger()


class PoolRegistry:
    """Registry of Seed and Growth pools."""

    def __init__(self, pools: list[Pool] | None = None) -> None:
        """Initialize the registry with optional pools.

        Args:
            pools: Initial pools. Growth pools must come after their Seed pool.
        """
        self._pools: dict[str, Pool] = {}
        # Secondary index: seed pool id -> growth pool ids, in registration order
        self._growth_by_seed: dict[str, list[str]] = {}

        if pools:
            for pool in pools:
                self.register(pool)

    def __contains__(self, pool_id: object) -> bool:
        return pool_id in self._pools

    def __len__(self) -> int:
        return len(self._pools)

    def register(self, pool: Pool) -> None:
        """Add a newly created pool.

        Raises:
            PoolAlreadyExists: If a pool with this id is registered
            PoolMismatch: If a Growth pool's hub reference does not resolve
        """
        if pool.pool_id in self._pools:
            raise PoolAlreadyExists(f"Pool {pool.pool_id} already exists")
        if pool.kind is PoolKind.GROWTH:
            self.resolve_hub(pool)

        self._pools[pool.pool_id] = pool
        if pool.seed_pool is not None:
            self._growth_by_seed.setdefault(pool.seed_pool.pool_id, []).append(pool.pool_id)

        logger.debug("pool_registered", pool=pool.pool_id[-8:], kind=pool.kind.value)

    def commit(self, pool: Pool) -> None:
        """Replace the stored record of an existing pool.

        Raises:
            UnknownPool: If the pool was never registered
        """
        if pool.pool_id not in self._pools:
            raise UnknownPool(f"Pool {pool.pool_id} is not registered")
        self._pools[pool.pool_id] = pool

    def get(self, pool_id: str) -> Pool:
        """Get a pool by id.

        Raises:
            UnknownPool: If no pool is registered under pool_id
        """
        pool = self._pools.get(pool_id)
        if pool is None:
            raise UnknownPool(f"Pool {pool_id} is not registered")
        return pool

    @property
    def pools(self) -> list[Pool]:
        return list(self._pools.values())

    def growth_pools_for(self, seed_pool_id: str) -> list[Pool]:
        """All Growth pools whose hub asset is the given Seed pool's LP share."""
        return [self._pools[pid] for pid in self._growth_by_seed.get(seed_pool_id, [])]

    def resolve_hub(self, growth_pool: Pool) -> Pool:
        """Validate a Growth pool's hub leg and return its parent Seed pool.

        The declared SeedPoolRef must name a registered Seed pool, and that
        pool's LP mint must equal both the reference's expected mint and the
        Growth pool's hub asset.

        Raises:
            PoolMismatch: If any of the three identities disagree
        """
        ref = growth_pool.seed_pool
        if growth_pool.kind is not PoolKind.GROWTH or ref is None:
            raise PoolMismatch(f"Pool {growth_pool.pool_id} has no Seed pool reference")

        parent = self._pools.get(ref.pool_id)
        if parent is None or parent.kind is not PoolKind.SEED:
            raise PoolMismatch(f"Pool {ref.pool_id} is not a registered Seed pool")
        if parent.lp_mint != ref.lp_mint or growth_pool.mints[HUB_INDEX] != parent.lp_mint:
            logger.warning(
                "hub_mint_mismatch",
                growth_pool=growth_pool.pool_id[-8:],
                expected=parent.lp_mint[-8:],
                declared=ref.lp_mint[-8:],
                hub_asset=growth_pool.mints[HUB_INDEX][-8:],
            )
            raise PoolMismatch(f"Hub asset of {growth_pool.pool_id} is not the LP mint of {parent.pool_id}")
        return parent
