"""Pool records and registry."""

from equilibrium.pools.registry import PoolRegistry
from equilibrium.pools.types import GROWTH_TARGET_WEIGHTS, HUB_INDEX, Pool, PoolKind, SeedPoolRef

__all__ = [
    "GROWTH_TARGET_WEIGHTS",
    "HUB_INDEX",
    "Pool",
    "PoolKind",
    "PoolRegistry",
    "SeedPoolRef",
]
