"""Pytest configuration and fixtures."""

import pytest

from equilibrium.engine import AmmEngine, DepositResult
from tests.helpers import BOB, SEED_MINTS, FixedClock, fund, make_engine, make_seed_pool


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def engine(clock: FixedClock) -> AmmEngine:
    """Engine with the reference config initialized and no pools."""
    return make_engine(clock)


@pytest.fixture
def seed(engine: AmmEngine) -> DepositResult:
    """Reference Seed pool: [1M, 1M, 1M], weights [4500, 3500, 2000], A=200, created by ALICE."""
    return make_seed_pool(engine)


@pytest.fixture
def funded_bob(engine: AmmEngine) -> str:
    """BOB with 10M of every Seed pool stablecoin."""
    fund(engine, BOB, SEED_MINTS, [10_000_000] * 3)
    return BOB
