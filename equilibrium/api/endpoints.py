"""API endpoints for the Equilibrium AMM engine.

Each endpoint maps one engine operation. Engine errors propagate to the
exception handler installed in equilibrium.api.main, which translates them
with status_for().
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from equilibrium.engine import AmmEngine
from equilibrium.errors import (
    AlreadyInitialized,
    ArithmeticOverflow,
    DivisionByZero,
    EquilibriumError,
    InvalidAssetIndex,
    InvariantDidNotConverge,
    PoolAlreadyExists,
    Unauthorized,
    UnknownPool,
)
from equilibrium.ledger import InMemoryTokenLedger
from equilibrium.models import (
    ConfigSnapshot,
    CreateGrowthPoolRequest,
    CreateSeedPoolRequest,
    DepositRequest,
    DepositResponse,
    FaucetRequest,
    InitializeConfigRequest,
    PoolSnapshot,
    PoolStatsResponse,
    PositionSnapshot,
    QuoteResponse,
    SwapRequest,
    SwapResponse,
    UpdateConfigRequest,
    WithdrawRequest,
    WithdrawResponse,
)

logger = structlog.get_logger()

router = APIRouter()

# Engine errors that do not map to 400 Bad Request
ERROR_STATUS: dict[type[EquilibriumError], int] = {
    UnknownPool: 404,
    Unauthorized: 403,
    AlreadyInitialized: 409,
    PoolAlreadyExists: 409,
    ArithmeticOverflow: 422,
    DivisionByZero: 422,
    InvariantDidNotConverge: 422,
}


def status_for(error: EquilibriumError) -> int:
    """HTTP status for an engine error (most specific class wins)."""
    for cls in type(error).__mro__:
        status = ERROR_STATUS.get(cls)
        if status is not None:
            return status
    return 400


_default_engine: AmmEngine | None = None


def get_default_engine() -> AmmEngine:
    """Process-wide engine backed by an in-memory ledger, created on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = AmmEngine()
    return _default_engine


def get_engine() -> AmmEngine:
    """Dependency provider for the engine instance.

    Override this in tests to inject a fresh engine:
        app.dependency_overrides[get_engine] = lambda: engine
    """
    return get_default_engine()


@router.post("/config")
async def initialize_config(
    request: InitializeConfigRequest,
    engine: AmmEngine = Depends(get_engine),
) -> ConfigSnapshot:
    config = engine.initialize_config(
        request.authority,
        request.amplification,
        request.target_weights,
        request.fees.to_fee_config() if request.fees is not None else None,
    )
    return ConfigSnapshot.from_config(config)


@router.patch("/config")
async def update_config(
    request: UpdateConfigRequest,
    engine: AmmEngine = Depends(get_engine),
) -> ConfigSnapshot:
    config = engine.update_config(
        request.caller,
        amplification=request.amplification,
        target_weights=request.target_weights,
        fee_config=request.fees.to_fee_config() if request.fees is not None else None,
    )
    return ConfigSnapshot.from_config(config)


@router.post("/pools/seed")
async def create_seed_pool(
    request: CreateSeedPoolRequest,
    engine: AmmEngine = Depends(get_engine),
) -> DepositResponse:
    """Create the 3-asset Seed pool under the engine's current config."""
    result = engine.create_seed_pool(
        engine.require_config(),
        request.payer,
        request.mints,
        request.initial_amounts,
        amplification=request.amplification,
        target_weights=request.target_weights,
    )
    return DepositResponse.from_result(result)


@router.post("/pools/growth")
async def create_growth_pool(
    request: CreateGrowthPoolRequest,
    engine: AmmEngine = Depends(get_engine),
) -> DepositResponse:
    """Create a Growth pool pairing a Seed pool's LP share with a partner token."""
    result = engine.create_growth_pool(
        engine.require_config(),
        request.payer,
        request.seed_pool_id.lower(),
        request.partner_mint,
        request.initial_hub_amount,
        request.initial_partner_amount,
        amplification=request.amplification,
    )
    return DepositResponse.from_result(result)


@router.get("/pools/{pool_id}")
async def get_pool(pool_id: str, engine: AmmEngine = Depends(get_engine)) -> PoolSnapshot:
    return PoolSnapshot.from_pool(engine.get_pool(pool_id.lower()))


@router.get("/pools/{pool_id}/stats")
async def get_pool_stats(pool_id: str, engine: AmmEngine = Depends(get_engine)) -> PoolStatsResponse:
    return PoolStatsResponse.from_stats(engine.pool_stats(pool_id.lower()))


@router.get("/pools/{pool_id}/positions/{owner}")
async def get_position(
    pool_id: str,
    owner: str,
    engine: AmmEngine = Depends(get_engine),
) -> PositionSnapshot:
    pool = engine.get_pool(pool_id.lower())
    position = engine.get_position(owner, pool.pool_id)
    if position is None:
        raise HTTPException(status_code=404, detail=f"No position for {owner} in pool {pool.pool_id}")
    return PositionSnapshot.from_position(position)


def resolve_asset(engine: AmmEngine, pool_id: str, index: int | None, mint: str | None, side: str) -> int:
    """Reserve index for one side of a swap addressed by index or by mint."""
    if (index is None) == (mint is None):
        raise InvalidAssetIndex(f"Give exactly one of asset_{side}_index or mint_{side}")
    if mint is not None:
        return engine.asset_index(pool_id, mint)
    return index


@router.get("/pools/{pool_id}/quote")
async def quote_swap(
    pool_id: str,
    amount_in: int,
    asset_in_index: int | None = None,
    asset_out_index: int | None = None,
    mint_in: str | None = None,
    mint_out: str | None = None,
    engine: AmmEngine = Depends(get_engine),
) -> QuoteResponse:
    pool_id = pool_id.lower()
    quote = engine.quote_swap(
        pool_id,
        amount_in,
        resolve_asset(engine, pool_id, asset_in_index, mint_in, "in"),
        resolve_asset(engine, pool_id, asset_out_index, mint_out, "out"),
    )
    return QuoteResponse.from_quote(quote)


@router.post("/pools/{pool_id}/deposit")
async def deposit(
    pool_id: str,
    request: DepositRequest,
    engine: AmmEngine = Depends(get_engine),
) -> DepositResponse:
    result = engine.deposit(
        request.user,
        pool_id.lower(),
        request.amounts,
        request.min_lp_out,
        concentration=request.concentration,
    )
    return DepositResponse.from_result(result)


@router.post("/pools/{pool_id}/withdraw")
async def withdraw(
    pool_id: str,
    request: WithdrawRequest,
    engine: AmmEngine = Depends(get_engine),
) -> WithdrawResponse:
    result = engine.withdraw(request.user, pool_id.lower(), request.lp_amount, request.min_amounts_out)
    return WithdrawResponse.from_result(result)


@router.post("/pools/{pool_id}/swap")
async def swap(
    pool_id: str,
    request: SwapRequest,
    engine: AmmEngine = Depends(get_engine),
) -> SwapResponse:
    pool_id = pool_id.lower()
    result = engine.swap(
        request.user,
        pool_id,
        request.amount_in,
        request.min_amount_out,
        resolve_asset(engine, pool_id, request.asset_in_index, request.mint_in, "in"),
        resolve_asset(engine, pool_id, request.asset_out_index, request.mint_out, "out"),
    )
    return SwapResponse.from_result(result)


@router.post("/faucet")
async def faucet(request: FaucetRequest, engine: AmmEngine = Depends(get_engine)) -> dict[str, str]:
    """Fund an owner's token account. Only available on the in-memory ledger."""
    if not isinstance(engine.ledger, InMemoryTokenLedger):
        raise HTTPException(status_code=404, detail="Faucet is not available on this ledger")
    account = engine.ledger.fund(request.owner, request.mint, request.amount)
    logger.info("faucet_funded", owner=request.owner[-8:], mint=request.mint[-8:], amount=request.amount)
    return {"account": account, "balance": str(engine.ledger.balance_of(account))}
