"""Response models: serializable snapshots of engine records.

Amounts serialize as decimal strings (see models.types.Amount).
"""

from __future__ import annotations

from pydantic import BaseModel

from equilibrium.config import AmmConfig
from equilibrium.engine import DepositResult, PoolStats, SwapQuote, SwapResult, WithdrawResult
from equilibrium.models.types import Address, Amount, BasisPoints
from equilibrium.pools import Pool, PoolKind
from equilibrium.positions import UserPosition


class ConfigSnapshot(BaseModel):
    config_id: Address
    authority: Address
    default_amplification: int
    default_target_weights: list[BasisPoints]
    base_fee_bps: BasisPoints
    max_fee_bps: BasisPoints

    @classmethod
    def from_config(cls, config: AmmConfig) -> ConfigSnapshot:
        return cls(
            config_id=config.config_id,
            authority=config.authority,
            default_amplification=config.default_amplification,
            default_target_weights=list(config.default_target_weights),
            base_fee_bps=config.fee_config.base_fee_bps,
            max_fee_bps=config.fee_config.max_fee_bps,
        )


class PoolSnapshot(BaseModel):
    """Point-in-time view of a Seed or Growth pool."""

    pool_id: Address
    kind: PoolKind
    config_id: Address
    lp_mint: Address
    mints: list[Address]
    reserves: list[Amount]
    amplification: int
    lp_supply: Amount
    target_weights: list[BasisPoints]
    seed_pool_id: Address | None = None
    fees_collected: list[Amount]
    created_at: int
    updated_at: int

    @classmethod
    def from_pool(cls, pool: Pool) -> PoolSnapshot:
        return cls(
            pool_id=pool.pool_id,
            kind=pool.kind,
            config_id=pool.config_id,
            lp_mint=pool.lp_mint,
            mints=list(pool.mints),
            reserves=list(pool.reserves),
            amplification=pool.amplification,
            lp_supply=pool.lp_supply,
            target_weights=list(pool.effective_target_weights),
            seed_pool_id=pool.seed_pool.pool_id if pool.seed_pool is not None else None,
            fees_collected=list(pool.fees_collected),
            created_at=pool.created_at,
            updated_at=pool.updated_at,
        )


class PositionSnapshot(BaseModel):
    position_id: Address
    owner: Address
    pool_id: Address
    lp_amount: Amount
    concentration: int
    min_price: int
    max_price: int
    is_active: bool
    created_at: int
    updated_at: int

    @classmethod
    def from_position(cls, position: UserPosition) -> PositionSnapshot:
        return cls(
            position_id=position.position_id,
            owner=position.owner,
            pool_id=position.pool_id,
            lp_amount=position.lp_amount,
            concentration=position.concentration,
            min_price=position.min_price,
            max_price=position.max_price,
            is_active=position.is_active,
            created_at=position.created_at,
            updated_at=position.updated_at,
        )


class DepositResponse(BaseModel):
    pool: PoolSnapshot
    position: PositionSnapshot
    lp_minted: Amount

    @classmethod
    def from_result(cls, result: DepositResult) -> DepositResponse:
        return cls(
            pool=PoolSnapshot.from_pool(result.pool),
            position=PositionSnapshot.from_position(result.position),
            lp_minted=result.lp_minted,
        )


class WithdrawResponse(BaseModel):
    pool: PoolSnapshot
    position: PositionSnapshot
    amounts_out: list[Amount]
    lp_burned: Amount

    @classmethod
    def from_result(cls, result: WithdrawResult) -> WithdrawResponse:
        return cls(
            pool=PoolSnapshot.from_pool(result.pool),
            position=PositionSnapshot.from_position(result.position),
            amounts_out=list(result.amounts_out),
            lp_burned=result.lp_burned,
        )


class QuoteResponse(BaseModel):
    pool_id: Address
    asset_in_index: int
    asset_out_index: int
    amount_in: Amount
    amount_out: Amount
    fee_bps: BasisPoints
    fee_amount: Amount
    deviation_bps: int

    @classmethod
    def from_quote(cls, quote: SwapQuote) -> QuoteResponse:
        return cls(
            pool_id=quote.pool_id,
            asset_in_index=quote.asset_in_index,
            asset_out_index=quote.asset_out_index,
            amount_in=quote.amount_in,
            amount_out=quote.amount_out,
            fee_bps=quote.fee.fee_bps,
            fee_amount=quote.fee.fee_amount,
            deviation_bps=quote.fee.deviation_bps,
        )


class SwapResponse(BaseModel):
    pool: PoolSnapshot
    quote: QuoteResponse

    @classmethod
    def from_result(cls, result: SwapResult) -> SwapResponse:
        return cls(pool=PoolSnapshot.from_pool(result.pool), quote=QuoteResponse.from_quote(result.quote))


class PoolStatsResponse(BaseModel):
    pool_id: Address
    kind: PoolKind
    reserves: list[Amount]
    current_weights: list[BasisPoints]
    target_weights: list[BasisPoints]
    deviation_bps: int
    fee_bps: BasisPoints
    fee_display: str
    amplification: int
    invariant: int
    lp_supply: Amount
    virtual_price: Amount

    @classmethod
    def from_stats(cls, stats: PoolStats) -> PoolStatsResponse:
        return cls(
            pool_id=stats.pool_id,
            kind=stats.kind,
            reserves=list(stats.reserves),
            current_weights=list(stats.current_weights),
            target_weights=list(stats.target_weights),
            deviation_bps=stats.deviation_bps,
            fee_bps=stats.fee_bps,
            fee_display=stats.fee_display,
            amplification=stats.amplification,
            invariant=stats.invariant,
            lp_supply=stats.lp_supply,
            virtual_price=stats.virtual_price,
        )


class ErrorResponse(BaseModel):
    """Body returned for every engine error."""

    error: str
    detail: str
