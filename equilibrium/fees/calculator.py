"""Weighted dynamic fee model.

Maps a pool's current reserve composition to a swap fee:

    weight[i]  = reserve[i] * 10000 / sum(reserves)          (bps)
    deviation  = sum(|weight[i] - target_weight[i]|)          (bps)
    fee        = min(base_fee + deviation, max_fee)           (bps)

Trades that push the pool away from target pay more; trades that restore
balance pay less. The deviation is not divided by the asset count, so a
3-asset pool saturates the cap sooner than a 2-asset pool.

The fee amount is rounded up and stays in the pool's reserves.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from equilibrium.errors import InvalidInputLength
from equilibrium.fees.config import DEFAULT_FEE_CONFIG, FeeConfig
from equilibrium.math.fixed_point import bps_mul_up, ratio_bps
from equilibrium.safe_int import S, SafeInt

logger = structlog.get_logger()


@dataclass(frozen=True)
class FeeQuote:
    """Result of pricing a swap input.

    Attributes:
        fee_bps: Dynamic fee rate applied
        deviation_bps: Total weight deviation that produced the rate
        fee_amount: Fee charged on the input, rounded up
        amount_after_fee: Input amount that reaches the curve
    """

    fee_bps: int
    deviation_bps: int
    fee_amount: int
    amount_after_fee: int


def current_weights(reserves: Sequence[int]) -> list[int]:
    """Current per-asset weights in basis points (rounded down).

    Returns all zeros for an empty pool.
    """
    total = sum(reserves)
    if total == 0:
        return [0] * len(reserves)
    return [ratio_bps(reserve, total).value for reserve in reserves]


def weight_deviation(weights: Sequence[int], target_weights: Sequence[int]) -> int:
    """Sum of absolute differences between current and target weights (bps).

    Raises:
        InvalidInputLength: If the sequences differ in length
    """
    if len(weights) != len(target_weights):
        raise InvalidInputLength(
            f"Weights length {len(weights)} does not match targets length {len(target_weights)}"
        )
    deviation = SafeInt.zero()
    for current, target in zip(weights, target_weights, strict=True):
        deviation = deviation + S(current).abs_diff(target)
    return deviation.value


def dynamic_fee_bps(
    reserves: Sequence[int],
    target_weights: Sequence[int],
    config: FeeConfig | None = None,
) -> tuple[int, int]:
    """Dynamic fee rate for the given composition.

    Returns:
        Tuple of (fee_bps, deviation_bps)
    """
    config = config or DEFAULT_FEE_CONFIG
    deviation = weight_deviation(current_weights(reserves), target_weights)
    fee = (S(config.base_fee_bps) + deviation).min(config.max_fee_bps)
    return fee.value, deviation


def quote_fee(
    reserves: Sequence[int],
    target_weights: Sequence[int],
    amount_in: int,
    config: FeeConfig | None = None,
) -> FeeQuote:
    """Price the fee on a swap input.

    Args:
        reserves: Pool reserves before the swap
        target_weights: Target weights in bps
        amount_in: Gross input amount
        config: Fee bounds (DEFAULT_FEE_CONFIG if not provided)

    Returns:
        FeeQuote with the rate and the split of amount_in
    """
    fee_bps, deviation = dynamic_fee_bps(reserves, target_weights, config)
    fee_amount = bps_mul_up(amount_in, fee_bps)
    amount_after_fee = S(amount_in) - fee_amount

    logger.debug(
        "fee_quoted",
        fee_bps=fee_bps,
        deviation_bps=deviation,
        amount_in=amount_in,
        fee_amount=fee_amount.value,
    )

    return FeeQuote(
        fee_bps=fee_bps,
        deviation_bps=deviation,
        fee_amount=fee_amount.value,
        amount_after_fee=amount_after_fee.value,
    )
