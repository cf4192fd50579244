"""AMM configuration object.

The config is an explicit, immutable value passed into pool-creation calls.
Changing it produces a new AmmConfig and is gated by require_authority; pools
created earlier keep the parameters they were created with.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass

from equilibrium.addressing import config_address, normalize_address
from equilibrium.errors import InvalidPoolState, InvalidWeights, Unauthorized
from equilibrium.fees.config import DEFAULT_FEE_CONFIG, FeeConfig
from equilibrium.math.fixed_point import BPS_DENOMINATOR

SEED_POOL_ASSETS = 3
GROWTH_POOL_ASSETS = 2

# Upper bound on A, matching common StableSwap deployments
MAX_AMPLIFICATION = 1_000_000


def validate_target_weights(weights: Sequence[int], n_assets: int) -> tuple[int, ...]:
    """Check weights have one entry per asset and sum to exactly 10000 bps.

    Raises:
        InvalidWeights: If the length or the sum is wrong, or an entry is negative
    """
    if len(weights) != n_assets:
        raise InvalidWeights(f"Expected {n_assets} target weights, got {len(weights)}")
    if any(w < 0 for w in weights):
        raise InvalidWeights(f"Target weights must be non-negative: {list(weights)}")
    total = sum(weights)
    if total != BPS_DENOMINATOR:
        raise InvalidWeights(f"Target weights must sum to {BPS_DENOMINATOR}, got {total}")
    return tuple(weights)


def validate_amplification(amplification: int) -> int:
    """Check 1 <= A <= MAX_AMPLIFICATION.

    Raises:
        InvalidPoolState: If A is out of range
    """
    if not 1 <= amplification <= MAX_AMPLIFICATION:
        raise InvalidPoolState(f"Amplification must be in [1, {MAX_AMPLIFICATION}], got {amplification}")
    return amplification


@dataclass(frozen=True)
class AmmConfig:
    """Process-wide AMM defaults.

    Attributes:
        config_id: Derived identity of this config
        authority: Identity allowed to replace the defaults
        default_amplification: A used when pool creation does not specify one
        default_target_weights: Seed pool weights (bps) used when not specified
        fee_config: Dynamic fee bounds applied to every pool of this config
    """

    config_id: str
    authority: str
    default_amplification: int
    default_target_weights: tuple[int, ...]
    fee_config: FeeConfig = DEFAULT_FEE_CONFIG

    @classmethod
    def create(
        cls,
        authority: str,
        amplification: int,
        target_weights: Sequence[int],
        fee_config: FeeConfig | None = None,
    ) -> AmmConfig:
        """Build a validated config.

        Raises:
            InvalidWeights: If target_weights are not 3 entries summing to 10000
            InvalidPoolState: If amplification is out of range
        """
        authority = normalize_address(authority)
        return cls(
            config_id=config_address(authority),
            authority=authority,
            default_amplification=validate_amplification(amplification),
            default_target_weights=validate_target_weights(target_weights, SEED_POOL_ASSETS),
            fee_config=fee_config or DEFAULT_FEE_CONFIG,
        )


def require_authority(config: AmmConfig, caller: str) -> None:
    """Raise Unauthorized unless caller is the config authority."""
    if normalize_address(caller) != config.authority:
        raise Unauthorized(f"{caller} is not the config authority")


def update_config(
    config: AmmConfig,
    caller: str,
    *,
    amplification: int | None = None,
    target_weights: Sequence[int] | None = None,
    fee_config: FeeConfig | None = None,
) -> AmmConfig:
    """Return a copy of config with new defaults.

    Raises:
        Unauthorized: If caller is not the authority
        InvalidWeights: If target_weights are invalid
        InvalidPoolState: If amplification is out of range
    """
    require_authority(config, caller)
    changes: dict[str, object] = {}
    if amplification is not None:
        changes["default_amplification"] = validate_amplification(amplification)
    if target_weights is not None:
        changes["default_target_weights"] = validate_target_weights(target_weights, SEED_POOL_ASSETS)
    if fee_config is not None:
        changes["fee_config"] = fee_config
    return dataclasses.replace(config, **changes)
