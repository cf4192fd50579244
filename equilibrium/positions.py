"""Per-user, per-pool LP positions.

A UserPosition tracks the LP shares a user holds in one pool plus the
concentration factor they supplied. Positions are never removed; they go
inactive when their LP amount reaches zero and become active again on the
next deposit.

The ledger only computes new records. The engine commits them together with
the pool so that both change in the same step.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from equilibrium.addressing import normalize_address, user_position_address
from equilibrium.errors import InsufficientPosition
from equilibrium.math.fixed_point import NEUTRAL_CONCENTRATION
from equilibrium.safe_int import S

# Half-width of a position's price range, in concentration units (1000 = 1.0)
PRICE_BAND = 1_000


@dataclass(frozen=True)
class UserPosition:
    """LP position of one user in one pool.

    Attributes:
        position_id: Derived identity for (owner, pool)
        owner: User identity
        pool_id: Pool the position belongs to
        lp_amount: LP shares attributed to this position
        concentration: Range concentration (1000 = 1.0, higher = tighter)
        min_price: Lower price bound, concentration minus PRICE_BAND (floored at 0)
        max_price: Upper price bound, concentration plus PRICE_BAND
        is_active: False once lp_amount drops to zero
        created_at: First deposit timestamp (unix seconds)
        updated_at: Last change timestamp (unix seconds)
    """

    position_id: str
    owner: str
    pool_id: str
    lp_amount: int = 0
    concentration: int = NEUTRAL_CONCENTRATION
    is_active: bool = False
    created_at: int = 0
    updated_at: int = 0

    @property
    def min_price(self) -> int:
        return max(self.concentration - PRICE_BAND, 0)

    @property
    def max_price(self) -> int:
        return self.concentration + PRICE_BAND


class PositionLedger:
    """Store of UserPosition records keyed by derived position id."""

    def __init__(self) -> None:
        self._positions: dict[str, UserPosition] = {}

    def get(self, owner: str, pool_id: str) -> UserPosition | None:
        return self._positions.get(user_position_address(owner, pool_id))

    def credited(
        self,
        owner: str,
        pool_id: str,
        lp_amount: int,
        concentration: int,
        now: int,
    ) -> UserPosition:
        """Position after adding LP shares (not yet committed).

        The concentration is stored verbatim and replaces any previous value.
        """
        owner = normalize_address(owner)
        current = self.get(owner, pool_id)
        if current is None:
            current = UserPosition(
                position_id=user_position_address(owner, pool_id),
                owner=owner,
                pool_id=pool_id,
                created_at=now,
            )
        return dataclasses.replace(
            current,
            lp_amount=(S(current.lp_amount) + lp_amount).to_amount(),
            concentration=concentration,
            is_active=True,
            updated_at=now,
        )

    def debited(self, owner: str, pool_id: str, lp_amount: int, now: int) -> UserPosition:
        """Position after removing LP shares (not yet committed).

        Raises:
            InsufficientPosition: If the position is absent, inactive or too small
        """
        current = self.get(owner, pool_id)
        if current is None or not current.is_active:
            raise InsufficientPosition(f"{owner} has no active position in pool {pool_id}")
        if lp_amount > current.lp_amount:
            raise InsufficientPosition(
                f"Position holds {current.lp_amount} LP shares, {lp_amount} requested"
            )
        remaining = current.lp_amount - lp_amount
        return dataclasses.replace(
            current,
            lp_amount=remaining,
            is_active=remaining > 0,
            updated_at=now,
        )

    def commit(self, position: UserPosition) -> None:
        self._positions[position.position_id] = position

    def positions_for_pool(self, pool_id: str) -> list[UserPosition]:
        return [p for p in self._positions.values() if p.pool_id == pool_id]

    def total_lp(self, pool_id: str) -> int:
        """Sum of LP shares across all positions in a pool."""
        return sum(p.lp_amount for p in self.positions_for_pool(pool_id))
