"""Request bodies for the HTTP operation surface.

List lengths are not constrained here; the engine rejects mismatches with
InvalidInputLength so the error kind is the same for every caller.
"""

from pydantic import BaseModel, Field, model_validator

from equilibrium.fees import FeeConfig
from equilibrium.fees.config import BASE_FEE_BPS, MAX_FEE_BPS
from equilibrium.math.fixed_point import NEUTRAL_CONCENTRATION
from equilibrium.models.types import Address, Amount, BasisPoints


class FeeBounds(BaseModel):
    """Dynamic fee bounds in basis points."""

    base_fee_bps: BasisPoints = BASE_FEE_BPS
    max_fee_bps: BasisPoints = MAX_FEE_BPS

    @model_validator(mode="after")
    def check_order(self) -> "FeeBounds":
        """Ensure base_fee_bps <= max_fee_bps."""
        if self.base_fee_bps > self.max_fee_bps:
            raise ValueError(f"base_fee_bps ({self.base_fee_bps}) exceeds max_fee_bps ({self.max_fee_bps})")
        return self

    def to_fee_config(self) -> FeeConfig:
        return FeeConfig(base_fee_bps=self.base_fee_bps, max_fee_bps=self.max_fee_bps)


class InitializeConfigRequest(BaseModel):
    authority: Address
    amplification: int
    target_weights: list[BasisPoints]
    fees: FeeBounds | None = None


class UpdateConfigRequest(BaseModel):
    """Partial update; omitted fields keep their current value."""

    caller: Address
    amplification: int | None = None
    target_weights: list[BasisPoints] | None = None
    fees: FeeBounds | None = None


class CreateSeedPoolRequest(BaseModel):
    payer: Address
    mints: list[Address]
    initial_amounts: list[Amount]
    amplification: int | None = None
    target_weights: list[BasisPoints] | None = None


class CreateGrowthPoolRequest(BaseModel):
    payer: Address
    seed_pool_id: Address
    partner_mint: Address
    initial_hub_amount: Amount
    initial_partner_amount: Amount
    amplification: int | None = None


class DepositRequest(BaseModel):
    user: Address
    amounts: list[Amount]
    min_lp_out: Amount = 0
    concentration: int = Field(default=NEUTRAL_CONCENTRATION, gt=0)


class WithdrawRequest(BaseModel):
    user: Address
    lp_amount: Amount
    min_amounts_out: list[Amount]


class SwapRequest(BaseModel):
    """Each side is addressed either by reserve index or by mint."""

    user: Address
    amount_in: Amount
    min_amount_out: Amount = 0
    asset_in_index: int | None = None
    asset_out_index: int | None = None
    mint_in: Address | None = None
    mint_out: Address | None = None

    @model_validator(mode="after")
    def check_assets(self) -> "SwapRequest":
        """Ensure each side names exactly one of index or mint."""
        for side, index, mint in (
            ("in", self.asset_in_index, self.mint_in),
            ("out", self.asset_out_index, self.mint_out),
        ):
            if (index is None) == (mint is None):
                raise ValueError(f"Give exactly one of asset_{side}_index or mint_{side}")
        return self


class FaucetRequest(BaseModel):
    """Development-only funding of an owner's token account."""

    owner: Address
    mint: Address
    amount: Amount
