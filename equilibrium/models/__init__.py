"""Pydantic models for the Equilibrium HTTP surface."""

from equilibrium.models.requests import (
    CreateGrowthPoolRequest,
    CreateSeedPoolRequest,
    DepositRequest,
    FaucetRequest,
    FeeBounds,
    InitializeConfigRequest,
    SwapRequest,
    UpdateConfigRequest,
    WithdrawRequest,
)
from equilibrium.models.responses import (
    ConfigSnapshot,
    DepositResponse,
    ErrorResponse,
    PoolSnapshot,
    PoolStatsResponse,
    PositionSnapshot,
    QuoteResponse,
    SwapResponse,
    WithdrawResponse,
)
from equilibrium.models.types import Address, Amount, BasisPoints

__all__ = [
    # Types
    "Address",
    "Amount",
    "BasisPoints",
    # Requests
    "FeeBounds",
    "InitializeConfigRequest",
    "UpdateConfigRequest",
    "CreateSeedPoolRequest",
    "CreateGrowthPoolRequest",
    "DepositRequest",
    "WithdrawRequest",
    "SwapRequest",
    "FaucetRequest",
    # Responses
    "ConfigSnapshot",
    "PoolSnapshot",
    "PositionSnapshot",
    "DepositResponse",
    "WithdrawResponse",
    "QuoteResponse",
    "SwapResponse",
    "PoolStatsResponse",
    "ErrorResponse",
]
