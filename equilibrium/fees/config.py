"""Fee configuration for the weighted dynamic fee."""

from dataclasses import dataclass

from equilibrium.math.fixed_point import BPS_DENOMINATOR

# Protocol defaults, in basis points
BASE_FEE_BPS = 5
MAX_FEE_BPS = 50


@dataclass(frozen=True)
class FeeConfig:
    """Bounds for the dynamic swap fee.

    Attributes:
        base_fee_bps: Fee charged when the pool sits exactly on its target weights
        max_fee_bps: Cap applied however far the pool deviates from target
    """

    base_fee_bps: int = BASE_FEE_BPS
    max_fee_bps: int = MAX_FEE_BPS

    def __post_init__(self) -> None:
        if not 0 <= self.base_fee_bps <= self.max_fee_bps <= BPS_DENOMINATOR:
            raise ValueError(
                f"Fee bounds must satisfy 0 <= base ({self.base_fee_bps}) "
                f"<= max ({self.max_fee_bps}) <= {BPS_DENOMINATOR}"
            )


# Default configuration instance
DEFAULT_FEE_CONFIG = FeeConfig()
