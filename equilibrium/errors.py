"""Equilibrium AMM error classes.

Every failure raised by the engine derives from EquilibriumError and carries a
stable ``kind`` string that callers (and the HTTP layer) can match on. An
operation that raises leaves pool, position and ledger state unchanged.
"""


class EquilibriumError(Exception):
    """Base error for all engine operations."""

    kind = "EquilibriumError"
    # Errors the caller can fix by adjusting parameters and resubmitting
    recoverable = False


class AlreadyInitialized(EquilibriumError):
    """The AMM config has already been created."""

    kind = "AlreadyInitialized"


class ConfigMismatch(EquilibriumError):
    """Config passed to an operation is missing, stale, or not this engine's."""

    kind = "ConfigMismatch"


class InvalidWeights(EquilibriumError):
    """Target weights must have one entry per asset and sum to 10000 bps."""

    kind = "InvalidWeights"


class ZeroInitialLiquidity(EquilibriumError):
    """Pool creation requires a positive amount of every asset."""

    kind = "ZeroInitialLiquidity"


class PoolAlreadyExists(EquilibriumError):
    """A pool with the same derived identity is already registered."""

    kind = "PoolAlreadyExists"


class PoolMismatch(EquilibriumError):
    """Growth pool hub leg does not match its parent Seed pool's LP mint."""

    kind = "PoolMismatch"


class SlippageExceeded(EquilibriumError):
    """Computed output is below the caller's minimum."""

    kind = "SlippageExceeded"
    recoverable = True


class InsufficientPosition(EquilibriumError):
    """Position is absent, inactive, or holds fewer LP shares than requested."""

    kind = "InsufficientPosition"
    recoverable = True


class IdenticalAssets(EquilibriumError):
    """Swap input and output refer to the same asset."""

    kind = "IdenticalAssets"


class InvalidPoolState(EquilibriumError):
    """Reserves or amplification are outside the domain of the curve."""

    kind = "InvalidPoolState"


class InvariantDidNotConverge(EquilibriumError):
    """Newton iteration for D or y did not converge within the iteration cap."""

    kind = "InvariantDidNotConverge"


class ArithmeticOverflow(EquilibriumError, ArithmeticError):
    """Value left the supported integer width."""

    kind = "ArithmeticOverflow"


class Underflow(ArithmeticOverflow):
    """Subtraction would produce a negative amount."""

    kind = "Underflow"


class DivisionByZero(EquilibriumError, ArithmeticError):
    """Division or modulo by zero."""

    kind = "DivisionByZero"


class InvalidInputLength(EquilibriumError):
    """Amount or mint list length does not match the pool's asset count."""

    kind = "InvalidInputLength"


class InvalidAssetIndex(EquilibriumError):
    """Asset index is out of range for the pool."""

    kind = "InvalidAssetIndex"


class ZeroAmount(EquilibriumError):
    """Operation would move or mint nothing."""

    kind = "ZeroAmount"
    recoverable = True


class Unauthorized(EquilibriumError):
    """Caller is not the config authority."""

    kind = "Unauthorized"


class UnknownPool(EquilibriumError):
    """No pool is registered under the given id."""

    kind = "UnknownPool"


class InsufficientBalance(EquilibriumError):
    """Token ledger account balance is too low for the requested movement."""

    kind = "InsufficientBalance"
    recoverable = True
