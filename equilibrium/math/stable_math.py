"""StableSwap invariant math.

Core math functions for the Seed (3-asset) and Growth (2-asset) pools.
Uses Newton-Raphson iteration for both the invariant D and the balance y.

The invariant for n assets with reserves x_i and amplification A is:

    A * n^n * sum(x_i) + D = A * D * n^n + D^(n+1) / (n^n * prod(x_i))

IMPORTANT: All calculations use SafeInt for overflow protection and explicit
bounds checking. Iteration is capped; failure to converge is an error, never
a stale value.
"""

from collections.abc import Sequence

import structlog

from equilibrium.errors import InvalidAssetIndex, InvalidPoolState, InvariantDidNotConverge
from equilibrium.safe_int import S, SafeInt

logger = structlog.get_logger()

# Maximum iterations for Newton-Raphson convergence
MAX_ITERATIONS = 255

# Seed pools hold 3 assets, Growth pools 2
SUPPORTED_ASSET_COUNTS = (2, 3)


def _validate_curve(reserves: Sequence[int], amplification: int, skip_index: int | None = None) -> None:
    """Reject inputs for which the curve is undefined.

    Raises:
        InvalidPoolState: If asset count, amplification or a reserve is out of domain
    """
    if len(reserves) not in SUPPORTED_ASSET_COUNTS:
        raise InvalidPoolState(f"Unsupported asset count {len(reserves)}")
    if amplification < 1:
        raise InvalidPoolState(f"Amplification must be >= 1, got {amplification}")
    for i, reserve in enumerate(reserves):
        if i == skip_index:
            continue
        if reserve <= 0:
            raise InvalidPoolState(f"Reserve at index {i} must be positive, got {reserve}")


def _converged(current: SafeInt, previous: SafeInt) -> bool:
    return current.abs_diff(previous) <= 1


def compute_d(reserves: Sequence[int], amplification: int) -> int:
    """Calculate the StableSwap invariant D using Newton-Raphson iteration.

    Algorithm:
        1. Initial guess: D = sum(reserves)
        2. D_P = D^(n+1) / (n^n * prod(reserves)), built up one reserve at a time
        3. D = (Ann * S + D_P * n) * D / ((Ann - 1) * D + (n + 1) * D_P)
        4. Stop when |D_new - D_old| <= 1, at most MAX_ITERATIONS times

    Args:
        reserves: Pool reserves in native units (2 or 3 entries)
        amplification: Amplification coefficient A (>= 1)

    Returns:
        The invariant D

    Raises:
        InvalidPoolState: If any reserve is zero or amplification < 1
        InvariantDidNotConverge: If iteration doesn't converge
        ArithmeticOverflow: If an intermediate exceeds 256 bits
    """
    _validate_curve(reserves, amplification)

    n_coins = S(len(reserves))
    sum_reserves = S(sum(reserves))
    # Ann = A * n^n
    ann = S(amplification) * S(len(reserves) ** len(reserves))

    d = sum_reserves
    for iteration in range(MAX_ITERATIONS):
        d_p = d
        for reserve in reserves:
            d_p = (d_p * d) // (S(reserve) * n_coins)

        d_prev = d
        numerator = (ann * sum_reserves + d_p * n_coins) * d
        denominator = (ann - 1) * d + (n_coins + 1) * d_p
        d = numerator // denominator

        if _converged(d, d_prev):
            logger.debug("invariant_converged", iterations=iteration + 1, d=d.value)
            return d.value

    raise InvariantDidNotConverge(f"Invariant D did not converge after {MAX_ITERATIONS} iterations")


def compute_y(
    reserves: Sequence[int],
    token_index: int,
    amplification: int,
    target_d: int,
) -> int:
    """Solve for reserves[token_index] such that the invariant equals target_d.

    The entry at token_index is ignored; every other entry is used as-is, so a
    swap passes its already-increased input reserve here.

    Solves y^2 + (b - D) * y = c by Newton iteration:

        c = D^(n+1) / (n^n * prod(x_j, j != i) * Ann)
        b = sum(x_j, j != i) + D / Ann
        y = (y^2 + c) / (2y + b - D)

    Args:
        reserves: Pool reserves (2 or 3 entries)
        token_index: Index of the reserve to solve for
        amplification: Amplification coefficient A (>= 1)
        target_d: Invariant to preserve

    Returns:
        The smallest reserve at token_index whose invariant reaches target_d.
        Rounding never favors the trader: a swap that solves its output
        reserve here cannot lower the invariant.

    Raises:
        InvalidAssetIndex: If token_index is out of range
        InvalidPoolState: If inputs are outside the curve's domain
        InvariantDidNotConverge: If iteration doesn't converge
    """
    n = len(reserves)
    if token_index < 0 or token_index >= n:
        raise InvalidAssetIndex(f"token_index {token_index} out of range for {n} assets")
    _validate_curve(reserves, amplification, skip_index=token_index)
    if target_d <= 0:
        raise InvalidPoolState(f"Target invariant must be positive, got {target_d}")

    n_coins = S(n)
    d = S(target_d)
    ann = S(amplification) * S(n**n)

    # c and each Newton step round up so y never undershoots the root
    c = d
    sum_others = SafeInt.zero()
    for j, reserve in enumerate(reserves):
        if j == token_index:
            continue
        sum_others = sum_others + reserve
        c = (c * d).ceiling_div(S(reserve) * n_coins)
    c = (c * d).ceiling_div(ann * n_coins)
    b = sum_others + d // ann

    y = d
    for iteration in range(MAX_ITERATIONS):
        y_prev = y
        denominator_raw = S(2) * y + b
        if denominator_raw <= d:
            raise InvariantDidNotConverge("Denominator became non-positive")
        y = (y * y + c).ceiling_div(denominator_raw - d)

        if _converged(y, y_prev):
            logger.debug("balance_converged", iterations=iteration + 1, token_index=token_index, y=y.value)
            return _smallest_balance_reaching(reserves, token_index, amplification, target_d, max(y.value, 1))

    raise InvariantDidNotConverge(f"Balance y did not converge after {MAX_ITERATIONS} iterations")


def _smallest_balance_reaching(
    reserves: Sequence[int],
    token_index: int,
    amplification: int,
    target_d: int,
    estimate: int,
) -> int:
    """Settle the Newton estimate on the smallest y with compute_d >= target_d.

    The estimate is within a unit or two of the answer, so this costs a few
    compute_d calls. Where compute_d is flat in y (dD/dy < 1), several
    balances share the same invariant and the smallest one is returned.
    """
    trial = list(reserves)

    def reaches(y: int) -> bool:
        trial[token_index] = y
        return compute_d(trial, amplification) >= target_d

    y = estimate
    for _ in range(MAX_ITERATIONS):
        if not reaches(y):
            y += 1
        elif y > 1 and reaches(y - 1):
            y -= 1
        else:
            return y

    raise InvariantDidNotConverge(f"Balance y did not settle after {MAX_ITERATIONS} adjustments")


def calc_out_given_in(
    reserves: Sequence[int],
    amplification: int,
    token_index_in: int,
    token_index_out: int,
    amount_in: int,
) -> tuple[int, int]:
    """Calculate the payout for a given input on the curve.

    Fee should be subtracted from amount_in BEFORE calling this function.

    Algorithm:
        1. Calculate current invariant D
        2. Add amount_in to reserves[token_index_in]
        3. Solve for new reserves[token_index_out] given D
        4. Payout = old_reserve_out - new_reserve_out

    Args:
        reserves: Current pool reserves
        amplification: Amplification coefficient A
        token_index_in: Index of input asset
        token_index_out: Index of output asset
        amount_in: Input amount after fee

    Returns:
        Tuple of (payout, new_reserve_out)

    Raises:
        InvalidAssetIndex: If an index is out of range
        InvalidPoolState: If the swap would drain the output reserve
    """
    n = len(reserves)
    for name, index in (("token_index_in", token_index_in), ("token_index_out", token_index_out)):
        if index < 0 or index >= n:
            raise InvalidAssetIndex(f"{name} {index} out of range for {n} assets")

    target_d = compute_d(reserves, amplification)

    new_reserves = list(reserves)
    new_reserves[token_index_in] = (S(reserves[token_index_in]) + amount_in).value

    new_reserve_out = compute_y(new_reserves, token_index_out, amplification, target_d)
    if new_reserve_out <= 0:
        raise InvalidPoolState("Swap would drain the output reserve")

    old_reserve_out = reserves[token_index_out]
    if new_reserve_out >= old_reserve_out:
        return 0, old_reserve_out

    return (S(old_reserve_out) - new_reserve_out).value, new_reserve_out
