"""Pool state machine.

AmmEngine owns reserve accounting, LP-supply accounting and user positions,
and exposes the public operations:

    initialize_config, update_config,
    create_seed_pool, create_growth_pool,
    deposit, withdraw, swap (plus the read-only quote_swap and pool_stats)

Every operation is all-or-nothing. The full transition is computed and the
ledger balances it needs are checked first; ledger movements run next; the new
pool and position records are committed last, in one step. The engine does no
locking of its own: the host must serialize writers to the same pool.
"""

from __future__ import annotations

import dataclasses
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import structlog

from equilibrium.addressing import (
    growth_pool_address,
    lp_mint_address,
    normalize_address,
    pool_token_address,
    seed_pool_address,
    token_account_address,
)
from equilibrium.config import (
    GROWTH_POOL_ASSETS,
    SEED_POOL_ASSETS,
    AmmConfig,
    update_config,
    validate_amplification,
    validate_target_weights,
)
from equilibrium.errors import (
    AlreadyInitialized,
    ConfigMismatch,
    IdenticalAssets,
    InsufficientBalance,
    InvalidAssetIndex,
    InvalidInputLength,
    PoolAlreadyExists,
    PoolMismatch,
    SlippageExceeded,
    ZeroAmount,
    ZeroInitialLiquidity,
)
from equilibrium.fees import DEFAULT_FEE_CONFIG, FeeConfig, FeeQuote, current_weights, quote_fee, weight_deviation
from equilibrium.fees.calculator import dynamic_fee_bps
from equilibrium.ledger import InMemoryTokenLedger, TokenLedger
from equilibrium.math.fixed_point import (
    LP_DECIMALS,
    NEUTRAL_CONCENTRATION,
    format_basis_points,
    mul_div,
)
from equilibrium.math.stable_math import calc_out_given_in, compute_d
from equilibrium.pools import Pool, PoolKind, PoolRegistry, SeedPoolRef
from equilibrium.positions import PositionLedger, UserPosition
from equilibrium.safe_int import S, to_amount

logger = structlog.get_logger()

Clock = Callable[[], int]


def _unix_now() -> int:
    return int(time.time())


@dataclass(frozen=True)
class DepositResult:
    """Outcome of pool creation or deposit."""

    pool: Pool
    position: UserPosition
    lp_minted: int


@dataclass(frozen=True)
class WithdrawResult:
    """Outcome of a proportional withdrawal."""

    pool: Pool
    position: UserPosition
    amounts_out: tuple[int, ...]
    lp_burned: int


@dataclass(frozen=True)
class SwapQuote:
    """Priced swap, computed without moving any balances.

    Attributes:
        pool_id: Pool the quote was computed against
        asset_in_index: Reserve index of the input asset
        asset_out_index: Reserve index of the output asset
        amount_in: Gross input amount (fee included)
        amount_out: Payout to the trader
        fee: Fee rate and split of amount_in
        new_reserves: Reserves after the swap (fee retained in the input reserve)
    """

    pool_id: str
    asset_in_index: int
    asset_out_index: int
    amount_in: int
    amount_out: int
    fee: FeeQuote
    new_reserves: tuple[int, ...]


@dataclass(frozen=True)
class SwapResult:
    """Outcome of an executed swap."""

    pool: Pool
    quote: SwapQuote

    @property
    def amount_out(self) -> int:
        return self.quote.amount_out


@dataclass(frozen=True)
class PoolStats:
    """Read-only view of a pool's composition and pricing."""

    pool_id: str
    kind: PoolKind
    reserves: tuple[int, ...]
    current_weights: tuple[int, ...]
    target_weights: tuple[int, ...]
    deviation_bps: int
    fee_bps: int
    fee_display: str
    amplification: int
    invariant: int
    lp_supply: int
    # Invariant per LP share, scaled by 10^LP_DECIMALS
    virtual_price: int


class AmmEngine:
    """Equilibrium AMM state machine.

    Attributes:
        ledger: Token ledger collaborator for all balance movements
        registry: Seed and Growth pools
        positions: Per-user LP positions
    """

    def __init__(self, ledger: TokenLedger | None = None, clock: Clock | None = None) -> None:
        """Initialize an engine with no config and no pools.

        Args:
            ledger: Token ledger. Uses a fresh InMemoryTokenLedger if not provided.
            clock: Returns the current unix time; injectable for tests.
        """
        self.ledger: TokenLedger = ledger if ledger is not None else InMemoryTokenLedger()
        self.registry = PoolRegistry()
        self.positions = PositionLedger()
        self._config: AmmConfig | None = None
        self._clock: Clock = clock or _unix_now

    # --- Config ---

    @property
    def config(self) -> AmmConfig | None:
        return self._config

    def initialize_config(
        self,
        authority: str,
        amplification: int,
        target_weights: Sequence[int],
        fee_config: FeeConfig | None = None,
    ) -> AmmConfig:
        """Create the engine's AmmConfig.

        Raises:
            AlreadyInitialized: If called twice
            InvalidWeights: If target_weights are not 3 entries summing to 10000
            InvalidPoolState: If amplification is out of range
        """
        if self._config is not None:
            raise AlreadyInitialized(f"AMM config {self._config.config_id} already exists")
        config = AmmConfig.create(authority, amplification, target_weights, fee_config)
        self._config = config
        logger.info(
            "config_initialized",
            config=config.config_id[-8:],
            amplification=config.default_amplification,
            target_weights=list(config.default_target_weights),
        )
        return config

    def update_config(
        self,
        caller: str,
        *,
        amplification: int | None = None,
        target_weights: Sequence[int] | None = None,
        fee_config: FeeConfig | None = None,
    ) -> AmmConfig:
        """Replace the config defaults. Only the authority may call this.

        Raises:
            ConfigMismatch: If no config has been initialized
            Unauthorized: If caller is not the authority
        """
        config = self.require_config()
        updated = update_config(
            config,
            caller,
            amplification=amplification,
            target_weights=target_weights,
            fee_config=fee_config,
        )
        self._config = updated
        logger.info(
            "config_updated",
            config=updated.config_id[-8:],
            amplification=updated.default_amplification,
            target_weights=list(updated.default_target_weights),
        )
        return updated

    def require_config(self) -> AmmConfig:
        if self._config is None:
            raise ConfigMismatch("AMM config is not initialized")
        return self._config

    def _check_config(self, config: AmmConfig) -> None:
        current = self.require_config()
        if config != current:
            raise ConfigMismatch(f"Config {config.config_id} is stale or does not belong to this engine")

    def _fee_config(self) -> FeeConfig:
        return self._config.fee_config if self._config is not None else DEFAULT_FEE_CONFIG

    # --- Pool creation ---

    def create_seed_pool(
        self,
        config: AmmConfig,
        payer: str,
        mints: Sequence[str],
        initial_amounts: Sequence[int],
        amplification: int | None = None,
        target_weights: Sequence[int] | None = None,
    ) -> DepositResult:
        """Create the 3-asset Seed pool and mint its initial LP supply.

        The initial LP supply equals compute_d(initial_amounts) and is credited
        to the payer's position.

        Raises:
            ConfigMismatch: If config is not this engine's current config
            InvalidInputLength: If mints or amounts do not have 3 entries
            IdenticalAssets: If a mint repeats
            InvalidWeights: If target weights are invalid
            ZeroInitialLiquidity: If any initial amount is zero
            PoolAlreadyExists: If the derived pool id is taken
            InsufficientBalance: If the payer cannot fund the amounts
        """
        self._check_config(config)
        mints = self._normalize_mints(mints, SEED_POOL_ASSETS)
        amounts = self._initial_amounts(initial_amounts, SEED_POOL_ASSETS)
        amp = validate_amplification(config.default_amplification if amplification is None else amplification)
        weights = validate_target_weights(
            config.default_target_weights if target_weights is None else target_weights,
            SEED_POOL_ASSETS,
        )

        pool_id = seed_pool_address(mints)
        if pool_id in self.registry:
            raise PoolAlreadyExists(f"Seed pool {pool_id} already exists")

        now = self._clock()
        pool = Pool(
            pool_id=pool_id,
            kind=PoolKind.SEED,
            config_id=config.config_id,
            lp_mint=lp_mint_address(pool_id),
            mints=mints,
            token_accounts=tuple(pool_token_address(pool_id, m) for m in mints),
            reserves=amounts,
            amplification=amp,
            lp_supply=S(compute_d(amounts, amp)).to_amount(),
            target_weights=weights,
            fees_collected=(0,) * SEED_POOL_ASSETS,
            created_at=now,
            updated_at=now,
        )
        return self._open_pool(pool, payer, now)

    def create_growth_pool(
        self,
        config: AmmConfig,
        payer: str,
        seed_pool_id: str,
        partner_mint: str,
        initial_hub_amount: int,
        initial_partner_amount: int,
        amplification: int | None = None,
    ) -> DepositResult:
        """Create a 2-asset Growth pool pairing the hub asset with a partner token.

        The hub asset is the Seed pool's LP share; the payer funds it from the
        LP tokens they hold.

        Raises:
            ConfigMismatch: If config is not this engine's current config
            UnknownPool: If seed_pool_id is not registered
            PoolMismatch: If seed_pool_id is not a Seed pool
            IdenticalAssets: If partner_mint is the hub mint
            ZeroInitialLiquidity: If either amount is zero
            PoolAlreadyExists: If the derived pool id is taken
            InsufficientBalance: If the payer cannot fund the amounts
        """
        self._check_config(config)
        seed = self.registry.get(seed_pool_id)
        if seed.kind is not PoolKind.SEED:
            raise PoolMismatch(f"Pool {seed_pool_id} is not a Seed pool")

        partner = normalize_address(partner_mint)
        if partner == seed.lp_mint:
            raise IdenticalAssets("Partner mint cannot be the hub asset")
        mints = (seed.lp_mint, partner)
        amounts = self._initial_amounts([initial_hub_amount, initial_partner_amount], GROWTH_POOL_ASSETS)
        amp = validate_amplification(config.default_amplification if amplification is None else amplification)

        pool_id = growth_pool_address(seed.pool_id, partner)
        if pool_id in self.registry:
            raise PoolAlreadyExists(f"Growth pool {pool_id} already exists")

        now = self._clock()
        pool = Pool(
            pool_id=pool_id,
            kind=PoolKind.GROWTH,
            config_id=config.config_id,
            lp_mint=lp_mint_address(pool_id),
            mints=mints,
            token_accounts=tuple(pool_token_address(pool_id, m) for m in mints),
            reserves=amounts,
            amplification=amp,
            lp_supply=S(compute_d(amounts, amp)).to_amount(),
            seed_pool=SeedPoolRef(pool_id=seed.pool_id, lp_mint=seed.lp_mint),
            fees_collected=(0,) * GROWTH_POOL_ASSETS,
            created_at=now,
            updated_at=now,
        )
        self.registry.resolve_hub(pool)
        return self._open_pool(pool, payer, now)

    def _open_pool(self, pool: Pool, payer: str, now: int) -> DepositResult:
        payer_accounts = [token_account_address(payer, m) for m in pool.mints]
        self._require_balances(payer_accounts, pool.reserves)
        position = self.positions.credited(payer, pool.pool_id, pool.lp_supply, NEUTRAL_CONCENTRATION, now)

        for source, destination, amount in zip(payer_accounts, pool.token_accounts, pool.reserves, strict=True):
            self.ledger.transfer(source, destination, amount)
        self.ledger.mint(pool.lp_mint, token_account_address(payer, pool.lp_mint), pool.lp_supply)

        self.registry.register(pool)
        self.positions.commit(position)

        logger.info(
            "pool_created",
            pool=pool.pool_id[-8:],
            kind=pool.kind.value,
            reserves=list(pool.reserves),
            amplification=pool.amplification,
            lp_supply=pool.lp_supply,
        )
        return DepositResult(pool=pool, position=position, lp_minted=pool.lp_supply)

    # --- Liquidity ---

    def deposit(
        self,
        user: str,
        pool_id: str,
        amounts: Sequence[int],
        min_lp_out: int,
        concentration: int = NEUTRAL_CONCENTRATION,
    ) -> DepositResult:
        """Add liquidity (balanced or imbalanced) and mint LP shares.

        Minted = (new_d - old_d) * lp_supply / old_d, or new_d when the pool
        has no LP supply. The concentration is stored on the caller's position.

        Raises:
            UnknownPool: If pool_id is not registered
            PoolMismatch: If a Growth pool's hub leg does not resolve
            InvalidInputLength: If amounts do not match the asset count
            ZeroAmount: If nothing is deposited or nothing would be minted
            SlippageExceeded: If minted < min_lp_out
            InsufficientBalance: If the user cannot fund the amounts
        """
        pool = self.registry.get(pool_id)
        if pool.is_growth:
            self.registry.resolve_hub(pool)

        amounts = self._amounts(amounts, pool.n_assets)
        if not any(amounts):
            raise ZeroAmount("Deposit amounts are all zero")
        concentration = to_amount(concentration)
        if concentration == 0:
            raise ZeroAmount("Concentration must be positive")

        new_reserves = tuple(
            (S(reserve) + amount).to_amount() for reserve, amount in zip(pool.reserves, amounts, strict=True)
        )
        if pool.lp_supply == 0:
            minted = S(compute_d(new_reserves, pool.amplification))
        else:
            old_d = compute_d(pool.reserves, pool.amplification)
            new_d = compute_d(new_reserves, pool.amplification)
            minted = mul_div(S(new_d) - old_d, pool.lp_supply, old_d)
        lp_minted = minted.to_amount()

        if lp_minted == 0:
            raise ZeroAmount("Deposit is too small to mint LP shares")
        if lp_minted < min_lp_out:
            logger.warning("deposit_slippage_exceeded", pool=pool_id[-8:], minted=lp_minted, min_lp_out=min_lp_out)
            raise SlippageExceeded(f"Deposit mints {lp_minted} LP shares, minimum is {min_lp_out}")

        now = self._clock()
        position = self.positions.credited(user, pool.pool_id, lp_minted, concentration, now)
        new_pool = dataclasses.replace(
            pool,
            reserves=new_reserves,
            lp_supply=(S(pool.lp_supply) + lp_minted).to_amount(),
            updated_at=now,
        )

        user_accounts = [token_account_address(user, m) for m in pool.mints]
        self._require_balances(user_accounts, amounts)
        for source, destination, amount in zip(user_accounts, pool.token_accounts, amounts, strict=True):
            if amount > 0:
                self.ledger.transfer(source, destination, amount)
        self.ledger.mint(pool.lp_mint, token_account_address(user, pool.lp_mint), lp_minted)

        self.registry.commit(new_pool)
        self.positions.commit(position)

        logger.info(
            "deposit_executed",
            pool=pool_id[-8:],
            user=normalize_address(user)[-8:],
            amounts=list(amounts),
            lp_minted=lp_minted,
            concentration=concentration,
        )
        return DepositResult(pool=new_pool, position=position, lp_minted=lp_minted)

    def withdraw(
        self,
        user: str,
        pool_id: str,
        lp_amount: int,
        min_amounts_out: Sequence[int],
    ) -> WithdrawResult:
        """Burn LP shares for a proportional share of every reserve.

        Payout[i] = reserves[i] * lp_amount / lp_supply (rounded down).

        Raises:
            UnknownPool: If pool_id is not registered
            InvalidInputLength: If min_amounts_out does not match the asset count
            ZeroAmount: If lp_amount is zero
            InsufficientPosition: If the position cannot cover lp_amount
            SlippageExceeded: If any payout is below its minimum
            InsufficientBalance: If the user no longer holds the LP tokens
        """
        pool = self.registry.get(pool_id)
        minimums = self._amounts(min_amounts_out, pool.n_assets)
        lp_amount = to_amount(lp_amount)
        if lp_amount == 0:
            raise ZeroAmount("Withdraw amount is zero")

        now = self._clock()
        position = self.positions.debited(user, pool.pool_id, lp_amount, now)

        amounts_out = tuple(mul_div(reserve, lp_amount, pool.lp_supply).to_amount() for reserve in pool.reserves)
        for i, (amount, minimum) in enumerate(zip(amounts_out, minimums, strict=True)):
            if amount < minimum:
                logger.warning("withdraw_slippage_exceeded", pool=pool_id[-8:], index=i, amount=amount, minimum=minimum)
                raise SlippageExceeded(f"Withdraw pays {amount} of asset {i}, minimum is {minimum}")

        new_pool = dataclasses.replace(
            pool,
            reserves=tuple((S(r) - a).value for r, a in zip(pool.reserves, amounts_out, strict=True)),
            lp_supply=(S(pool.lp_supply) - lp_amount).value,
            updated_at=now,
        )

        user_lp_account = token_account_address(user, pool.lp_mint)
        self._require_balances([user_lp_account], [lp_amount])
        self.ledger.burn(pool.lp_mint, user_lp_account, lp_amount)
        for source, mint, amount in zip(pool.token_accounts, pool.mints, amounts_out, strict=True):
            if amount > 0:
                self.ledger.transfer(source, token_account_address(user, mint), amount)

        self.registry.commit(new_pool)
        self.positions.commit(position)

        logger.info(
            "withdraw_executed",
            pool=pool_id[-8:],
            user=normalize_address(user)[-8:],
            lp_burned=lp_amount,
            amounts_out=list(amounts_out),
            position_active=position.is_active,
        )
        return WithdrawResult(pool=new_pool, position=position, amounts_out=amounts_out, lp_burned=lp_amount)

    # --- Swaps ---

    def quote_swap(
        self,
        pool_id: str,
        amount_in: int,
        asset_in_index: int,
        asset_out_index: int,
    ) -> SwapQuote:
        """Price a swap without moving balances or changing state.

        Raises:
            UnknownPool: If pool_id is not registered
            PoolMismatch: If a Growth pool's hub leg does not resolve
            IdenticalAssets: If asset_in_index == asset_out_index
            InvalidAssetIndex: If an index is out of range
            ZeroAmount: If amount_in is zero or the payout rounds to zero
        """
        pool = self.registry.get(pool_id)
        if pool.is_growth:
            self.registry.resolve_hub(pool)

        if asset_in_index == asset_out_index:
            raise IdenticalAssets(f"Cannot swap asset {asset_in_index} with itself")
        for index in (asset_in_index, asset_out_index):
            if not 0 <= index < pool.n_assets:
                raise InvalidAssetIndex(f"Asset index {index} out of range for {pool.n_assets} assets")
        amount_in = to_amount(amount_in)
        if amount_in == 0:
            raise ZeroAmount("Swap amount is zero")

        fee = quote_fee(pool.reserves, pool.effective_target_weights, amount_in, self._fee_config())
        if fee.amount_after_fee == 0:
            raise ZeroAmount("Swap amount is consumed entirely by the fee")

        amount_out, new_reserve_out = calc_out_given_in(
            pool.reserves,
            pool.amplification,
            asset_in_index,
            asset_out_index,
            fee.amount_after_fee,
        )
        if amount_out == 0:
            raise ZeroAmount("Swap output rounds to zero")

        new_reserves = list(pool.reserves)
        new_reserves[asset_in_index] = (S(pool.reserves[asset_in_index]) + amount_in).to_amount()
        new_reserves[asset_out_index] = new_reserve_out

        return SwapQuote(
            pool_id=pool_id,
            asset_in_index=asset_in_index,
            asset_out_index=asset_out_index,
            amount_in=amount_in,
            amount_out=amount_out,
            fee=fee,
            new_reserves=tuple(new_reserves),
        )

    def swap(
        self,
        user: str,
        pool_id: str,
        amount_in: int,
        min_amount_out: int,
        asset_in_index: int,
        asset_out_index: int,
    ) -> SwapResult:
        """Swap amount_in of one asset for another along the StableSwap curve.

        The dynamic fee is charged on amount_in and retained in the input
        reserve; only the remainder moves along the curve.

        Raises:
            Everything quote_swap raises, plus:
            SlippageExceeded: If the payout is below min_amount_out
            InsufficientBalance: If the user cannot fund amount_in
        """
        quote = self.quote_swap(pool_id, amount_in, asset_in_index, asset_out_index)
        if quote.amount_out < min_amount_out:
            logger.warning(
                "swap_slippage_exceeded",
                pool=pool_id[-8:],
                amount_out=quote.amount_out,
                min_amount_out=min_amount_out,
            )
            raise SlippageExceeded(f"Swap pays {quote.amount_out}, minimum is {min_amount_out}")

        pool = self.registry.get(pool_id)
        fees_collected = list(pool.fees_collected)
        fees_collected[asset_in_index] = (S(fees_collected[asset_in_index]) + quote.fee.fee_amount).to_amount()
        new_pool = dataclasses.replace(
            pool,
            reserves=quote.new_reserves,
            fees_collected=tuple(fees_collected),
            updated_at=self._clock(),
        )

        user_in = token_account_address(user, pool.mints[asset_in_index])
        user_out = token_account_address(user, pool.mints[asset_out_index])
        self._require_balances([user_in], [quote.amount_in])
        self.ledger.transfer(user_in, pool.token_accounts[asset_in_index], quote.amount_in)
        self.ledger.transfer(pool.token_accounts[asset_out_index], user_out, quote.amount_out)

        self.registry.commit(new_pool)

        logger.info(
            "swap_executed",
            pool=pool_id[-8:],
            user=normalize_address(user)[-8:],
            asset_in=asset_in_index,
            asset_out=asset_out_index,
            amount_in=quote.amount_in,
            amount_out=quote.amount_out,
            fee_bps=quote.fee.fee_bps,
            fee_amount=quote.fee.fee_amount,
        )
        return SwapResult(pool=new_pool, quote=quote)

    # --- Read-only views ---

    def get_pool(self, pool_id: str) -> Pool:
        return self.registry.get(pool_id)

    def get_position(self, owner: str, pool_id: str) -> UserPosition | None:
        return self.positions.get(owner, pool_id)

    def asset_index(self, pool_id: str, mint: str) -> int:
        """Reserve index of a mint in a pool, for callers that address assets by mint.

        Raises:
            UnknownPool: If pool_id is not registered
            InvalidAssetIndex: If the pool does not hold the mint
        """
        pool = self.registry.get(pool_id)
        index = pool.index_of(mint)
        if index is None:
            raise InvalidAssetIndex(f"Pool {pool.pool_id} does not hold mint {mint}")
        return index

    def pool_stats(self, pool_id: str) -> PoolStats:
        """Current weights, dynamic fee and invariant of a pool."""
        pool = self.registry.get(pool_id)
        weights = current_weights(pool.reserves)
        targets = pool.effective_target_weights
        fee_bps, deviation = dynamic_fee_bps(pool.reserves, targets, self._fee_config())

        invariant = compute_d(pool.reserves, pool.amplification) if all(pool.reserves) else 0
        virtual_price = (
            mul_div(invariant, 10**LP_DECIMALS, pool.lp_supply).value if pool.lp_supply > 0 else 0
        )

        stats = PoolStats(
            pool_id=pool_id,
            kind=pool.kind,
            reserves=pool.reserves,
            current_weights=tuple(weights),
            target_weights=targets,
            deviation_bps=weight_deviation(weights, targets),
            fee_bps=fee_bps,
            fee_display=format_basis_points(fee_bps),
            amplification=pool.amplification,
            invariant=invariant,
            lp_supply=pool.lp_supply,
            virtual_price=virtual_price,
        )
        logger.info(
            "pool_stats",
            pool=pool_id[-8:],
            kind=pool.kind.value,
            reserves=list(pool.reserves),
            current_weights=weights,
            target_weights=list(targets),
            dynamic_fee=stats.fee_display,
            amplification=pool.amplification,
        )
        return stats

    # --- Validation helpers ---

    @staticmethod
    def _normalize_mints(mints: Sequence[str], n_assets: int) -> tuple[str, ...]:
        if len(mints) != n_assets:
            raise InvalidInputLength(f"Expected {n_assets} mints, got {len(mints)}")
        normalized = tuple(normalize_address(m) for m in mints)
        if len(set(normalized)) != n_assets:
            raise IdenticalAssets(f"Pool mints must be distinct: {list(normalized)}")
        return normalized

    @staticmethod
    def _amounts(amounts: Sequence[int], n_assets: int) -> tuple[int, ...]:
        if len(amounts) != n_assets:
            raise InvalidInputLength(f"Expected {n_assets} amounts, got {len(amounts)}")
        return tuple(to_amount(a) for a in amounts)

    def _initial_amounts(self, amounts: Sequence[int], n_assets: int) -> tuple[int, ...]:
        checked = self._amounts(amounts, n_assets)
        if not all(checked):
            raise ZeroInitialLiquidity(f"Every initial amount must be positive: {list(checked)}")
        return checked

    def _require_balances(self, accounts: Sequence[str], amounts: Sequence[int]) -> None:
        """Check every debit can be covered before any ledger movement runs."""
        for account, amount in zip(accounts, amounts, strict=True):
            balance = self.ledger.balance_of(account)
            if balance < amount:
                raise InsufficientBalance(f"Account {account} holds {balance}, needs {amount}")
