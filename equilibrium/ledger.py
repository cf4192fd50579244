"""Token Ledger collaborator.

The engine never reads or writes balances directly; it moves value through
the TokenLedger protocol. InMemoryTokenLedger is the reference implementation
used by tests and by the HTTP surface.
"""

from __future__ import annotations

from typing import Protocol

import structlog

from equilibrium.addressing import token_account_address
from equilibrium.errors import InsufficientBalance
from equilibrium.safe_int import S

logger = structlog.get_logger()


class TokenLedger(Protocol):
    """Protocol for the fungible-token ledger.

    Any failure raised by an implementation is fatal to the engine operation
    that issued the call.
    """

    def transfer(self, from_account: str, to_account: str, amount: int) -> None:
        """Move amount between two accounts of the same mint."""
        ...

    def mint(self, mint: str, to_account: str, amount: int) -> None:
        """Create amount new units of mint in to_account."""
        ...

    def burn(self, mint: str, from_account: str, amount: int) -> None:
        """Destroy amount units of mint held in from_account."""
        ...

    def balance_of(self, account: str) -> int:
        """Current balance of an account (0 if it does not exist)."""
        ...

    def total_supply(self, mint: str) -> int:
        """Outstanding units of a mint."""
        ...


class InMemoryTokenLedger:
    """Dictionary-backed TokenLedger.

    Accounts are created on first credit and bound to a single mint.
    """

    def __init__(self) -> None:
        self._balances: dict[str, int] = {}
        self._account_mints: dict[str, str] = {}
        self._supply: dict[str, int] = {}

    def _bind(self, account: str, mint: str) -> None:
        bound = self._account_mints.setdefault(account, mint)
        if bound != mint:
            raise ValueError(f"Account {account} holds mint {bound}, not {mint}")

    def _debit(self, account: str, amount: int) -> None:
        balance = self._balances.get(account, 0)
        if balance < amount:
            raise InsufficientBalance(f"Account {account} holds {balance}, needs {amount}")
        self._balances[account] = balance - amount

    def mint_of(self, account: str) -> str | None:
        return self._account_mints.get(account)

    def transfer(self, from_account: str, to_account: str, amount: int) -> None:
        if amount == 0:
            return
        mint = self.mint_of(from_account)
        if mint is None:
            raise InsufficientBalance(f"Account {from_account} does not exist")
        self._bind(to_account, mint)
        self._debit(from_account, amount)
        self._balances[to_account] = (S(self._balances.get(to_account, 0)) + amount).to_amount()

    def mint(self, mint: str, to_account: str, amount: int) -> None:
        self._bind(to_account, mint)
        self._supply[mint] = (S(self._supply.get(mint, 0)) + amount).to_amount()
        self._balances[to_account] = (S(self._balances.get(to_account, 0)) + amount).to_amount()

    def burn(self, mint: str, from_account: str, amount: int) -> None:
        if self.mint_of(from_account) != mint:
            raise InsufficientBalance(f"Account {from_account} holds no {mint}")
        self._debit(from_account, amount)
        self._supply[mint] = (S(self._supply[mint]) - amount).value

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def total_supply(self, mint: str) -> int:
        return self._supply.get(mint, 0)

    def fund(self, owner: str, mint: str, amount: int) -> str:
        """Mint underlying tokens into an owner's associated account.

        Returns:
            The associated account id
        """
        account = token_account_address(owner, mint)
        self.mint(mint, account, amount)
        logger.debug("account_funded", owner=owner, mint=mint, amount=amount)
        return account

    def balance_of_owner(self, owner: str, mint: str) -> int:
        return self.balance_of(token_account_address(owner, mint))
