"""In-memory ledger store with fixed account capacity."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterator

from finance_hub.config import LedgerConfig
from finance_hub.exceptions import (
    AccountNotFoundError,
    CapacityExceededError,
    DuplicateAccountError,
)
from finance_hub.models import Account, Transaction
from finance_hub.money import ZERO
from finance_hub.store.transaction_log import POLICIES, TransactionLog


class LedgerStore:
    """Authoritative collection of accounts plus the transaction log.

    Accounts are kept in a dict keyed by account number, so iteration
    follows insertion order. Accounts are never removed; closing one is a
    status change.
    """

    def __init__(
        self,
        max_accounts: int = 100,
        transactions: TransactionLog | None = None,
    ) -> None:
        self.max_accounts = max_accounts
        if transactions is None:
            transactions = TransactionLog(capacity=max_accounts * 10)
        self.transactions = transactions
        self._accounts: dict[int, Account] = {}

    @classmethod
    def from_config(cls, config: LedgerConfig) -> LedgerStore:
        """Build an empty store sized and policed by ``config``."""
        log = TransactionLog(
            capacity=config.max_transactions,
            policy=POLICIES[config.eviction](),
        )
        return cls(max_accounts=config.max_accounts, transactions=log)

    def find_by_account_number(self, account_number: int) -> Account | None:
        """Return the account, or None when absent."""
        return self._accounts.get(account_number)

    def get_account(self, account_number: int) -> Account:
        """Return the account or raise ``AccountNotFoundError``."""
        account = self._accounts.get(account_number)
        if account is None:
            raise AccountNotFoundError(f"Account {account_number} not found")
        return account

    def is_account_number_unique(self, account_number: int) -> bool:
        return account_number not in self._accounts

    def add_account(self, account: Account) -> None:
        """Add an account to the store."""
        if len(self._accounts) >= self.max_accounts:
            raise CapacityExceededError(
                f"Maximum account limit reached ({self.max_accounts})"
            )
        if account.account_number in self._accounts:
            raise DuplicateAccountError(f"Account {account.account_number} already exists")
        self._accounts[account.account_number] = account

    def all_accounts(self) -> list[Account]:
        """Return all accounts in insertion order."""
        return list(self._accounts.values())

    @property
    def is_full(self) -> bool:
        return len(self._accounts) >= self.max_accounts

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts.values())

    # Aggregates
    def total_balance(self) -> Decimal:
        return sum((a.balance for a in self._accounts.values()), ZERO)

    def total_loans(self) -> Decimal:
        return sum((a.loan_balance for a in self._accounts.values()), ZERO)

    def total_investments(self) -> Decimal:
        return sum((a.investment_balance for a in self._accounts.values()), ZERO)

    def all_transactions(self) -> list[Transaction]:
        return list(self.transactions)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "accounts": len(self._accounts),
            "transactions": len(self.transactions),
        }
