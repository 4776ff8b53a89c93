"""Session-aware facade used by the presentation layer.

Each public method acts on the current session and returns an
``OperationResult``. Domain errors never escape: they become failure
results named after the error kind.
"""

from __future__ import annotations

import logging
import random
from datetime import date, datetime
from typing import Callable, TypeVar

from finance_hub.auth import PinVerifier, Session
from finance_hub.config import FinanceHubConfig
from finance_hub.exceptions import (
    AccountNotFoundError,
    FinanceHubError,
    InvalidStatusError,
    NotAuthorizedError,
)
from finance_hub.models import AccountStatus, Balances, OperationResult
from finance_hub.money import MoneyLike
from finance_hub.operations import AccountOperations, Registration, RegistrationRequest
from finance_hub.persistence import load_ledger, save_ledger
from finance_hub.store import LedgerStore, TransactionRecorder

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LedgerService:
    """Wire store, recorder, session and operations together.

    Parameters
    ----------
    config : FinanceHubConfig | None
        Configuration (default: built-in defaults).
    store : LedgerStore | None
        Existing store; an empty one sized by ``config`` otherwise.
    clock : Callable[[], datetime] | None
        Timestamp source for transactions.
    today : Callable[[], date] | None
        Date source for age checks.
    verifier : PinVerifier | None
        PIN comparison strategy.
    """

    def __init__(
        self,
        config: FinanceHubConfig | None = None,
        store: LedgerStore | None = None,
        clock: Callable[[], datetime] | None = None,
        today: Callable[[], date] | None = None,
        verifier: PinVerifier | None = None,
    ) -> None:
        self.config = (config or FinanceHubConfig()).validate()
        self.store = store if store is not None else LedgerStore.from_config(self.config.ledger)
        if clock is not None:
            self.recorder = TransactionRecorder(self.store.transactions, clock=clock)
        else:
            self.recorder = TransactionRecorder(self.store.transactions)
        self.session = Session(self.store, admin_pin=self.config.auth.admin_pin, verifier=verifier)
        self.operations = AccountOperations(
            self.store,
            self.recorder,
            verifier=self.session.verifier,
            pin_length=self.config.ledger.pin_length,
        )
        self.registration = Registration(
            self.store,
            self.recorder,
            config=self.config.ledger,
            rng=random.Random(self.config.seed),
            today=today or date.today,
        )

    @classmethod
    def open(cls, config: FinanceHubConfig | None = None, **kwargs) -> LedgerService:
        """Load the configured data file (empty ledger if absent)."""
        config = (config or FinanceHubConfig()).validate()
        store = load_ledger(
            config.storage.data_file,
            config.ledger,
            encoding=config.storage.encoding,
        )
        return cls(config=config, store=store, **kwargs)

    def save(self) -> None:
        save_ledger(self.store, self.config.storage.data_file, encoding=self.config.storage.encoding)

    def close(self) -> None:
        """Orderly shutdown: end the session and persist the ledger."""
        self.session.logout()
        self.save()

    # Session
    def login(self, account_number: int, pin: str) -> OperationResult:
        return self._run("login", lambda: self._login(account_number, pin))

    def login_admin(self, secret: str) -> OperationResult:
        return self._run("admin login", lambda: self.session.login_admin(secret))

    def logout(self) -> OperationResult:
        self.session.logout()
        return OperationResult.success()

    def register(self, request: RegistrationRequest) -> OperationResult:
        """Open an account; the success value is the new ``Account``."""
        return self._run("registration", lambda: self.registration.register(request))

    # Customer operations
    def deposit(self, amount: MoneyLike, pin: str | None = None) -> OperationResult:
        return self._run(
            "deposit", lambda: self.operations.deposit(self.session.require_account(), amount, pin)
        )

    def withdraw(self, amount: MoneyLike, pin: str | None = None) -> OperationResult:
        return self._run(
            "withdrawal",
            lambda: self.operations.withdraw(self.session.require_account(), amount, pin),
        )

    def transfer(self, to_account: int, amount: MoneyLike, pin: str | None = None) -> OperationResult:
        return self._run(
            "transfer",
            lambda: self.operations.transfer(
                self.session.require_account(), to_account, amount, pin
            ),
        )

    def apply_loan(self, amount: MoneyLike, pin: str | None = None) -> OperationResult:
        return self._run(
            "loan application",
            lambda: self.operations.apply_loan(self.session.require_account(), amount, pin),
        )

    def repay_loan(self, amount: MoneyLike, pin: str | None = None) -> OperationResult:
        return self._run(
            "loan repayment",
            lambda: self.operations.repay_loan(self.session.require_account(), amount, pin),
        )

    def invest(self, amount: MoneyLike, pin: str | None = None) -> OperationResult:
        return self._run(
            "investment",
            lambda: self.operations.invest(self.session.require_account(), amount, pin),
        )

    def divest_investment(self, amount: MoneyLike, pin: str | None = None) -> OperationResult:
        return self._run(
            "investment withdrawal",
            lambda: self.operations.divest_investment(self.session.require_account(), amount, pin),
        )

    def change_pin(self, old_pin: str, new_pin: str, confirm_pin: str | None = None) -> OperationResult:
        return self._run(
            "PIN change",
            lambda: self.operations.change_pin(
                self.session.require_account(), old_pin, new_pin, confirm_pin
            ),
        )

    def account_details(self) -> OperationResult:
        """The logged-in customer's own ``Account``."""
        return self._run(
            "account details",
            lambda: self.store.get_account(self.session.require_account().account_number),
        )

    def history(self, account_number: int | None = None) -> OperationResult:
        """Transactions of the logged-in account, or of any account for the admin."""
        return self._run("transaction history", lambda: self._history(account_number))

    # Administrative operations
    def find_account(self, account_number: int) -> OperationResult:
        return self._run("account search", lambda: self._admin_lookup(account_number))

    def list_accounts(self) -> OperationResult:
        return self._run("account listing", self._list_accounts)

    def set_status(self, account_number: int, status: AccountStatus | str) -> OperationResult:
        return self._run(
            "status update",
            lambda: self.operations.set_status(
                self.session.require_admin(), account_number, _parse_status(status)
            ),
        )

    def totals(self) -> OperationResult:
        """Bank-wide balance, loan and investment totals."""
        return self._run("totals", self._totals)

    # Helpers
    def _login(self, account_number: int, pin: str) -> Balances:
        handle = self.session.authenticate(account_number, pin)
        return self.operations.balances(handle)

    def _list_accounts(self) -> list:
        self.session.require_admin()
        return self.store.all_accounts()

    def _history(self, account_number: int | None) -> list:
        if self.session.is_admin:
            if account_number is None:
                raise AccountNotFoundError("An account number is required")
            self.store.get_account(account_number)
            return list(self.recorder.history_for(account_number))
        own = self.session.require_account().account_number
        if account_number is not None and account_number != own:
            raise NotAuthorizedError("Customers may only view their own history")
        return list(self.recorder.history_for(own))

    def _admin_lookup(self, account_number: int):
        self.session.require_admin()
        return self.store.get_account(account_number)

    def _totals(self) -> dict:
        self.session.require_admin()
        return {
            "balance": self.store.total_balance(),
            "loans": self.store.total_loans(),
            "investments": self.store.total_investments(),
        }

    def _run(self, action: str, fn: Callable[[], T]) -> OperationResult:
        try:
            value = fn()
        except FinanceHubError as exc:
            logger.warning(
                "Rejected %s (%s): %s",
                action,
                exc.kind,
                exc,
                extra={
                    "operation": action,
                    "error_kind": exc.kind,
                    "account_number": getattr(self.session.current, "account_number", None),
                },
            )
            return OperationResult.failure(exc)
        return OperationResult.success(value)


def _parse_status(status: AccountStatus | str) -> AccountStatus:
    if isinstance(status, AccountStatus):
        return status
    try:
        return AccountStatus(str(status).upper())
    except ValueError as exc:
        raise InvalidStatusError(f"Unknown account status: {status}") from exc
