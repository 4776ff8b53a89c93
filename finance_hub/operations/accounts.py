"""Balance-affecting operations on ledger accounts."""

from __future__ import annotations

import logging
from decimal import Decimal

from finance_hub.auth import AdminHandle, AuthorizedAccount, PinVerifier, PlaintextPinVerifier
from finance_hub.auth.pin import validate_new_pin
from finance_hub.exceptions import (
    AccountNotActiveError,
    DestinationInactiveError,
    InsufficientFundsError,
    InvalidPINError,
    NoInvestmentError,
    NoOutstandingLoanError,
    NotAuthorizedError,
    SameAccountTransferError,
)
from finance_hub.models import Account, AccountStatus, Balances
from finance_hub.money import ZERO, MoneyLike, as_money, validate_positive
from finance_hub.store import LedgerStore, TransactionRecorder

logger = logging.getLogger(__name__)

DEPOSIT = "Deposit"
WITHDRAWAL = "Withdrawal"
TRANSFER_OUT = "Transfer Out"
TRANSFER_IN = "Transfer In"
LOAN_DISBURSEMENT = "Loan Disbursement"
LOAN_REPAYMENT = "Loan Repayment"
INVESTMENT = "Investment"
INVESTMENT_WITHDRAWAL = "Investment Withdrawal"


def _context(operation: str, account: Account) -> dict:
    return {"operation": operation, "account_number": account.account_number}


class AccountOperations:
    """Mutation engine over a ``LedgerStore``.

    Every method validates all of its preconditions before touching a
    balance, so a rejected call leaves the store and the transaction log
    exactly as they were. Successful balance changes are recorded through
    the ``TransactionRecorder``.

    Customer methods take an ``AuthorizedAccount`` handle. The optional
    ``pin`` argument re-confirms the PIN right before the mutation.

    Parameters
    ----------
    store : LedgerStore
        Accounts to operate on.
    recorder : TransactionRecorder
        Recorder appending to ``store.transactions``.
    verifier : PinVerifier | None
        PIN comparison strategy (default: ``PlaintextPinVerifier``).
    pin_length : int
        Required length of a new PIN.
    """

    def __init__(
        self,
        store: LedgerStore,
        recorder: TransactionRecorder,
        verifier: PinVerifier | None = None,
        pin_length: int = 4,
    ) -> None:
        self.store = store
        self.recorder = recorder
        self.verifier: PinVerifier = verifier or PlaintextPinVerifier()
        self.pin_length = pin_length

    # Customer operations
    def deposit(self, handle: AuthorizedAccount, amount: MoneyLike, pin: str | None = None) -> Balances:
        """Credit ``amount`` to the account's balance."""
        account = self._resolve(handle)
        amt = validate_positive(amount)
        self._confirm_pin(account, pin)
        self._require_active(account, "deposit to")
        balance = as_money(account.balance + amt)
        self._ensure_log_room()

        account.balance = balance
        self.recorder.record(account.account_number, DEPOSIT, amt, account.balance)
        logger.info(
            "Deposit of %s to account %d", amt, account.account_number, extra=_context("deposit", account)
        )
        return Balances.of(account)

    def withdraw(self, handle: AuthorizedAccount, amount: MoneyLike, pin: str | None = None) -> Balances:
        """Debit ``amount`` from the account's balance."""
        account = self._resolve(handle)
        amt = validate_positive(amount)
        self._confirm_pin(account, pin)
        self._require_active(account, "withdraw from")
        self._require_funds(account.balance, amt)
        balance = as_money(account.balance - amt)
        self._ensure_log_room()

        account.balance = balance
        self.recorder.record(account.account_number, WITHDRAWAL, -amt, account.balance)
        logger.info(
            "Withdrawal of %s from account %d",
            amt,
            account.account_number,
            extra=_context("withdraw", account),
        )
        return Balances.of(account)

    def transfer(
        self,
        handle: AuthorizedAccount,
        to_account: int,
        amount: MoneyLike,
        pin: str | None = None,
    ) -> Balances:
        """Move ``amount`` from the handle's account to ``to_account``.

        Records a "Transfer Out" on the source and a "Transfer In" on the
        destination, each with its own balance after the move.
        """
        source = self._resolve(handle)
        destination = self.store.get_account(to_account)
        if destination is source:
            raise SameAccountTransferError("Cannot transfer to the same account")
        amt = validate_positive(amount)
        self._confirm_pin(source, pin)
        self._require_active(source, "transfer from")
        if not destination.is_active:
            raise DestinationInactiveError(
                f"Cannot transfer to a {destination.status.label} account"
            )
        self._require_funds(source.balance, amt)
        source_balance = as_money(source.balance - amt)
        destination_balance = as_money(destination.balance + amt)
        self._ensure_log_room(2)

        source.balance = source_balance
        destination.balance = destination_balance
        self.recorder.record(source.account_number, TRANSFER_OUT, -amt, source.balance)
        self.recorder.record(destination.account_number, TRANSFER_IN, amt, destination.balance)
        logger.info(
            "Transfer of %s from account %d to account %d",
            amt,
            source.account_number,
            destination.account_number,
            extra=_context("transfer", source),
        )
        return Balances.of(source)

    def apply_loan(self, handle: AuthorizedAccount, amount: MoneyLike, pin: str | None = None) -> Balances:
        """Disburse a loan: both the balance and the debt grow by ``amount``."""
        account = self._resolve(handle)
        amt = validate_positive(amount)
        self._confirm_pin(account, pin)
        self._require_active(account, "apply for loan with")
        balance = as_money(account.balance + amt)
        loan_balance = as_money(account.loan_balance + amt)
        self._ensure_log_room()

        account.balance = balance
        account.loan_balance = loan_balance
        self.recorder.record(account.account_number, LOAN_DISBURSEMENT, amt, account.balance)
        logger.info(
            "Loan of %s disbursed to account %d",
            amt,
            account.account_number,
            extra=_context("apply_loan", account),
        )
        return Balances.of(account)

    def repay_loan(self, handle: AuthorizedAccount, amount: MoneyLike, pin: str | None = None) -> Balances:
        """Repay outstanding debt from the balance.

        An amount above the outstanding loan is clamped to it. Repayment is
        accepted whatever the account status, since it only reduces debt.
        """
        account = self._resolve(handle)
        if account.loan_balance <= ZERO:
            raise NoOutstandingLoanError("No outstanding loan for this account")
        amt = validate_positive(amount)
        self._confirm_pin(account, pin)
        if amt > account.loan_balance:
            logger.info(
                "Repayment %s exceeds loan balance; adjusted to %s", amt, account.loan_balance
            )
            amt = account.loan_balance
        self._require_funds(account.balance, amt)
        balance = as_money(account.balance - amt)
        loan_balance = as_money(account.loan_balance - amt)
        self._ensure_log_room()

        account.balance = balance
        account.loan_balance = loan_balance
        self.recorder.record(account.account_number, LOAN_REPAYMENT, -amt, account.balance)
        logger.info(
            "Loan repayment of %s from account %d",
            amt,
            account.account_number,
            extra=_context("repay_loan", account),
        )
        return Balances.of(account)

    def invest(self, handle: AuthorizedAccount, amount: MoneyLike, pin: str | None = None) -> Balances:
        """Move ``amount`` from the balance into the investment sub-ledger."""
        account = self._resolve(handle)
        amt = validate_positive(amount)
        self._confirm_pin(account, pin)
        self._require_active(account, "invest with")
        self._require_funds(account.balance, amt)
        balance = as_money(account.balance - amt)
        investment_balance = as_money(account.investment_balance + amt)
        self._ensure_log_room()

        account.balance = balance
        account.investment_balance = investment_balance
        self.recorder.record(account.account_number, INVESTMENT, -amt, account.balance)
        logger.info(
            "Investment of %s from account %d",
            amt,
            account.account_number,
            extra=_context("invest", account),
        )
        return Balances.of(account)

    def divest_investment(
        self, handle: AuthorizedAccount, amount: MoneyLike, pin: str | None = None
    ) -> Balances:
        """Move ``amount`` from the investment sub-ledger back to the balance."""
        account = self._resolve(handle)
        if account.investment_balance <= ZERO:
            raise NoInvestmentError("No investments to withdraw from this account")
        amt = validate_positive(amount)
        self._confirm_pin(account, pin)
        self._require_active(account, "withdraw investments from")
        if amt > account.investment_balance:
            raise InsufficientFundsError(
                f"Insufficient investment funds. Current investment balance: {account.investment_balance}"
            )
        balance = as_money(account.balance + amt)
        investment_balance = as_money(account.investment_balance - amt)
        self._ensure_log_room()

        account.balance = balance
        account.investment_balance = investment_balance
        self.recorder.record(account.account_number, INVESTMENT_WITHDRAWAL, amt, account.balance)
        logger.info(
            "Investment withdrawal of %s to account %d",
            amt,
            account.account_number,
            extra=_context("divest_investment", account),
        )
        return Balances.of(account)

    def change_pin(
        self,
        handle: AuthorizedAccount,
        old_pin: str,
        new_pin: str,
        confirm_pin: str | None = None,
    ) -> None:
        """Replace the PIN after checking the current one."""
        account = self._resolve(handle)
        if not self.verifier.verify(account.pin, old_pin):
            raise InvalidPINError("Incorrect current PIN")
        validate_new_pin(new_pin, confirm_pin, self.pin_length)
        account.pin = new_pin
        logger.info(
            "PIN changed for account %d", account.account_number, extra=_context("change_pin", account)
        )

    # Read-only views
    def balances(self, handle: AuthorizedAccount) -> Balances:
        return Balances.of(self._resolve(handle))

    # Administrative operations
    def set_status(self, admin: AdminHandle, account_number: int, status: AccountStatus) -> Account:
        """Change an account's status. Requires the administrator handle."""
        if not isinstance(admin, AdminHandle):
            raise NotAuthorizedError("Administrator login required")
        account = self.store.get_account(account_number)
        new_status = AccountStatus(status)
        previous = account.status
        account.status = new_status
        logger.info(
            "Account %d status changed from %s to %s",
            account_number,
            previous.value,
            new_status.value,
            extra=_context("set_status", account),
        )
        return account

    # Helpers
    def _resolve(self, handle: AuthorizedAccount) -> Account:
        if not isinstance(handle, AuthorizedAccount):
            raise NotAuthorizedError("You must be logged in to perform this operation")
        return self.store.get_account(handle.account_number)

    def _confirm_pin(self, account: Account, pin: str | None) -> None:
        if pin is not None and not self.verifier.verify(account.pin, pin):
            raise InvalidPINError("Invalid PIN. Transaction cancelled")

    @staticmethod
    def _require_active(account: Account, action: str) -> None:
        if not account.is_active:
            raise AccountNotActiveError(f"Cannot {action} a {account.status.label} account")

    @staticmethod
    def _require_funds(available: Decimal, amount: Decimal) -> None:
        if amount > available:
            raise InsufficientFundsError(
                f"Insufficient funds. Current balance: {as_money(available)}"
            )

    def _ensure_log_room(self, count: int = 1) -> None:
        self.recorder.log.ensure_room(count)
