"""Result values handed to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from finance_hub.exceptions import FinanceHubError
from finance_hub.models.account import Account


@dataclass(frozen=True)
class Balances:
    """Snapshot of an account's monetary fields."""

    account_number: int
    balance: Decimal
    loan_balance: Decimal
    investment_balance: Decimal

    @classmethod
    def of(cls, account: Account) -> Balances:
        return cls(
            account_number=account.account_number,
            balance=account.balance,
            loan_balance=account.loan_balance,
            investment_balance=account.investment_balance,
        )


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one service call: success with a value, or a failure kind."""

    ok: bool
    value: object = None
    error_kind: str | None = None
    message: str = ""

    @classmethod
    def success(cls, value: object = None, message: str = "") -> OperationResult:
        return cls(ok=True, value=value, message=message)

    @classmethod
    def failure(cls, error: FinanceHubError) -> OperationResult:
        return cls(ok=False, error_kind=error.kind, message=str(error))

    @property
    def balances(self) -> Balances | None:
        return self.value if isinstance(self.value, Balances) else None
