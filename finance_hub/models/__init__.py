"""Domain models for the ledger."""

from finance_hub.models.account import Account
from finance_hub.models.enums import AccountStatus, AccountType, Role
from finance_hub.models.results import Balances, OperationResult
from finance_hub.models.transaction import Transaction

__all__ = [
    "Account",
    "AccountStatus",
    "AccountType",
    "Balances",
    "OperationResult",
    "Role",
    "Transaction",
]
