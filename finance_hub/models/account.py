"""Account model for the ledger."""

from dataclasses import dataclass, field
from decimal import Decimal

from finance_hub.models.enums import AccountStatus, AccountType, Role
from finance_hub.money import ZERO


@dataclass
class Account:
    """Bank account entity.

    ``account_number`` and ``age`` are fixed at registration. The three
    monetary fields are never negative and are changed only by
    ``AccountOperations``.
    """

    account_number: int
    holder_name: str
    age: int
    address: str
    phone: str
    account_type: AccountType
    pin: str = field(repr=False)
    balance: Decimal = ZERO
    loan_balance: Decimal = ZERO
    investment_balance: Decimal = ZERO
    status: AccountStatus = AccountStatus.ACTIVE
    role: Role = Role.CUSTOMER

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE
