"""Transaction model for the ledger."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Transaction:
    """Immutable record of one balance-affecting event.

    ``amount`` is signed: positive credits the balance, negative debits it.
    ``timestamp`` has minute precision, matching the persisted HH:MM field.
    """

    account_number: int
    timestamp: datetime
    description: str
    amount: Decimal
    balance_after: Decimal
