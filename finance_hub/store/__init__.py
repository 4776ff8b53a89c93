"""In-memory ledger store and transaction log."""

from finance_hub.store.ledger import LedgerStore
from finance_hub.store.transaction_log import (
    DropOldestPolicy,
    EvictionPolicy,
    RejectWhenFullPolicy,
    TransactionLog,
    TransactionRecorder,
)

__all__ = [
    "DropOldestPolicy",
    "EvictionPolicy",
    "LedgerStore",
    "RejectWhenFullPolicy",
    "TransactionLog",
    "TransactionRecorder",
]
