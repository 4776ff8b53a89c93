"""Bounded transaction log and the recorder that appends to it."""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterator, Protocol

from finance_hub.exceptions import CapacityExceededError
from finance_hub.models import Transaction
from finance_hub.money import as_money

logger = logging.getLogger(__name__)


class EvictionPolicy(Protocol):
    """Decides what happens when a full log receives a new entry."""

    evicts: bool

    def make_room(self, entries: deque[Transaction], capacity: int) -> Transaction | None:
        """Free one slot, returning the evicted entry (if any)."""


class DropOldestPolicy:
    """Evict the oldest entry so the newest always fits."""

    evicts = True

    def make_room(self, entries: deque[Transaction], capacity: int) -> Transaction | None:
        return entries.popleft()


class RejectWhenFullPolicy:
    """Refuse new entries once the log is full."""

    evicts = False

    def make_room(self, entries: deque[Transaction], capacity: int) -> Transaction | None:
        raise CapacityExceededError(f"Transaction log is full ({capacity} entries)")


POLICIES: dict[str, Callable[[], EvictionPolicy]] = {
    "drop_oldest": DropOldestPolicy,
    "reject": RejectWhenFullPolicy,
}


class TransactionLog:
    """Ordered, capacity-bounded sequence of transactions.

    Insertion order is chronological order. ``len(log)`` never exceeds
    ``capacity``; what happens at the limit is delegated to ``policy``.

    Parameters
    ----------
    capacity : int
        Maximum number of retained transactions.
    policy : EvictionPolicy | None
        Overflow strategy (default: ``DropOldestPolicy``).
    """

    def __init__(self, capacity: int, policy: EvictionPolicy | None = None) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self.policy: EvictionPolicy = policy or DropOldestPolicy()
        self._entries: deque[Transaction] = deque()
        self.evicted_count = 0

    def append(self, transaction: Transaction) -> None:
        """Append a transaction, applying the eviction policy when full."""
        if len(self._entries) >= self.capacity:
            evicted = self.policy.make_room(self._entries, self.capacity)
            if evicted is not None:
                self.evicted_count += 1
                logger.warning(
                    "Transaction log full (%d); evicted oldest entry for account %d from %s",
                    self.capacity,
                    evicted.account_number,
                    evicted.timestamp.strftime("%Y-%m-%d %H:%M"),
                )
        self._entries.append(transaction)

    def ensure_room(self, count: int = 1) -> None:
        """Raise ``CapacityExceededError`` if ``count`` appends would be refused.

        Lets callers reject an operation before mutating any balance.
        """
        if not self.policy.evicts and len(self._entries) + count > self.capacity:
            raise CapacityExceededError(f"Transaction log is full ({self.capacity} entries)")

    @property
    def is_full(self) -> bool:
        return len(self._entries) >= self.capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Transaction:
        return self._entries[index]


def _now_to_minute() -> datetime:
    return datetime.now().replace(second=0, microsecond=0)


class TransactionRecorder:
    """Create transactions for completed operations and query them back.

    Parameters
    ----------
    log : TransactionLog
        Log that receives the records.
    clock : Callable[[], datetime]
        Source of timestamps (default: local wall clock).
    """

    def __init__(
        self,
        log: TransactionLog,
        clock: Callable[[], datetime] = _now_to_minute,
    ) -> None:
        self.log = log
        self._clock = clock

    def record(
        self,
        account_number: int,
        description: str,
        amount: Decimal,
        balance_after: Decimal,
    ) -> Transaction:
        """Append a new transaction stamped with the current time."""
        transaction = Transaction(
            account_number=account_number,
            timestamp=self._clock().replace(second=0, microsecond=0),
            description=description,
            amount=as_money(amount),
            balance_after=as_money(balance_after),
        )
        self.log.append(transaction)
        return transaction

    def history_for(self, account_number: int) -> Iterator[Transaction]:
        """Yield the account's transactions in insertion order."""
        return (tx for tx in self.log if tx.account_number == account_number)
