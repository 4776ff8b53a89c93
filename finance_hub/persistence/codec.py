"""Line-oriented text encoding of a ledger.

Layout, one value per line::

    <account count>
    <transaction count>
    per account: number, holder name, age, address, phone, type code,
                 balance, status code, loan balance, investment balance,
                 pin, role code
    per transaction: account number, date (YYYY-MM-DD), time (HH:MM),
                     description, amount, balance after

Money is written with two decimals. Enum codes are positional indexes into
the tuples below.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Iterator, Sequence, TypeVar

from finance_hub.config import LedgerConfig
from finance_hub.exceptions import CorruptLedgerError, FinanceHubError
from finance_hub.models import Account, AccountStatus, AccountType, Role, Transaction
from finance_hub.money import ZERO, as_money, format_money
from finance_hub.store import LedgerStore

ACCOUNT_TYPE_CODES: tuple[AccountType, ...] = (
    AccountType.SAVINGS,
    AccountType.CURRENT,
    AccountType.INVESTMENT,
)
STATUS_CODES: tuple[AccountStatus, ...] = (
    AccountStatus.ACTIVE,
    AccountStatus.CLOSED,
    AccountStatus.FROZEN,
)
ROLE_CODES: tuple[Role, ...] = (Role.ADMINISTRATOR, Role.CUSTOMER)

ACCOUNT_FIELDS = 12
TRANSACTION_FIELDS = 6
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

E = TypeVar("E", bound=Enum)

logger = logging.getLogger(__name__)


def _text(value: str) -> str:
    """Flatten line breaks so a text field always occupies one line."""
    return value.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def encode_account(account: Account) -> list[str]:
    """Encode one account as its 12 lines."""
    return [
        str(account.account_number),
        _text(account.holder_name),
        str(account.age),
        _text(account.address),
        _text(account.phone),
        str(ACCOUNT_TYPE_CODES.index(account.account_type)),
        format_money(account.balance),
        str(STATUS_CODES.index(account.status)),
        format_money(account.loan_balance),
        format_money(account.investment_balance),
        account.pin,
        str(ROLE_CODES.index(account.role)),
    ]


def encode_transaction(transaction: Transaction) -> list[str]:
    """Encode one transaction as its 6 lines."""
    return [
        str(transaction.account_number),
        transaction.timestamp.strftime(DATE_FORMAT),
        transaction.timestamp.strftime(TIME_FORMAT),
        _text(transaction.description),
        format_money(transaction.amount),
        format_money(transaction.balance_after),
    ]


def encode(store: LedgerStore) -> str:
    """Serialize accounts, then transactions, to the ledger text format."""
    accounts = store.all_accounts()
    transactions = store.all_transactions()
    lines = [str(len(accounts)), str(len(transactions))]
    for account in accounts:
        lines.extend(encode_account(account))
    for transaction in transactions:
        lines.extend(encode_transaction(transaction))
    return "\n".join(lines) + "\n"


class _LineReader:
    """Sequential reader that reports the line number of bad values."""

    def __init__(self, lines: Sequence[str]) -> None:
        self._lines = lines
        self._pos = 0

    @property
    def line_no(self) -> int:
        return self._pos

    def next(self, what: str) -> str:
        if self._pos >= len(self._lines):
            raise CorruptLedgerError(f"Unexpected end of ledger data reading {what}")
        value = self._lines[self._pos]
        self._pos += 1
        return value

    def next_int(self, what: str) -> int:
        raw = self.next(what)
        try:
            return int(raw.strip())
        except ValueError as exc:
            raise CorruptLedgerError(f"Line {self._pos}: bad {what} {raw!r}") from exc

    def next_money(self, what: str, allow_negative: bool = False) -> Decimal:
        raw = self.next(what)
        try:
            value = as_money(raw)
        except FinanceHubError as exc:
            raise CorruptLedgerError(f"Line {self._pos}: bad {what} {raw!r}") from exc
        if value < ZERO and not allow_negative:
            raise CorruptLedgerError(f"Line {self._pos}: negative {what} {raw!r}")
        return value

    def next_code(self, what: str, codes: tuple[E, ...]) -> E:
        code = self.next_int(what)
        if not 0 <= code < len(codes):
            raise CorruptLedgerError(f"Line {self._pos}: unknown {what} code {code}")
        return codes[code]


def decode_accounts(reader: _LineReader, count: int) -> Iterator[Account]:
    for _ in range(count):
        yield Account(
            account_number=reader.next_int("account number"),
            holder_name=reader.next("holder name"),
            age=reader.next_int("age"),
            address=reader.next("address"),
            phone=reader.next("phone").strip(),
            account_type=reader.next_code("account type", ACCOUNT_TYPE_CODES),
            balance=reader.next_money("balance"),
            status=reader.next_code("status", STATUS_CODES),
            loan_balance=reader.next_money("loan balance"),
            investment_balance=reader.next_money("investment balance"),
            pin=reader.next("pin").strip(),
            role=reader.next_code("role", ROLE_CODES),
        )


def decode_transactions(reader: _LineReader, count: int) -> Iterator[Transaction]:
    for _ in range(count):
        account_number = reader.next_int("transaction account number")
        day = reader.next("transaction date").strip()
        clock = reader.next("transaction time").strip()
        try:
            timestamp = datetime.strptime(f"{day} {clock}", f"{DATE_FORMAT} {TIME_FORMAT}")
        except ValueError as exc:
            raise CorruptLedgerError(
                f"Line {reader.line_no}: bad transaction timestamp {day!r} {clock!r}"
            ) from exc
        yield Transaction(
            account_number=account_number,
            timestamp=timestamp,
            description=reader.next("transaction description"),
            amount=reader.next_money("transaction amount", allow_negative=True),
            balance_after=reader.next_money("balance after"),
        )


def decode(text: str, config: LedgerConfig | None = None) -> LedgerStore:
    """Parse ledger text into a new store.

    Nothing is returned unless the whole input decodes: any malformed or
    missing line raises ``CorruptLedgerError``. More transactions than the
    log holds are rejected under the ``reject`` policy; under ``drop_oldest``
    the oldest are dropped with a WARNING.
    """
    reader = _LineReader(text.split("\n"))
    account_count = reader.next_int("account count")
    transaction_count = reader.next_int("transaction count")
    if account_count < 0 or transaction_count < 0:
        raise CorruptLedgerError("Negative record count in ledger header")

    store = LedgerStore.from_config(config or LedgerConfig())
    try:
        for account in decode_accounts(reader, account_count):
            store.add_account(account)
        for transaction in decode_transactions(reader, transaction_count):
            store.transactions.append(transaction)
    except CorruptLedgerError:
        raise
    except FinanceHubError as exc:
        raise CorruptLedgerError(f"Ledger data rejected: {exc}") from exc
    if store.transactions.evicted_count:
        logger.warning(
            "Ledger declares %d transactions but the log holds %d; dropped the %d oldest",
            transaction_count,
            store.transactions.capacity,
            store.transactions.evicted_count,
        )
    return store
