"""Account registration: applicant checks and account number assignment."""

from __future__ import annotations

import calendar
import logging
import random
from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from finance_hub.auth.pin import validate_new_pin
from finance_hub.config import LedgerConfig
from finance_hub.exceptions import (
    CapacityExceededError,
    InvalidAccountTypeError,
    InvalidDateError,
    UnderageError,
)
from finance_hub.models import Account, AccountStatus, AccountType, Role
from finance_hub.money import ZERO, MoneyLike, as_money
from finance_hub.store import LedgerStore, TransactionRecorder

logger = logging.getLogger(__name__)

INITIAL_DEPOSIT = "Initial Deposit"
MIN_BIRTH_YEAR = 1900


@dataclass
class RegistrationRequest:
    """Everything an applicant supplies to open an account."""

    holder_name: str
    birth_day: int
    birth_month: int
    birth_year: int
    address: str
    phone: str
    pin: str = field(repr=False)
    confirm_pin: str = field(repr=False)
    account_type: AccountType | str = AccountType.SAVINGS
    initial_deposit: MoneyLike = "0"


def parse_account_type(value: AccountType | str) -> AccountType:
    """Accept an ``AccountType`` or its name in any case."""
    if isinstance(value, AccountType):
        return value
    try:
        return AccountType(str(value).strip().upper())
    except ValueError as exc:
        raise InvalidAccountTypeError(f"Unknown account type: {value}") from exc


def validate_birth_date(day: int, month: int, year: int, today: date) -> date:
    """Return the birth date if it is a real calendar day between 1900 and today.

    Raises
    ------
    InvalidDateError
        For impossible dates (including 29 February outside leap years)
        and dates in the future.
    """
    if not MIN_BIRTH_YEAR <= year <= today.year:
        raise InvalidDateError(f"Invalid year of birth: {year}")
    if not 1 <= month <= 12:
        raise InvalidDateError(f"Invalid month of birth: {month}")
    if not 1 <= day <= calendar.monthrange(year, month)[1]:
        raise InvalidDateError(f"Invalid day of birth: {day:02d}/{month:02d}/{year}")
    born = date(year, month, day)
    if born > today:
        raise InvalidDateError("Date of birth is in the future")
    return born


def calculate_age(born: date, today: date) -> int:
    """Whole years elapsed, minus one if this year's birthday is still ahead."""
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age


class Registration:
    """Create accounts in a ``LedgerStore``.

    Parameters
    ----------
    store : LedgerStore
        Store receiving new accounts.
    recorder : TransactionRecorder
        Records the initial deposit.
    config : LedgerConfig | None
        Age limit, PIN length and account number range.
    rng : random.Random | None
        Source of account numbers (seed it for reproducible numbers).
    today : Callable[[], date]
        Current date provider.
    """

    def __init__(
        self,
        store: LedgerStore,
        recorder: TransactionRecorder,
        config: LedgerConfig | None = None,
        rng: random.Random | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.store = store
        self.recorder = recorder
        self.config = config or LedgerConfig()
        self._rng = rng or random.Random()
        self.today = today

    def register(self, request: RegistrationRequest) -> Account:
        """Validate the applicant and add a new active customer account.

        A negative initial deposit is clamped to zero. A positive one is
        recorded as an "Initial Deposit" transaction.
        """
        account_type = parse_account_type(request.account_type)
        if self.store.is_full:
            raise CapacityExceededError(
                f"Maximum account limit reached ({self.store.max_accounts}). Cannot create new account"
            )

        today = self.today()
        born = validate_birth_date(
            request.birth_day, request.birth_month, request.birth_year, today
        )
        age = calculate_age(born, today)
        if age < self.config.min_age:
            raise UnderageError(
                f"You must be at least {self.config.min_age} years old to open an account"
            )

        validate_new_pin(request.pin, request.confirm_pin, self.config.pin_length)

        deposit = as_money(request.initial_deposit)
        if deposit < ZERO:
            logger.info("Negative initial deposit %s set to 0", deposit)
            deposit = ZERO
        if deposit > ZERO:
            self.recorder.log.ensure_room()

        account = Account(
            account_number=self.next_account_number(),
            holder_name=request.holder_name.strip(),
            age=age,
            address=request.address.strip(),
            phone=request.phone.strip(),
            account_type=account_type,
            pin=request.pin,
            balance=deposit,
            loan_balance=ZERO,
            investment_balance=ZERO,
            status=AccountStatus.ACTIVE,
            role=Role.CUSTOMER,
        )
        self.store.add_account(account)
        if deposit > ZERO:
            self.recorder.record(account.account_number, INITIAL_DEPOSIT, deposit, account.balance)

        logger.info(
            "Registered account %d (%s) with initial deposit %s",
            account.account_number,
            account.account_type.value,
            deposit,
        )
        return account

    def next_account_number(self) -> int:
        """Draw random account numbers until one is not taken."""
        low, high = self.config.account_number_min, self.config.account_number_max
        for _ in range(self.config.max_number_attempts):
            candidate = self._rng.randint(low, high)
            if self.store.is_account_number_unique(candidate):
                return candidate
        raise CapacityExceededError(
            f"No free account number found after {self.config.max_number_attempts} attempts"
        )
