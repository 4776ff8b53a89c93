"""Tests for models and money helpers."""

from dataclasses import FrozenInstanceError
from datetime import datetime
from decimal import Decimal

import pytest

from finance_hub.exceptions import InsufficientFundsError, InvalidAmountError
from finance_hub.models import (
    Account,
    AccountStatus,
    AccountType,
    Balances,
    OperationResult,
    Role,
    Transaction,
)
from finance_hub.money import ZERO, as_money, format_money, validate_positive


@pytest.fixture
def account() -> Account:
    return Account(
        account_number=123456,
        holder_name="Jane Doe",
        age=36,
        address="1 Main Street",
        phone="5550100",
        account_type=AccountType.CURRENT,
        pin="1234",
        balance=Decimal("10.00"),
    )


class TestMoney:
    """Tests for as_money, validate_positive and format_money."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("10", Decimal("10.00")),
            (" 2.5 ", Decimal("2.50")),
            (0.1, Decimal("0.10")),
            (7, Decimal("7.00")),
            (Decimal("1.005"), Decimal("1.00")),
            (Decimal("1.015"), Decimal("1.02")),
            ("-3.10", Decimal("-3.10")),
        ],
    )
    def test_as_money(self, value, expected: Decimal) -> None:
        assert as_money(value) == expected
        assert as_money(value).as_tuple().exponent == -2

    @pytest.mark.parametrize(
        "value",
        ["", "ten", "1e", "NaN", "Infinity", None, "1e30", "99999999999999999999999999999"],
    )
    def test_as_money_rejects(self, value) -> None:
        with pytest.raises(InvalidAmountError):
            as_money(value)

    def test_validate_positive(self) -> None:
        assert validate_positive("0.01") == Decimal("0.01")
        with pytest.raises(InvalidAmountError):
            validate_positive("0")
        with pytest.raises(InvalidAmountError):
            validate_positive("-0.01")

    def test_format_money(self) -> None:
        assert format_money(Decimal("5")) == "5.00"
        assert format_money(Decimal("-40.5")) == "-40.50"
        assert format_money(ZERO) == "0.00"


class TestEnums:
    """Tests for enumeration types."""

    def test_labels(self) -> None:
        assert AccountType.SAVINGS.label == "Savings"
        assert AccountStatus.FROZEN.label == "Frozen"

    def test_str_values(self) -> None:
        assert AccountType("INVESTMENT") is AccountType.INVESTMENT
        assert AccountStatus.ACTIVE == "ACTIVE"
        assert Role.CUSTOMER.value == "CUSTOMER"


class TestAccount:
    """Tests for Account."""

    def test_defaults(self, account: Account) -> None:
        assert account.loan_balance == ZERO
        assert account.investment_balance == ZERO
        assert account.status == AccountStatus.ACTIVE
        assert account.role == Role.CUSTOMER
        assert account.is_active

    def test_inactive(self, account: Account) -> None:
        account.status = AccountStatus.CLOSED
        assert not account.is_active

    def test_pin_not_in_repr(self, account: Account) -> None:
        assert "1234" not in repr(account)


class TestTransaction:
    """Tests for Transaction."""

    def test_is_immutable(self) -> None:
        tx = Transaction(
            account_number=123456,
            timestamp=datetime(2026, 1, 2, 3, 4),
            description="Deposit",
            amount=Decimal("5.00"),
            balance_after=Decimal("5.00"),
        )
        with pytest.raises(FrozenInstanceError):
            tx.amount = Decimal("6.00")  # type: ignore[misc]


class TestResults:
    """Tests for Balances and OperationResult."""

    def test_balances_of(self, account: Account) -> None:
        balances = Balances.of(account)

        assert balances == Balances(123456, Decimal("10.00"), ZERO, ZERO)

    def test_success(self, account: Account) -> None:
        result = OperationResult.success(Balances.of(account))

        assert result.ok
        assert result.error_kind is None
        assert result.balances is not None
        assert result.balances.balance == Decimal("10.00")

    def test_failure(self) -> None:
        result = OperationResult.failure(InsufficientFundsError("Insufficient funds"))

        assert not result.ok
        assert result.error_kind == "InsufficientFunds"
        assert result.message == "Insufficient funds"
        assert result.balances is None
