"""Tests for LedgerService."""

import logging
from decimal import Decimal

import pytest

from finance_hub.config import FinanceHubConfig, LedgerConfig
from finance_hub.models import Account, AccountStatus, AccountType, Balances
from finance_hub.service import LedgerService


@pytest.fixture
def customer(service: LedgerService, make_request) -> Account:
    """A registered account with 100.00, logged in."""
    result = service.register(make_request(initial_deposit="100.00"))
    assert result.ok
    assert service.login(result.value.account_number, "1234").ok
    return result.value


class TestSession:
    """Tests for login, admin login and logout."""

    def test_login_returns_balances(self, service: LedgerService, customer: Account) -> None:
        result = service.login(customer.account_number, "1234")

        assert result.ok
        assert result.balances == Balances(
            customer.account_number, Decimal("100.00"), Decimal("0.00"), Decimal("0.00")
        )

    def test_login_failures(self, service: LedgerService, customer: Account) -> None:
        assert service.login(customer.account_number, "0000").error_kind == "InvalidPIN"
        assert service.login(1, "1234").error_kind == "AccountNotFound"
        assert service.login_admin("wrong").error_kind == "InvalidPIN"

    def test_operations_require_login(self, service: LedgerService, customer: Account) -> None:
        service.logout()

        result = service.deposit("10")

        assert not result.ok
        assert result.error_kind == "NotAuthorized"
        assert customer.balance == Decimal("100.00")

    def test_rejection_is_logged(self, service: LedgerService, customer: Account, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="finance_hub"):
            service.withdraw("1000")

        assert "Rejected withdrawal (InsufficientFunds)" in caplog.text


class TestCustomerOperations:
    """Customer operations through the service."""

    def test_scenario(self, service: LedgerService, customer: Account) -> None:
        assert service.withdraw("150.00").error_kind == "InsufficientFunds"

        result = service.withdraw("40.00")
        assert result.ok
        assert result.balances.balance == Decimal("60.00")

        assert service.apply_loan("500.00").ok
        result = service.repay_loan("600.00")
        assert result.ok
        assert result.balances.loan_balance == Decimal("0.00")
        assert result.balances.balance == Decimal("60.00")

        assert service.invest("30.00").balances.investment_balance == Decimal("30.00")
        result = service.divest_investment("30.00")
        assert result.balances.balance == Decimal("60.00")
        assert result.balances.investment_balance == Decimal("0.00")

    def test_deposit_invalid_amount(self, service: LedgerService, customer: Account) -> None:
        assert service.deposit("-5").error_kind == "InvalidAmount"
        assert service.deposit("abc").error_kind == "InvalidAmount"

    def test_out_of_range_amount(self, service: LedgerService, customer: Account) -> None:
        assert service.deposit("1e30").error_kind == "InvalidAmount"
        assert service.deposit("99999999999999999999999899.99").ok
        assert service.deposit("0.01").error_kind == "InvalidAmount"
        assert customer.balance == Decimal("99999999999999999999999999.99")
        assert len(service.store.transactions) == 2

    def test_pin_reconfirmation(self, service: LedgerService, customer: Account) -> None:
        assert service.deposit("5", pin="0000").error_kind == "InvalidPIN"
        assert service.deposit("5", pin="1234").ok

    def test_transfer(self, service: LedgerService, make_request, customer: Account) -> None:
        other = service.register(make_request(holder_name="John Roe")).value
        service.login(customer.account_number, "1234")

        result = service.transfer(other.account_number, "30.00")

        assert result.ok
        assert result.balances.balance == Decimal("70.00")
        assert other.balance == Decimal("30.00")
        assert service.transfer(customer.account_number, "1").error_kind == "SameAccountTransfer"
        assert service.transfer(1, "1").error_kind == "AccountNotFound"

    def test_change_pin(self, service: LedgerService, customer: Account) -> None:
        assert service.change_pin("1234", "5678", "5679").error_kind == "PINMismatch"
        assert service.change_pin("1111", "5678", "5678").error_kind == "InvalidPIN"
        assert service.change_pin("1234", "56", "56").error_kind == "PINFormatInvalid"
        assert service.change_pin("1234", "5678", "5678").ok

        service.logout()
        assert service.login(customer.account_number, "1234").error_kind == "InvalidPIN"
        assert service.login(customer.account_number, "5678").ok

    def test_account_details(self, service: LedgerService, customer: Account) -> None:
        result = service.account_details()

        assert result.value is customer

    def test_history_own(self, service: LedgerService, customer: Account) -> None:
        service.deposit("5.00")

        result = service.history()

        assert [tx.description for tx in result.value] == ["Initial Deposit", "Deposit"]
        assert service.history(customer.account_number).ok

    def test_history_of_other_account(self, service: LedgerService, make_request, customer: Account) -> None:
        other = service.register(make_request(holder_name="John Roe")).value
        service.login(customer.account_number, "1234")

        assert service.history(other.account_number).error_kind == "NotAuthorized"

    def test_frozen_account(self, service: LedgerService, customer: Account) -> None:
        customer.status = AccountStatus.FROZEN

        assert service.deposit("5").error_kind == "AccountNotActive"
        assert service.account_details().ok


class TestAdminOperations:
    """Administrative operations through the service."""

    def test_customer_is_not_admin(self, service: LedgerService, customer: Account) -> None:
        assert service.list_accounts().error_kind == "NotAuthorized"
        assert service.totals().error_kind == "NotAuthorized"
        assert service.find_account(customer.account_number).error_kind == "NotAuthorized"
        assert service.set_status(customer.account_number, "FROZEN").error_kind == "NotAuthorized"

    def test_admin_views(self, service: LedgerService, make_request, customer: Account) -> None:
        service.register(make_request(holder_name="John Roe", initial_deposit="50.00"))
        assert service.login_admin("admin").ok

        accounts = service.list_accounts().value
        assert [a.holder_name for a in accounts] == ["Jane Doe", "John Roe"]
        assert service.find_account(customer.account_number).value is customer
        assert service.find_account(1).error_kind == "AccountNotFound"
        assert service.totals().value == {
            "balance": Decimal("150.00"),
            "loans": Decimal("0.00"),
            "investments": Decimal("0.00"),
        }

    def test_set_status(self, service: LedgerService, customer: Account) -> None:
        service.login_admin("admin")

        result = service.set_status(customer.account_number, "frozen")

        assert result.ok
        assert customer.status == AccountStatus.FROZEN
        assert service.set_status(customer.account_number, "dormant").error_kind == "InvalidStatus"
        assert service.set_status(customer.account_number, AccountStatus.ACTIVE).ok
        assert customer.is_active

    def test_admin_history(self, service: LedgerService, customer: Account) -> None:
        service.login_admin("admin")

        assert len(service.history(customer.account_number).value) == 1
        assert service.history().error_kind == "AccountNotFound"
        assert service.history(1).error_kind == "AccountNotFound"


class TestRegistration:
    """Registration through the service."""

    def test_register_failures(self, service: LedgerService, make_request) -> None:
        assert service.register(make_request(birth_year=2010)).error_kind == "Underage"
        assert service.register(make_request(birth_day=31, birth_month=2)).error_kind == "InvalidDate"
        assert service.register(make_request(confirm_pin="9999")).error_kind == "PINMismatch"
        assert service.register(make_request(account_type="gold")).error_kind == "InvalidAccountType"
        assert service.register(make_request(initial_deposit="1e30")).error_kind == "InvalidAmount"
        assert len(service.store) == 0

    def test_account_type_names(self, service: LedgerService, make_request) -> None:
        result = service.register(make_request(account_type="savings"))

        assert result.ok
        assert result.value.account_type == AccountType.SAVINGS
        assert service.register(make_request(account_type=" Investment ")).value.account_type == (
            AccountType.INVESTMENT
        )

    def test_capacity(self, config: FinanceHubConfig, make_request) -> None:
        config.ledger = LedgerConfig(max_accounts=1)
        service = LedgerService(config=config)

        assert service.register(make_request()).ok
        assert service.register(make_request()).error_kind == "CapacityExceeded"


class TestPersistence:
    """Opening, saving and closing the service."""

    def test_open_missing_file(self, config: FinanceHubConfig) -> None:
        service = LedgerService.open(config)

        assert len(service.store) == 0

    def test_close_saves_and_reopen(self, service: LedgerService, config: FinanceHubConfig, customer: Account) -> None:
        service.deposit("11.11")

        service.close()

        assert service.session.current is None
        reopened = LedgerService.open(config)
        restored = reopened.store.get_account(customer.account_number)
        assert restored.balance == Decimal("111.11")
        assert len(reopened.store.transactions) == 2
        assert reopened.login(customer.account_number, "1234").ok
