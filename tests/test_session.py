"""Tests for PIN checks and the session."""

import pytest

from finance_hub.auth import (
    AdminHandle,
    AuthorizedAccount,
    PlaintextPinVerifier,
    Session,
    validate_new_pin,
    validate_pin_format,
)
from finance_hub.exceptions import (
    AccountNotFoundError,
    InvalidPINError,
    NotAuthorizedError,
    PINFormatInvalidError,
    PINMismatchError,
)
from finance_hub.models import AccountStatus


class TestPinRules:
    """Tests for PIN format and verification."""

    def test_valid_pin(self) -> None:
        assert validate_pin_format("0042") == "0042"
        assert validate_pin_format("123456", length=6) == "123456"

    @pytest.mark.parametrize("pin", ["", "123", "12345", "12a4", "١٢٣٤", None])
    def test_invalid_pin(self, pin) -> None:
        with pytest.raises(PINFormatInvalidError):
            validate_pin_format(pin)

    def test_new_pin_confirmation(self) -> None:
        assert validate_new_pin("1234", "1234") == "1234"
        assert validate_new_pin("1234", None) == "1234"
        with pytest.raises(PINMismatchError):
            validate_new_pin("1234", "4321")

    def test_format_checked_before_confirmation(self) -> None:
        with pytest.raises(PINFormatInvalidError):
            validate_new_pin("12", "34")

    def test_plaintext_verifier(self) -> None:
        verifier = PlaintextPinVerifier()

        assert verifier.verify("1234", "1234")
        assert not verifier.verify("1234", "1235")
        assert not verifier.verify("1234", "")


class TestHandles:
    """Handles can only be issued by a session."""

    def test_forged_account_handle(self) -> None:
        with pytest.raises(NotAuthorizedError):
            AuthorizedAccount(account_number=123456, _issuer=object())

    def test_forged_admin_handle(self) -> None:
        with pytest.raises(NotAuthorizedError):
            AdminHandle(_issuer=None)


class TestSession:
    """Tests for Session."""

    def test_authenticate(self, store, open_account) -> None:
        account, _ = open_account(pin="4321")
        session = Session(store)

        handle = session.authenticate(account.account_number, "4321")

        assert handle.account_number == account.account_number
        assert session.current == handle
        assert session.require_account() == handle
        assert not session.is_admin

    def test_unknown_account(self, store) -> None:
        session = Session(store)

        with pytest.raises(AccountNotFoundError):
            session.authenticate(111111, "1234")
        assert session.current is None

    def test_wrong_pin(self, store, open_account) -> None:
        account, _ = open_account()
        session = Session(store)

        with pytest.raises(InvalidPINError):
            session.authenticate(account.account_number, "9999")
        assert session.current is None

    def test_frozen_account_can_log_in(self, store, open_account) -> None:
        account, _ = open_account()
        account.status = AccountStatus.FROZEN
        session = Session(store)

        assert session.authenticate(account.account_number, "1234")

    def test_admin_login(self, store) -> None:
        session = Session(store, admin_pin="letmein")

        with pytest.raises(InvalidPINError):
            session.login_admin("admin")
        admin = session.login_admin("letmein")

        assert isinstance(admin, AdminHandle)
        assert session.is_admin
        assert session.require_admin() is admin
        with pytest.raises(NotAuthorizedError):
            session.require_account()

    def test_logout(self, store, open_account) -> None:
        account, _ = open_account()
        session = Session(store)
        session.authenticate(account.account_number, "1234")

        session.logout()

        assert session.current is None
        with pytest.raises(NotAuthorizedError):
            session.require_account()
        with pytest.raises(NotAuthorizedError):
            session.require_admin()

    def test_login_replaces_previous(self, store, open_account) -> None:
        first, _ = open_account()
        second, _ = open_account(holder_name="John Roe")
        session = Session(store)
        session.login_admin("admin")

        session.authenticate(first.account_number, "1234")
        session.authenticate(second.account_number, "1234")

        assert session.require_account().account_number == second.account_number
        assert not session.is_admin
