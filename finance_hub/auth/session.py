"""Session handling: who is logged in and with what authority."""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass, field

from finance_hub.auth.pin import PinVerifier, PlaintextPinVerifier
from finance_hub.exceptions import AccountNotFoundError, InvalidPINError, NotAuthorizedError
from finance_hub.store import LedgerStore

logger = logging.getLogger(__name__)

_ISSUER = object()


@dataclass(frozen=True)
class AuthorizedAccount:
    """Handle to an account whose PIN has been verified.

    Only ``Session`` creates these; constructing one directly raises
    ``NotAuthorizedError``.
    """

    account_number: int
    _issuer: object = field(repr=False, compare=False)

    def __post_init__(self) -> None:
        if self._issuer is not _ISSUER:
            raise NotAuthorizedError("Account handles are issued by Session.authenticate")


@dataclass(frozen=True)
class AdminHandle:
    """Proof that the administrator credential was presented."""

    _issuer: object = field(repr=False, compare=False)

    def __post_init__(self) -> None:
        if self._issuer is not _ISSUER:
            raise NotAuthorizedError("Admin handles are issued by Session.login_admin")


class Session:
    """Single-user session. At most one account or the administrator is logged in.

    Parameters
    ----------
    store : LedgerStore
        Store used to resolve account numbers.
    admin_pin : str
        Static administrator credential, unrelated to any account record.
    verifier : PinVerifier | None
        PIN comparison strategy (default: ``PlaintextPinVerifier``).
    """

    def __init__(
        self,
        store: LedgerStore,
        admin_pin: str = "admin",
        verifier: PinVerifier | None = None,
    ) -> None:
        self.store = store
        self.verifier: PinVerifier = verifier or PlaintextPinVerifier()
        self._admin_pin = admin_pin
        self.current: AuthorizedAccount | AdminHandle | None = None

    def authenticate(self, account_number: int, pin: str) -> AuthorizedAccount:
        """Verify the PIN and make the account the current session."""
        account = self.store.find_by_account_number(account_number)
        if account is None:
            raise AccountNotFoundError(f"Account {account_number} not found")
        if not self.verifier.verify(account.pin, pin):
            raise InvalidPINError("Invalid account number or PIN")
        handle = AuthorizedAccount(account_number=account_number, _issuer=_ISSUER)
        self.current = handle
        logger.info("Account %d logged in", account_number)
        return handle

    def login_admin(self, secret: str) -> AdminHandle:
        """Check the administrator credential and make it the current session."""
        if not hmac.compare_digest(self._admin_pin.encode("utf-8"), str(secret).encode("utf-8")):
            raise InvalidPINError("Invalid administrator PIN")
        handle = AdminHandle(_issuer=_ISSUER)
        self.current = handle
        logger.info("Administrator logged in")
        return handle

    def logout(self) -> None:
        if self.current is not None:
            logger.info("Session closed")
        self.current = None

    def require_account(self) -> AuthorizedAccount:
        """Return the logged-in account handle or raise ``NotAuthorizedError``."""
        if not isinstance(self.current, AuthorizedAccount):
            raise NotAuthorizedError("You must be logged in to an account")
        return self.current

    def require_admin(self) -> AdminHandle:
        """Return the admin handle or raise ``NotAuthorizedError``."""
        if not isinstance(self.current, AdminHandle):
            raise NotAuthorizedError("Administrator login required")
        return self.current

    @property
    def is_admin(self) -> bool:
        return isinstance(self.current, AdminHandle)
