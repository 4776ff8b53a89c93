"""Custom exception hierarchy for finance-hub.

Every class carries a ``kind`` name. The service layer reports rejected
operations by that name instead of letting the exception escape.
"""


class FinanceHubError(Exception):
    """Base exception for all finance-hub errors."""

    kind = "FinanceHubError"


class AccountNotFoundError(FinanceHubError):
    """Raised when a referenced account does not exist."""

    kind = "AccountNotFound"


class DuplicateAccountError(FinanceHubError):
    """Raised when an account number is already taken."""

    kind = "DuplicateAccount"


class InvalidPINError(FinanceHubError):
    """Raised when a supplied PIN or admin credential does not match."""

    kind = "InvalidPIN"


class NotAuthorizedError(FinanceHubError):
    """Raised when the current session may not perform the operation."""

    kind = "NotAuthorized"


class AccountNotActiveError(FinanceHubError):
    """Raised when the acting account is closed or frozen."""

    kind = "AccountNotActive"


class DestinationInactiveError(FinanceHubError):
    """Raised when a transfer targets an account that is not active."""

    kind = "DestinationInactive"


class InsufficientFundsError(FinanceHubError):
    """Raised when a debit exceeds the available balance."""

    kind = "InsufficientFunds"


class NoOutstandingLoanError(InsufficientFundsError):
    """Raised when repaying an account that owes nothing."""

    kind = "NoOutstandingLoan"


class NoInvestmentError(InsufficientFundsError):
    """Raised when divesting an account with nothing invested."""

    kind = "NoInvestment"


class InvalidAmountError(FinanceHubError):
    """Raised when an amount is not a positive money value."""

    kind = "InvalidAmount"


class SameAccountTransferError(InvalidAmountError):
    """Raised when source and destination of a transfer are the same."""

    kind = "SameAccountTransfer"


class CapacityExceededError(FinanceHubError):
    """Raised when the account store (or a rejecting transaction log) is full."""

    kind = "CapacityExceeded"


class UnderageError(FinanceHubError):
    """Raised when an applicant is younger than the minimum age."""

    kind = "Underage"


class InvalidDateError(FinanceHubError):
    """Raised when a birth date is not a real past calendar date."""

    kind = "InvalidDate"


class PINMismatchError(FinanceHubError):
    """Raised when a PIN and its confirmation differ."""

    kind = "PINMismatch"


class PINFormatInvalidError(FinanceHubError):
    """Raised when a PIN is not exactly four digits."""

    kind = "PINFormatInvalid"


class InvalidStatusError(FinanceHubError):
    """Raised when an account status name is not recognised."""

    kind = "InvalidStatus"


class InvalidAccountTypeError(FinanceHubError):
    """Raised when an account type name is not recognised."""

    kind = "InvalidAccountType"


class CorruptLedgerError(FinanceHubError):
    """Raised when a ledger file cannot be decoded."""

    kind = "CorruptLedger"


class ConfigurationError(FinanceHubError):
    """Raised when configuration is invalid or missing."""

    kind = "Configuration"
