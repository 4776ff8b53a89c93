"""PIN verification and session management."""

from finance_hub.auth.pin import (
    PinVerifier,
    PlaintextPinVerifier,
    validate_new_pin,
    validate_pin_format,
)
from finance_hub.auth.session import AdminHandle, AuthorizedAccount, Session

__all__ = [
    "AdminHandle",
    "AuthorizedAccount",
    "PinVerifier",
    "PlaintextPinVerifier",
    "Session",
    "validate_new_pin",
    "validate_pin_format",
]
