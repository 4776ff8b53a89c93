"""PIN format rules and the verification seam."""

import hmac
from typing import Protocol

from finance_hub.exceptions import PINFormatInvalidError, PINMismatchError


class PinVerifier(Protocol):
    """Compares a stored PIN against a supplied one."""

    def verify(self, stored: str, supplied: str) -> bool:
        ...


class PlaintextPinVerifier:
    """Exact match of the stored plaintext PIN, in constant time."""

    def verify(self, stored: str, supplied: str) -> bool:
        return hmac.compare_digest(stored.encode("utf-8"), str(supplied).encode("utf-8"))


def validate_pin_format(pin: str, length: int = 4) -> str:
    """Return ``pin`` if it is exactly ``length`` ASCII digits."""
    if not isinstance(pin, str) or len(pin) != length or not (pin.isascii() and pin.isdigit()):
        raise PINFormatInvalidError(f"PIN must be exactly {length} digits")
    return pin


def validate_new_pin(pin: str, confirm: str | None, length: int = 4) -> str:
    """Check format, then that the confirmation (when given) matches."""
    validate_pin_format(pin, length)
    if confirm is not None and confirm != pin:
        raise PINMismatchError("PINs do not match")
    return pin
