"""Account operations and registration."""

from finance_hub.operations.accounts import AccountOperations
from finance_hub.operations.registration import (
    Registration,
    RegistrationRequest,
    calculate_age,
    parse_account_type,
    validate_birth_date,
)

__all__ = [
    "AccountOperations",
    "Registration",
    "RegistrationRequest",
    "calculate_age",
    "parse_account_type",
    "validate_birth_date",
]
