"""Enumeration types for ledger entities."""

from enum import Enum


class AccountType(str, Enum):
    SAVINGS = "SAVINGS"
    CURRENT = "CURRENT"
    INVESTMENT = "INVESTMENT"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"
    FROZEN = "FROZEN"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Role(str, Enum):
    ADMINISTRATOR = "ADMINISTRATOR"
    CUSTOMER = "CUSTOMER"
