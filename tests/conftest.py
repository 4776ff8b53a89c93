"""Pytest configuration and fixtures."""

from datetime import date, datetime
from typing import Callable

import pytest

from finance_hub.auth import AuthorizedAccount
from finance_hub.config import FinanceHubConfig, LedgerConfig, StorageConfig
from finance_hub.models import Account
from finance_hub.operations import AccountOperations, RegistrationRequest
from finance_hub.service import LedgerService
from finance_hub.store import LedgerStore

FIXED_NOW = datetime(2026, 10, 19, 14, 30)
FIXED_TODAY = date(2026, 10, 19)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def config(tmp_path, seed: int) -> FinanceHubConfig:
    """Default configuration writing to a temporary ledger file."""
    return FinanceHubConfig(
        ledger=LedgerConfig(),
        storage=StorageConfig(data_file=tmp_path / "bank_data.txt"),
        seed=seed,
    )


@pytest.fixture
def service(config: FinanceHubConfig) -> LedgerService:
    """Service with a frozen clock and calendar."""
    return LedgerService(config=config, clock=lambda: FIXED_NOW, today=lambda: FIXED_TODAY)


@pytest.fixture
def store(service: LedgerService) -> LedgerStore:
    return service.store


@pytest.fixture
def ops(service: LedgerService) -> AccountOperations:
    return service.operations


@pytest.fixture
def make_request() -> Callable[..., RegistrationRequest]:
    """Factory for registration requests with sensible defaults."""

    def _make(**overrides) -> RegistrationRequest:
        fields = {
            "holder_name": "Jane Doe",
            "birth_day": 15,
            "birth_month": 6,
            "birth_year": 1990,
            "address": "1 Main Street, Springfield",
            "phone": "5550100",
            "pin": "1234",
            "confirm_pin": "1234",
            "initial_deposit": "0",
        }
        fields.update(overrides)
        return RegistrationRequest(**fields)

    return _make


@pytest.fixture
def open_account(service: LedgerService, make_request) -> Callable[..., tuple[Account, AuthorizedAccount]]:
    """Register an account and return it with an authorized handle."""

    def _open(deposit: str = "0", pin: str = "1234", **overrides) -> tuple[Account, AuthorizedAccount]:
        account = service.registration.register(
            make_request(initial_deposit=deposit, pin=pin, confirm_pin=pin, **overrides)
        )
        handle = service.session.authenticate(account.account_number, pin)
        return account, handle

    return _open
