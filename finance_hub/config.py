"""Configuration management for finance-hub."""

from dataclasses import dataclass, field
from pathlib import Path

from finance_hub.exceptions import ConfigurationError

EVICTION_POLICIES = ("drop_oldest", "reject")


@dataclass
class LedgerConfig:
    """Capacity and business rules of the ledger."""

    max_accounts: int = 100
    max_transactions: int = 1000  # 10 per account
    min_age: int = 18
    pin_length: int = 4
    account_number_min: int = 100000
    account_number_max: int = 999999
    max_number_attempts: int = 1000
    eviction: str = "drop_oldest"


@dataclass
class StorageConfig:
    """Flat-file persistence configuration."""

    data_file: Path = field(default_factory=lambda: Path("bank_data.txt"))
    encoding: str = "utf-8"


@dataclass
class AuthConfig:
    """Administrator credential, checked apart from any account."""

    admin_pin: str = "admin"


@dataclass
class FinanceHubConfig:
    """Main configuration for finance-hub."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> "FinanceHubConfig":
        """Check invariants and return self.

        Raises
        ------
        ConfigurationError
            If a capacity is not positive, the account number range is
            empty or the eviction policy is unknown.
        """
        ledger = self.ledger
        if ledger.max_accounts <= 0:
            raise ConfigurationError("max_accounts must be positive")
        if ledger.max_transactions <= 0:
            raise ConfigurationError("max_transactions must be positive")
        if ledger.pin_length <= 0:
            raise ConfigurationError("pin_length must be positive")
        if ledger.account_number_min > ledger.account_number_max:
            raise ConfigurationError(
                f"Empty account number range {ledger.account_number_min}-{ledger.account_number_max}"
            )
        if ledger.eviction not in EVICTION_POLICIES:
            raise ConfigurationError(f"Unknown eviction policy: {ledger.eviction}")
        if not self.auth.admin_pin:
            raise ConfigurationError("admin_pin must not be empty")
        return self

    @classmethod
    def from_env(cls) -> "FinanceHubConfig":
        """Create config from environment variables."""
        import os

        max_accounts = int(os.getenv("FINANCE_HUB_MAX_ACCOUNTS", "100"))
        ledger = LedgerConfig(
            max_accounts=max_accounts,
            max_transactions=int(
                os.getenv("FINANCE_HUB_MAX_TRANSACTIONS", str(max_accounts * 10))
            ),
            eviction=os.getenv("FINANCE_HUB_EVICTION", "drop_oldest"),
        )

        storage = StorageConfig(
            data_file=Path(os.getenv("FINANCE_HUB_DATA_FILE", "bank_data.txt")),
        )

        auth = AuthConfig(
            admin_pin=os.getenv("FINANCE_HUB_ADMIN_PIN", "admin"),
        )

        return cls(
            ledger=ledger,
            storage=storage,
            auth=auth,
            seed=int(os.getenv("SEED")) if os.getenv("SEED") else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        ).validate()
