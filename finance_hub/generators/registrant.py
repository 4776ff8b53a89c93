"""Registrant generator: fake applicants for seeding a demo ledger."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Iterator

from finance_hub.generators.base import BaseGenerator
from finance_hub.models import AccountType
from finance_hub.operations import RegistrationRequest


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:  # 29 February
        return day.replace(year=day.year - years, day=28)


class RegistrantGenerator(BaseGenerator):
    """Generate valid ``RegistrationRequest`` objects.

    Every applicant is an adult, addresses fit on one line, and phones and
    PINs are digit strings, so each request passes registration.
    """

    ACCOUNT_TYPES = list(AccountType)
    ACCOUNT_TYPE_WEIGHTS = [0.50, 0.35, 0.15]

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        min_age: int = 18,
        max_age: int = 90,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(seed, locale)
        self.min_age = min_age
        self.max_age = max_age
        self._today = today

    def generate(self) -> RegistrationRequest:
        """Generate a single applicant.

        Returns
        -------
        RegistrationRequest
            Request with matching PIN and confirmation.
        """
        today = self._today()
        born = self.fake.date_between_dates(
            date_start=_years_before(today, self.max_age),
            date_end=_years_before(today, self.min_age) - timedelta(days=1),
        )
        pin = self.fake.numerify("####")
        account_type = self.rng.choices(
            self.ACCOUNT_TYPES, weights=self.ACCOUNT_TYPE_WEIGHTS, k=1
        )[0]
        cents = self.rng.randint(0, 500_000)

        return RegistrationRequest(
            holder_name=self.fake.name(),
            birth_day=born.day,
            birth_month=born.month,
            birth_year=born.year,
            address=self.fake.address().replace("\n", ", "),
            phone=self.fake.numerify("##########"),
            pin=pin,
            confirm_pin=pin,
            account_type=account_type,
            initial_deposit=Decimal(cents).scaleb(-2),
        )

    def generate_batch(self, count: int) -> Iterator[RegistrationRequest]:
        """Generate ``count`` applicants."""
        for _ in range(count):
            yield self.generate()
