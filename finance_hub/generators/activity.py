"""Random account activity driven through the real operations.

Useful for demo ledgers and for checking that invariants survive long,
mixed operation sequences.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence

from finance_hub.auth import AuthorizedAccount
from finance_hub.exceptions import FinanceHubError
from finance_hub.generators.base import BaseGenerator
from finance_hub.operations import AccountOperations

OPERATIONS = (
    "deposit",
    "withdraw",
    "transfer",
    "apply_loan",
    "repay_loan",
    "invest",
    "divest_investment",
)


@dataclass
class ActivityReport:
    """Counts of attempted, successful and rejected operations."""

    attempted: int = 0
    succeeded: int = 0
    by_operation: dict[str, int] = field(default_factory=dict)
    failed_by_kind: dict[str, int] = field(default_factory=dict)

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded


class ActivityGenerator(BaseGenerator):
    """Apply random operations to a set of authorized accounts.

    Rejections are expected (overdrafts, inactive accounts, ...) and are
    tallied by error kind rather than raised.

    Parameters
    ----------
    operations : AccountOperations
        Engine the operations go through.
    seed : int | None
        Random seed for reproducibility.
    max_amount : Decimal
        Upper bound of generated amounts.
    """

    def __init__(
        self,
        operations: AccountOperations,
        seed: int | None = None,
        max_amount: Decimal = Decimal("500.00"),
    ) -> None:
        super().__init__(seed)
        self.operations = operations
        self._max_cents = int(max_amount * 100)

    def _amount(self) -> Decimal:
        return Decimal(self.rng.randint(1, self._max_cents)).scaleb(-2)

    def step(self, handles: Sequence[AuthorizedAccount], report: ActivityReport) -> None:
        """Attempt one random operation and tally the outcome."""
        handle = self.rng.choice(handles)
        op = self.rng.choice(OPERATIONS)
        report.attempted += 1
        report.by_operation[op] = report.by_operation.get(op, 0) + 1
        try:
            if op == "transfer":
                target = self.rng.choice(handles)
                self.operations.transfer(handle, target.account_number, self._amount())
            else:
                getattr(self.operations, op)(handle, self._amount())
        except FinanceHubError as exc:
            report.failed_by_kind[exc.kind] = report.failed_by_kind.get(exc.kind, 0) + 1
            return
        report.succeeded += 1

    def run(self, handles: Sequence[AuthorizedAccount], steps: int) -> ActivityReport:
        """Attempt ``steps`` random operations."""
        report = ActivityReport()
        if not handles:
            return report
        for _ in range(steps):
            self.step(handles, report)
        return report
