"""Money handling helpers.

All monetary values are ``Decimal`` with two fractional digits.
"""

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Union

from finance_hub.exceptions import InvalidAmountError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

MoneyLike = Union[Decimal, int, float, str]


def as_money(value: MoneyLike) -> Decimal:
    """Normalize any numeric input to a ``Decimal`` with 2 fractional digits.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.10")``
    rather than its binary expansion.

    Raises
    ------
    InvalidAmountError
        If the value is not a finite number, or has more digits than the
        decimal context can hold to the cent.
    """
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmountError(f"Not a money amount: {value!r}") from exc
    if not amount.is_finite():
        raise InvalidAmountError(f"Not a money amount: {value!r}")
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_EVEN)
    except InvalidOperation as exc:
        raise InvalidAmountError(f"Amount out of range: {value!r}") from exc


def validate_positive(value: MoneyLike) -> Decimal:
    """Return the normalized amount, rejecting zero and negatives."""
    amount = as_money(value)
    if amount <= ZERO:
        raise InvalidAmountError(f"Amount must be positive, got {amount}")
    return amount


def format_money(value: Decimal) -> str:
    """Render with exactly two decimals, as written to the ledger file."""
    return f"{as_money(value):.2f}"
