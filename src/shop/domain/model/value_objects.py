"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from shop.domain.exceptions import (
    CurrencyMismatch,
    EmptyIdentifier,
    InvalidAmount,
    InvalidCurrency,
    InvalidDiscount,
)

DEFAULT_CURRENCY = "USD"

_HUNDRED = Decimal("100")


def _to_decimal(value: str | float | int | Decimal) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmount(f"Invalid money amount: {value!r}")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmount(f"Invalid money amount: {value!r}") from exc


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Arithmetic is exact; nothing
    is rounded until ``rounded()`` or ``str()`` is asked for.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise InvalidAmount(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise InvalidAmount(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise InvalidAmount(
                f"Money amount cannot be negative, got {self.amount}"
            )
        if not isinstance(self.currency, str) or len(self.currency.strip()) != 3:
            raise InvalidCurrency(
                f"Currency must be a 3-letter code, got {self.currency!r}"
            )
        object.__setattr__(self, "currency", self.currency.strip().upper())

    # --- Arithmetic -----------------------------------------------------------

    def add(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < Decimal("0"):
            raise InvalidAmount("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def multiply(self, factor: str | float | int | Decimal) -> Money:
        return Money(self.amount * _to_decimal(factor), self.currency)

    def apply_discount(self, percentage: str | float | int | Decimal) -> Money:
        """Return the amount reduced by *percentage* percent (0-100)."""
        pct = _to_decimal(percentage)
        if not pct.is_finite() or pct < 0 or pct > _HUNDRED:
            raise InvalidDiscount(
                f"Discount percentage must be between 0 and 100, got {percentage}"
            )
        return self.multiply(Decimal("1") - pct / _HUNDRED)

    def rounded(self, places: int = 2) -> Money:
        exponent = Decimal(1).scaleb(-places)
        return Money(self.amount.quantize(exponent, rounding=ROUND_HALF_UP), self.currency)

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply

    # --- Comparison -----------------------------------------------------------

    def equals(self, other: Money) -> bool:
        return self == other

    def greater_than(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def less_than(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __lt__(self, other: Money) -> bool:
        return self.less_than(other)

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        return self.greater_than(other)

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.rounded().amount:.2f} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatch(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(
        amount: str | float | int | Decimal,
        currency: str = DEFAULT_CURRENCY,
    ) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        return Money(_to_decimal(amount), currency)

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)


@dataclass(frozen=True)
class ProductId:
    """Opaque product identifier, compared by its string value."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise EmptyIdentifier("Product ID cannot be empty")
        object.__setattr__(self, "value", self.value.strip())

    @staticmethod
    def create() -> ProductId:
        return ProductId(str(uuid.uuid4()))

    @staticmethod
    def from_string(value: str) -> ProductId:
        return ProductId(value)

    def __str__(self) -> str:
        return self.value
