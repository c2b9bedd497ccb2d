"""Domain service: tax-inclusive pricing.

Tax policy lives outside the product classes.  Each operation over the
closed set of variants is a ``ProductVisitor``; adding a new operation means
writing a new visitor, never touching the products themselves.

Standard and Natural products pay the general rate, Digital products the
digital rate, and the Null product is always free.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Generic, TypeVar

from shop.domain.exceptions import ValidationError
from shop.domain.model.value_objects import Money

if TYPE_CHECKING:
    from shop.domain.model.digital_product import DigitalProduct
    from shop.domain.model.natural_product import NaturalProduct
    from shop.domain.model.null_product import NullProduct
    from shop.domain.model.standard_product import StandardProduct

T = TypeVar("T")

DEFAULT_GENERAL_TAX_RATE = 21
DEFAULT_DIGITAL_TAX_RATE = 10


class ProductVisitor(ABC, Generic[T]):
    """One method per variant; products call back the matching one from ``accept``."""

    @abstractmethod
    def visit_standard(self, product: StandardProduct) -> T: ...

    @abstractmethod
    def visit_digital(self, product: DigitalProduct) -> T: ...

    @abstractmethod
    def visit_natural(self, product: NaturalProduct) -> T: ...

    @abstractmethod
    def visit_null(self, product: NullProduct) -> T: ...


def _validate_rate(rate: int | float | Decimal, name: str) -> Decimal:
    if isinstance(rate, bool) or not isinstance(rate, (int, float, Decimal)):
        raise ValidationError(f"{name} must be a number, got {rate!r}")
    value = Decimal(str(rate))
    if not value.is_finite() or value < 0:
        raise ValidationError(f"{name} cannot be negative, got {rate}")
    return value


class TaxRateVisitor(ProductVisitor[Decimal]):
    """Answers which tax percentage applies to a product."""

    def __init__(
        self,
        general_tax_rate: int | float | Decimal = DEFAULT_GENERAL_TAX_RATE,
        digital_tax_rate: int | float | Decimal = DEFAULT_DIGITAL_TAX_RATE,
    ) -> None:
        self._general = _validate_rate(general_tax_rate, "General tax rate")
        self._digital = _validate_rate(digital_tax_rate, "Digital tax rate")

    @property
    def general_tax_rate(self) -> Decimal:
        return self._general

    @property
    def digital_tax_rate(self) -> Decimal:
        return self._digital

    def visit_standard(self, product: StandardProduct) -> Decimal:
        return self._general

    def visit_digital(self, product: DigitalProduct) -> Decimal:
        return self._digital

    def visit_natural(self, product: NaturalProduct) -> Decimal:
        # Natural goods have no rate of their own yet.
        return self._general

    def visit_null(self, product: NullProduct) -> Decimal:
        return Decimal("0")


class TaxedPriceVisitor(ProductVisitor[Money]):
    """Computes the final, tax-inclusive price of a product.

    The discounted price comes from the product's own
    ``compute_final_price()``; the visitor only multiplies it by
    ``1 + rate / 100``.  No rounding is applied, use ``Money.rounded()``
    when a settled amount is needed.
    """

    def __init__(
        self,
        general_tax_rate: int | float | Decimal = DEFAULT_GENERAL_TAX_RATE,
        digital_tax_rate: int | float | Decimal = DEFAULT_DIGITAL_TAX_RATE,
    ) -> None:
        self._rates = TaxRateVisitor(general_tax_rate, digital_tax_rate)

    @property
    def general_tax_rate(self) -> Decimal:
        return self._rates.general_tax_rate

    @property
    def digital_tax_rate(self) -> Decimal:
        return self._rates.digital_tax_rate

    def visit_standard(self, product: StandardProduct) -> Money:
        return self._with_tax(product.compute_final_price(), self._rates.visit_standard(product))

    def visit_digital(self, product: DigitalProduct) -> Money:
        return self._with_tax(product.compute_final_price(), self._rates.visit_digital(product))

    def visit_natural(self, product: NaturalProduct) -> Money:
        return self._with_tax(product.compute_final_price(), self._rates.visit_natural(product))

    def visit_null(self, product: NullProduct) -> Money:
        return Money.zero(product.price.currency)

    @staticmethod
    def _with_tax(price: Money, rate: Decimal) -> Money:
        return price.multiply(Decimal("1") + rate / Decimal("100"))
