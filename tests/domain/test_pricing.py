"""Unit tests for the tax visitors."""

from decimal import Decimal

import pytest

from shop.domain.exceptions import ValidationError
from shop.domain.model.null_product import NullProduct
from shop.domain.model.value_objects import Money
from shop.domain.service.pricing import ProductVisitor, TaxedPriceVisitor, TaxRateVisitor
from tests.fakes import make_digital, make_natural, make_standard


class TestTaxedPriceVisitor:

    def test_digital_uses_digital_rate(self):
        price = make_digital(price="19.99").accept(TaxedPriceVisitor(21, 10))
        assert price == Money.of("21.989")
        assert str(price) == "21.99 USD"

    def test_standard_uses_general_rate(self):
        price = make_standard(price="100.00").accept(TaxedPriceVisitor(21, 10))
        assert price == Money.of("121.00")

    def test_natural_uses_general_rate(self):
        price = make_natural(price="10.00").accept(TaxedPriceVisitor(21, 10))
        assert price == Money.of("12.10")

    def test_discount_applied_before_tax(self):
        product = make_standard(price="100.00", discount=50)
        assert product.accept(TaxedPriceVisitor(21, 10)) == Money.of("60.50")

    def test_null_product_is_free(self):
        assert NullProduct().accept(TaxedPriceVisitor()) == Money.zero()

    def test_zero_rate_returns_discounted_price(self):
        product = make_standard(price="10.00")
        assert product.accept(TaxedPriceVisitor(0, 0)) == Money.of("10.00")

    def test_default_rates(self):
        visitor = TaxedPriceVisitor()
        assert visitor.general_tax_rate == Decimal("21")
        assert visitor.digital_tax_rate == Decimal("10")

    @pytest.mark.parametrize("rates", [(-1, 10), (21, -0.5)])
    def test_negative_rate_rejected(self, rates):
        with pytest.raises(ValidationError, match="cannot be negative"):
            TaxedPriceVisitor(*rates)

    def test_non_numeric_rate_rejected(self):
        with pytest.raises(ValidationError, match="must be a number"):
            TaxedPriceVisitor("21", 10)


class TestTaxRateVisitor:

    def test_rate_per_variant(self):
        visitor = TaxRateVisitor(21, 10)
        assert make_standard().accept(visitor) == Decimal("21")
        assert make_digital().accept(visitor) == Decimal("10")
        assert make_natural().accept(visitor) == Decimal("21")
        assert NullProduct().accept(visitor) == Decimal("0")


class TestCustomVisitor:

    def test_new_operation_without_touching_products(self):
        class VariantLabel(ProductVisitor[str]):
            def visit_standard(self, product):
                return "std"

            def visit_digital(self, product):
                return "dig"

            def visit_natural(self, product):
                return "nat"

            def visit_null(self, product):
                return "none"

        labels = [
            p.accept(VariantLabel())
            for p in (make_standard(), make_digital(), make_natural(), NullProduct())
        ]
        assert labels == ["std", "dig", "nat", "none"]
