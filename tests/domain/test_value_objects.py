"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from shop.domain.exceptions import (
    CurrencyMismatch,
    EmptyIdentifier,
    InvalidAmount,
    InvalidCurrency,
    InvalidDiscount,
)
from shop.domain.model.value_objects import Money, ProductId


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        m = Money.of("25.99", "EUR")
        assert m.amount == Decimal("25.99")
        assert m.currency == "EUR"

    def test_of_factory_from_int(self):
        m = Money.of(10)
        assert m.amount == Decimal("10")

    def test_of_factory_from_float_keeps_literal_value(self):
        assert Money.of(19.99).amount == Decimal("19.99")

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidAmount, match="cannot be negative"):
            Money(Decimal("-1"))

    @pytest.mark.parametrize("amount", ["NaN", "Infinity", float("inf")])
    def test_non_finite_amount_rejected(self, amount):
        with pytest.raises(InvalidAmount):
            Money.of(amount)

    def test_garbage_amount_rejected(self):
        with pytest.raises(InvalidAmount, match="Invalid money amount"):
            Money.of("ten dollars")

    @pytest.mark.parametrize("currency", ["", "US", "EURO"])
    def test_currency_must_have_three_characters(self, currency):
        with pytest.raises(InvalidCurrency):
            Money.of("1", currency)

    def test_currency_is_normalised(self):
        assert Money.of("1", " eur ").currency == "EUR"

    def test_addition(self):
        result = Money.of("10").add(Money.of("5.50"))
        assert result == Money.of("15.50")
        assert Money.of("10") + Money.of("5.50") == result

    def test_subtraction(self):
        result = Money.of("10") - Money.of("3")
        assert result == Money.of("7")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(InvalidAmount, match="negative amount"):
            Money.of("5").subtract(Money.of("10"))

    def test_multiplication(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")
        assert Money.of("10").multiply(Decimal("0.5")) == Money.of("5")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(CurrencyMismatch, match="Cannot combine"):
            Money.of("10", "USD") + Money.of("5", "EUR")

    def test_comparison_currency_mismatch_rejected(self):
        with pytest.raises(CurrencyMismatch):
            Money.of("10", "USD").greater_than(Money.of("5", "EUR"))

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") > Money.of("5")
        assert Money.of("10") >= Money.of("10")
        assert Money.of("10") <= Money.of("10")
        assert Money.of("10").greater_than(Money.of("9.99"))
        assert Money.of("9.99").less_than(Money.of("10"))

    def test_equality_is_by_value(self):
        assert Money.of("10").equals(Money.of("10.00"))
        assert Money.of("10", "USD") != Money.of("10", "EUR")

    def test_is_immutable(self):
        m = Money.of("1")
        with pytest.raises(AttributeError):
            m.amount = Decimal("2")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "15.00 USD"
        assert str(Money.of("21.989")) == "21.99 USD"
        assert str(Money.of("0.005")) == "0.01 USD"


class TestMoneyDiscount:

    def test_zero_discount_keeps_amount(self):
        assert Money.of("40").apply_discount(0) == Money.of("40")

    def test_full_discount_is_free(self):
        assert Money.of("40").apply_discount(100) == Money.zero()

    def test_partial_discount(self):
        assert Money.of("5.00").apply_discount(50) == Money.of("2.50")
        assert Money.of("19.99").apply_discount(15) == Money.of("16.9915")

    @pytest.mark.parametrize("pct", [-1, 100.5, 250])
    def test_out_of_range_discount_rejected(self, pct):
        with pytest.raises(InvalidDiscount, match="between 0 and 100"):
            Money.of("10").apply_discount(pct)

    def test_rounded_is_half_up(self):
        assert Money.of("2.345").rounded() == Money.of("2.35")
        assert Money.of("2.344").rounded() == Money.of("2.34")


# ── ProductId ────────────────────────────────────────────────────────────────


class TestProductId:

    def test_create_generates_unique_ids(self):
        assert ProductId.create() != ProductId.create()

    def test_from_string_wraps_value(self):
        pid = ProductId.from_string("abc-123")
        assert pid.value == "abc-123"
        assert str(pid) == "abc-123"

    def test_equality_is_structural(self):
        assert ProductId.from_string("p1") == ProductId.from_string("p1")
        assert hash(ProductId.from_string("p1")) == hash(ProductId.from_string("p1"))

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_blank_rejected(self, raw):
        with pytest.raises(EmptyIdentifier, match="cannot be empty"):
            ProductId.from_string(raw)
