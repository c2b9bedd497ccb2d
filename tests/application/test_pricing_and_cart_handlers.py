"""Integration tests for the price quote and cart use cases."""

import pytest

from shop.application.add_to_cart import AddToCartHandler
from shop.application.quote_price import QuotePriceHandler
from shop.application.show_cart import ShowCartHandler
from shop.domain.exceptions import CartCapacityExceeded, ProductUnavailable
from shop.domain.model.cart import Cart
from shop.infrastructure.persistence.in_memory_product_repository import (
    InMemoryProductRepository,
)
from tests.fakes import make_digital, make_standard


class TestQuotePrice:

    @pytest.mark.asyncio
    async def test_digital_quote(self):
        product = make_digital(price="19.99")
        handler = QuotePriceHandler(InMemoryProductRepository([product]), 21, 10)

        quote = await handler.handle(str(product.id))

        assert quote.variant == "DIGITAL"
        assert quote.base_price == "19.99 USD"
        assert quote.discounted_price == "19.99 USD"
        assert quote.tax_rate == "10"
        assert quote.final_price == "21.99 USD"

    @pytest.mark.asyncio
    async def test_discounted_standard_quote(self):
        product = make_standard(product_id="p1", price="100.00", discount=50)
        quote = await QuotePriceHandler(InMemoryProductRepository([product])).handle("p1")
        assert quote.discount == "50"
        assert quote.discounted_price == "50.00 USD"
        assert quote.tax_rate == "21"
        assert quote.final_price == "60.50 USD"

    @pytest.mark.asyncio
    async def test_unknown_product_quotes_zero(self):
        quote = await QuotePriceHandler(InMemoryProductRepository()).handle("missing")
        assert quote.variant == "NULL"
        assert quote.final_price == "0.00 USD"
        assert quote.tax_rate == "0"


class TestAddToCart:

    @pytest.mark.asyncio
    async def test_adds_and_reports_cart(self):
        product = make_standard(product_id="p1", price="7.50")
        cart = Cart()
        handler = AddToCartHandler(InMemoryProductRepository([product]), cart)

        await handler.handle("p1", 2)
        dto = await handler.handle("p1")

        assert len(dto.items) == 1
        assert dto.items[0].quantity == 3
        assert dto.items[0].line_total == "22.50 USD"
        assert dto.total == "22.50 USD"
        assert dto.total_quantity == 3

    @pytest.mark.asyncio
    async def test_unknown_product_is_unavailable(self):
        cart = Cart()
        handler = AddToCartHandler(InMemoryProductRepository(), cart)
        with pytest.raises(ProductUnavailable):
            await handler.handle("missing")
        assert cart.is_empty()

    @pytest.mark.asyncio
    async def test_capacity_applies(self):
        products = [make_standard(product_id=f"p{i}") for i in range(3)]
        handler = AddToCartHandler(InMemoryProductRepository(products), Cart(max_lines=2))
        await handler.handle("p0")
        await handler.handle("p1")
        with pytest.raises(CartCapacityExceeded):
            await handler.handle("p2")


class TestShowCart:

    def test_empty_cart(self):
        dto = ShowCartHandler(Cart()).handle()
        assert dto.items == []
        assert dto.total == "0.00 USD"
        assert dto.total_quantity == 0

    def test_lists_lines(self):
        cart = Cart()
        cart.add_product(make_standard(name="Widget", price="4.00"), 2)
        dto = ShowCartHandler(cart).handle()
        assert dto.items[0].product_name == "Widget"
        assert dto.items[0].unit_price == "4.00 USD"
        assert dto.total == "8.00 USD"
