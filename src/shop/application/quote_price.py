"""Application service: Quote Price use case (query).

Reports how a product's final price is reached: base price, the
variant's own discount, then the tax rate picked by the pricing visitors.
"""

from __future__ import annotations

from decimal import Decimal

from shop.application.dto import PriceQuoteDTO
from shop.domain.model.product import Product
from shop.domain.model.value_objects import ProductId
from shop.domain.repository.product_repository import ProductRepository
from shop.domain.service.pricing import (
    DEFAULT_DIGITAL_TAX_RATE,
    DEFAULT_GENERAL_TAX_RATE,
    TaxedPriceVisitor,
    TaxRateVisitor,
)


class QuotePriceHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        general_tax_rate: int | float | Decimal = DEFAULT_GENERAL_TAX_RATE,
        digital_tax_rate: int | float | Decimal = DEFAULT_DIGITAL_TAX_RATE,
    ) -> None:
        self._product_repo = product_repo
        self._price_visitor = TaxedPriceVisitor(general_tax_rate, digital_tax_rate)
        self._rate_visitor = TaxRateVisitor(general_tax_rate, digital_tax_rate)

    async def handle(self, product_id: str) -> PriceQuoteDTO:
        """Quote a catalog product.  Unknown IDs quote the Null product at zero."""
        product = await self._product_repo.find_by_id(ProductId.from_string(product_id))
        return self.quote(product)

    def quote(self, product: Product) -> PriceQuoteDTO:
        return PriceQuoteDTO(
            product_id=str(product.id),
            name=product.name,
            variant=product.variant.value,
            base_price=str(product.price),
            discounted_price=str(product.compute_final_price()),
            final_price=str(product.accept(self._price_visitor)),
            currency=product.price.currency,
            discount=str(product.discount),
            tax_rate=str(product.accept(self._rate_visitor)),
        )
