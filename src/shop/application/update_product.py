"""Application service: Update Product use case."""

from __future__ import annotations

from shop.application.dto import ProductDTO, ProductUpdate, product_to_dto
from shop.domain.exceptions import EntityNotFoundError, ValidationError
from shop.domain.model.product import (
    DiscountedProduct,
    Product,
    PromotedProduct,
    validate_description,
    validate_discount,
    validate_featured,
    validate_name,
    validate_text,
)
from shop.domain.model.value_objects import Money, ProductId
from shop.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: str, changes: ProductUpdate) -> ProductDTO:
        """Apply every supplied field of *changes* to the product.

        Every supplied value is checked before the first setter runs, so
        a rejected request changes nothing and publishes no event.  The
        new price keeps the product's currency.
        """
        if changes.is_empty():
            raise ValidationError("At least one field must be supplied")

        product = await self._product_repo.get_by_id(ProductId.from_string(product_id))
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        new_price = self._check(product, changes)

        if changes.name is not None:
            product.set_name(changes.name)
        if changes.description is not None:
            product.set_description(changes.description)
        if new_price is not None:
            product.set_price(new_price)
        if changes.stock is not None:
            product.set_stock(changes.stock)
        if changes.image_url is not None:
            product.set_image_url(changes.image_url)
        if changes.discount is not None:
            product.set_discount(changes.discount)  # type: ignore[attr-defined]
        if changes.featured is not None:
            product.set_featured(changes.featured)  # type: ignore[attr-defined]

        await self._product_repo.update(product)
        return product_to_dto(product)

    @staticmethod
    def _check(product: Product, changes: ProductUpdate) -> Money | None:
        """Validate *changes* against *product*; return the parsed price."""
        if changes.discount is not None and not isinstance(product, DiscountedProduct):
            raise ValidationError(f"{product.variant.value} products have no discount")
        if changes.featured is not None and not isinstance(product, PromotedProduct):
            raise ValidationError(f"{product.variant.value} products cannot be featured")

        if changes.name is not None:
            validate_name(changes.name)
        if changes.description is not None:
            validate_description(changes.description)
        if changes.stock is not None:
            product.stock_policy.validate_level(changes.stock)
        if changes.image_url is not None:
            validate_text("image URL", changes.image_url)
        if changes.discount is not None:
            validate_discount(changes.discount)
        if changes.featured is not None:
            validate_featured(changes.featured)

        if changes.price is None:
            return None
        return Money.of(changes.price, product.price.currency)
