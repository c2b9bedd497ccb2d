"""Null Object for products.

Returned by ``ProductRepository.find_by_id`` when nothing matches, so
callers can price or display a missing product without a None check.
It is never available, costs nothing, publishes nothing, and refuses
every mutation with ``NullProductOperation``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from shop.domain.exceptions import NullProductOperation
from shop.domain.model.product import NO_STOCK, Product, ProductVariant
from shop.domain.model.value_objects import DEFAULT_CURRENCY, Money, ProductId

if TYPE_CHECKING:
    from shop.domain.service.pricing import ProductVisitor

T = TypeVar("T")


class NullProduct(Product):

    variant = ProductVariant.NULL
    stock_policy = NO_STOCK
    emits_events = False

    def __init__(self, currency: str = DEFAULT_CURRENCY) -> None:
        super().__init__(
            ProductId.create(),
            "Product not available",
            "This product does not exist or is not available",
            Money.zero(currency),
            0,
            "null-category",
            "",
        )

    def compute_final_price(self) -> Money:
        return Money.zero(self.price.currency)

    def accept(self, visitor: ProductVisitor[T]) -> T:
        return visitor.visit_null(self)

    # --- Every mutator is refused ---------------------------------------------

    def _refuse(self, *_: Any) -> None:
        raise NullProductOperation("Cannot modify a product that does not exist")

    set_name = _refuse
    set_description = _refuse
    set_price = _refuse
    set_image_url = _refuse
    set_stock = _refuse
    reduce_stock = _refuse
    increase_stock = _refuse

    def __repr__(self) -> str:
        return "NullProduct()"
