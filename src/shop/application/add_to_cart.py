"""Application service: Add To Cart use case.

Looks the product up in the catalog and hands it to the caller's cart.
An unknown ID resolves to the Null product, which the cart rejects as
unavailable.
"""

from __future__ import annotations

from shop.application.dto import CartDTO, cart_to_dto
from shop.domain.model.cart import Cart
from shop.domain.model.value_objects import ProductId
from shop.domain.repository.product_repository import ProductRepository


class AddToCartHandler:

    def __init__(self, product_repo: ProductRepository, cart: Cart) -> None:
        self._product_repo = product_repo
        self._cart = cart

    async def handle(self, product_id: str, quantity: int = 1) -> CartDTO:
        product = await self._product_repo.find_by_id(ProductId.from_string(product_id))
        self._cart.add_product(product, quantity)
        return cart_to_dto(self._cart)
