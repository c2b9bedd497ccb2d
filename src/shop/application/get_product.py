"""Application service: Get Product use case (query)."""

from __future__ import annotations

from shop.domain.model.product import Product
from shop.domain.model.value_objects import ProductId
from shop.domain.repository.product_repository import ProductRepository


class GetProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: str) -> Product:
        """Return the product, or a NullProduct when the ID is unknown.

        A blank ID is a caller error and raises EmptyIdentifier.
        """
        return await self._product_repo.find_by_id(ProductId.from_string(product_id))
