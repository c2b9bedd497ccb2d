"""Application service: Delete Product use case."""

from __future__ import annotations

from shop.domain.model.value_objects import ProductId
from shop.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: str) -> bool:
        return await self._product_repo.delete(ProductId.from_string(product_id))
