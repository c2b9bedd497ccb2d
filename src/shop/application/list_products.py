"""Application service: List Products use case (query)."""

from __future__ import annotations

from shop.application.dto import ProductDTO, product_to_dto
from shop.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(
        self,
        category_id: str | None = None,
        featured_only: bool = False,
    ) -> list[ProductDTO]:
        if featured_only:
            products = await self._product_repo.find_featured()
            if category_id is not None:
                products = [p for p in products if p.category_id == category_id]
        elif category_id is not None:
            products = await self._product_repo.find_by_category(category_id)
        else:
            products = await self._product_repo.find_all()
        return [product_to_dto(p) for p in products]
