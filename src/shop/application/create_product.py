"""Application service: Create Product use case."""

from __future__ import annotations

from typing import Any, Mapping

from shop.application.dto import ProductDTO, product_to_dto
from shop.domain.model.product import ProductVariant
from shop.domain.model.product_factory import ProductFactory
from shop.domain.repository.product_repository import ProductRepository


class CreateProductHandler:

    def __init__(self, product_repo: ProductRepository, factory: ProductFactory) -> None:
        self._product_repo = product_repo
        self._factory = factory

    async def handle(self, variant: ProductVariant | str, payload: Mapping[str, Any]) -> ProductDTO:
        """Build a product of *variant* from *payload* and add it to the catalog."""
        product = self._factory.create(variant, payload)
        await self._product_repo.save(product)
        return product_to_dto(product)
