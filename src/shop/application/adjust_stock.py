"""Application service: Adjust Stock use case.

A positive delta restocks, a negative delta takes units out, zero leaves
the product untouched.
"""

from __future__ import annotations

import logging

from shop.application.dto import ProductDTO, product_to_dto
from shop.domain.exceptions import EntityNotFoundError
from shop.domain.model.value_objects import ProductId
from shop.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AdjustStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: str, delta: int) -> ProductDTO:
        product = await self._product_repo.get_by_id(ProductId.from_string(product_id))
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if delta > 0:
            product.increase_stock(delta)
        elif delta < 0:
            product.reduce_stock(abs(delta))
        else:
            logger.debug("Zero stock adjustment for product %s ignored", product_id)
            return product_to_dto(product)

        await self._product_repo.update(product)
        return product_to_dto(product)
