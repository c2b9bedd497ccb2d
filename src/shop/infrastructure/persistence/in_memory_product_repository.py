"""In-memory implementation of ProductRepository.

Keeps products in a dict keyed by ProductId.  Stored objects are the
live aggregates, so mutations made by callers are visible immediately;
``update`` only checks that the product was saved before.
"""

from __future__ import annotations

from shop.domain.exceptions import EntityNotFoundError, NullProductOperation
from shop.domain.model.product import Product, ProductVariant
from shop.domain.model.value_objects import DEFAULT_CURRENCY, Money, ProductId
from shop.domain.repository.product_repository import ProductRepository


class InMemoryProductRepository(ProductRepository):

    def __init__(
        self,
        products: list[Product] | None = None,
        default_currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self.default_currency = Money.zero(default_currency).currency
        self._store: dict[ProductId, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    # --- ProductRepository interface ------------------------------------------

    async def get_by_id(self, product_id: ProductId) -> Product | None:
        return self._store.get(product_id)

    async def find_all(self) -> list[Product]:
        return list(self._store.values())

    async def find_by_category(self, category_id: str) -> list[Product]:
        return [p for p in self._store.values() if p.category_id == category_id]

    async def find_featured(self) -> list[Product]:
        return [p for p in self._store.values() if p.is_featured]

    async def save(self, product: Product) -> Product:
        self._check_storable(product)
        self._store[product.id] = product
        return product

    async def update(self, product: Product) -> Product:
        self._check_storable(product)
        if product.id not in self._store:
            raise EntityNotFoundError(f"Product with ID '{product.id}' not found")
        self._store[product.id] = product
        return product

    async def delete(self, product_id: ProductId) -> bool:
        return self._store.pop(product_id, None) is not None

    @staticmethod
    def _check_storable(product: Product) -> None:
        if product.variant is ProductVariant.NULL:
            raise NullProductOperation("Cannot store a product that does not exist")
