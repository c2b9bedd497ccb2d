"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, document store, in-memory)
live in the infrastructure layer.  Methods are coroutines because real
stores do I/O; the domain objects they return are plain and synchronous.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.null_product import NullProduct
from shop.domain.model.product import Product
from shop.domain.model.value_objects import DEFAULT_CURRENCY, ProductId


class ProductRepository(ABC):

    # currency of the NullProduct handed out for unknown IDs
    default_currency: str = DEFAULT_CURRENCY

    @abstractmethod
    async def get_by_id(self, product_id: ProductId) -> Product | None:
        """Return a product by its ID, or None if not found."""

    async def find_by_id(self, product_id: ProductId) -> Product:
        """Return a product by its ID, or a NullProduct if not found.

        Never raises for a missing product.
        """
        product = await self.get_by_id(product_id)
        if product is None:
            return NullProduct(self.default_currency)
        return product

    @abstractmethod
    async def find_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    async def find_by_category(self, category_id: str) -> list[Product]:
        """Return the products of one category."""

    @abstractmethod
    async def find_featured(self) -> list[Product]:
        """Return the products flagged as featured."""

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """Persist a new product and return it."""

    @abstractmethod
    async def update(self, product: Product) -> Product:
        """Persist changes to an existing product.

        Raises EntityNotFoundError when the product was never saved.
        """

    @abstractmethod
    async def delete(self, product_id: ProductId) -> bool:
        """Remove a product; return False when there was nothing to remove."""
