"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal

from shop.domain.model.cart import Cart
from shop.domain.model.product import Product


@dataclass(frozen=True)
class ProductUpdate:
    """Input: the fields to change on a product.  ``None`` means "leave as is"."""

    name: str | None = None
    description: str | None = None
    price: str | None = None
    stock: int | None = None
    image_url: str | None = None
    discount: int | float | Decimal | None = None
    featured: bool | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    id: str
    variant: str
    name: str
    description: str
    price: str  # formatted, e.g. "15.00 USD"
    final_price: str
    stock: int
    available: bool
    category_id: str
    discount: str
    featured: bool


@dataclass(frozen=True)
class PriceQuoteDTO:
    """Output: how a product's tax-inclusive price was reached."""

    product_id: str
    name: str
    variant: str
    base_price: str
    discounted_price: str
    final_price: str
    currency: str
    discount: str
    tax_rate: str


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    items: list[CartLineDTO]
    total_quantity: int
    total: str


# --- Mapping ------------------------------------------------------------------


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=str(product.id),
        variant=product.variant.value,
        name=product.name,
        description=product.description,
        price=str(product.price),
        final_price=str(product.compute_final_price()),
        stock=product.stock,
        available=product.is_available(),
        category_id=product.category_id,
        discount=str(product.discount),
        featured=product.is_featured,
    )


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        items=[
            CartLineDTO(
                product_id=str(line.product.id),
                product_name=line.product.name,
                quantity=line.quantity,
                unit_price=str(line.product.compute_final_price()),
                line_total=str(line.line_total),
            )
            for line in cart.get_items()
        ],
        total_quantity=cart.get_total_quantity(),
        total=str(cart.calculate_total()),
    )
