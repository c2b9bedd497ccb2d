"""Cart aggregate — the products a shopper intends to buy.

One Cart instance belongs to one owning context (a session, a user, a
test).  It holds *references* to products, never copies, so prices and
availability are always read live from the product.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from shop.domain.exceptions import (
    CartCapacityExceeded,
    InvalidQuantity,
    LineNotFound,
    ProductUnavailable,
)
from shop.domain.model.product import Product
from shop.domain.model.value_objects import DEFAULT_CURRENCY, Money, ProductId

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_DISTINCT_LINES = 10


@dataclass(frozen=True)
class CartLine:
    """A product reference and how many units of it the cart holds."""

    product: Product
    quantity: int

    @property
    def line_total(self) -> Money:
        return self.product.compute_final_price() * self.quantity


def _validate_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantity(f"Quantity must be a positive integer, got {quantity!r}")


def _key(product_id: ProductId | str) -> ProductId:
    if isinstance(product_id, ProductId):
        return product_id
    return ProductId.from_string(product_id)


class Cart:
    """Aggregate root for a shopping cart.

    Invariants:
    - every line's ``quantity`` is > 0
    - at most ``max_lines`` distinct products
    - a product must report itself available when it is added or its
      quantity is changed
    """

    def __init__(
        self,
        max_lines: int = MAX_DISTINCT_LINES,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        if max_lines <= 0:
            raise InvalidQuantity("Cart capacity must be positive")
        self._max_lines = max_lines
        self._currency = Money.zero(currency).currency
        self._lines: dict[ProductId, CartLine] = {}

    @property
    def max_lines(self) -> int:
        return self._max_lines

    @property
    def currency(self) -> str:
        return self._currency

    # --- Mutations ------------------------------------------------------------

    def add_product(self, product: Product, quantity: int = 1) -> None:
        """Add *quantity* units of *product*, merging with an existing line.

        The capacity check only applies to products not yet in the cart.
        """
        _validate_quantity(quantity)
        if not product.is_available():
            raise ProductUnavailable(f"Product '{product.name}' is not available")

        existing = self._lines.get(product.id)
        if existing is None and len(self._lines) >= self._max_lines:
            raise CartCapacityExceeded(
                f"Cannot hold more than {self._max_lines} different products"
            )

        current = existing.quantity if existing is not None else 0
        self._lines[product.id] = CartLine(product=product, quantity=current + quantity)
        logger.debug("Cart line %s now holds %d unit(s)", product.id, current + quantity)

    def remove_product(self, product_id: ProductId | str) -> None:
        self._lines.pop(_key(product_id), None)

    def update_quantity(self, product_id: ProductId | str, quantity: int) -> None:
        """Replace a line's quantity; zero or less removes the line."""
        key = _key(product_id)
        line = self._lines.get(key)
        if line is None:
            raise LineNotFound(f"Product ID '{key}' is not in the cart")

        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidQuantity(f"Quantity must be an integer, got {quantity!r}")
        if quantity <= 0:
            self.remove_product(key)
            return

        if not line.product.is_available():
            raise ProductUnavailable(f"Product '{line.product.name}' is not available")
        self._lines[key] = CartLine(product=line.product, quantity=quantity)

    def clear(self) -> None:
        self._lines.clear()

    # --- Queries --------------------------------------------------------------

    def calculate_total(self) -> Money:
        """Sum of every line at the product's discounted price.

        All lines must share one currency, otherwise CurrencyMismatch.
        """
        total = Money.zero(self._currency)
        lines = list(self._lines.values())
        if lines:
            total = lines[0].line_total
            for line in lines[1:]:
                total = total + line.line_total
        return total

    def get_items(self) -> list[CartLine]:
        return list(self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    def get_total_quantity(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def has_product(self, product_id: ProductId | str) -> bool:
        return _key(product_id) in self._lines

    def __len__(self) -> int:
        return len(self._lines)
