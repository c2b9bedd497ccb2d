"""Product aggregate — the shared core of every catalog variant.

Products live independently of carts. They have their own lifecycle:
prices change, stock goes up and down, tags are added and removed.
Every successful mutation bumps ``updated_at`` and publishes exactly one
domain event on the product's ``EventBus``.

Variant-specific stock behaviour is not expressed through overridable
hooks: each variant class names a ``StockPolicy`` and the single stock
algorithm on ``Product`` consults it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Iterable, TypeVar

from shop.domain.events.event_bus import EventBus
from shop.domain.events.product_events import (
    DomainEvent,
    ProductCreated,
    ProductStockChanged,
    ProductUpdated,
)
from shop.domain.exceptions import (
    InsufficientStock,
    InvalidDiscount,
    InvalidQuantity,
    ValidationError,
)
from shop.domain.model.value_objects import Money, ProductId

if TYPE_CHECKING:
    from shop.domain.service.pricing import ProductVisitor

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_NAME_LENGTH = 100
UNLIMITED_STOCK = -1


class ProductVariant(Enum):
    STANDARD = "STANDARD"
    DIGITAL = "DIGITAL"
    NATURAL = "NATURAL"
    NULL = "NULL"


# ---------------------------------------------------------------------------
# Stock policies
# ---------------------------------------------------------------------------


class StockPolicy:
    """Finite stock: levels are >= 0 and a reduction cannot exceed them."""

    def validate_level(self, stock: int) -> None:
        if not _is_int(stock):
            raise ValidationError(f"Stock must be an integer, got {stock!r}")
        if stock < 0:
            raise ValidationError("Stock cannot be negative")

    def is_unlimited(self, stock: int) -> bool:
        return False

    def can_reduce(self, quantity: int, stock: int) -> bool:
        return quantity <= stock

    def reduce(self, quantity: int, stock: int) -> int:
        return stock - quantity

    def increase(self, quantity: int, stock: int) -> int:
        return stock + quantity

    def is_available(self, stock: int) -> bool:
        return stock > 0


class UnlimitedCapableStockPolicy(StockPolicy):
    """Finite stock that also accepts ``UNLIMITED_STOCK`` (-1).

    An unlimited level is a fixed point: reductions and increases
    leave it at -1.
    """

    def validate_level(self, stock: int) -> None:
        if _is_int(stock) and stock == UNLIMITED_STOCK:
            return
        super().validate_level(stock)

    def is_unlimited(self, stock: int) -> bool:
        return stock == UNLIMITED_STOCK

    def can_reduce(self, quantity: int, stock: int) -> bool:
        return self.is_unlimited(stock) or super().can_reduce(quantity, stock)

    def reduce(self, quantity: int, stock: int) -> int:
        if self.is_unlimited(stock):
            return stock
        return super().reduce(quantity, stock)

    def increase(self, quantity: int, stock: int) -> int:
        if self.is_unlimited(stock):
            return stock
        return super().increase(quantity, stock)

    def is_available(self, stock: int) -> bool:
        return self.is_unlimited(stock) or super().is_available(stock)


class NoStockPolicy(StockPolicy):
    """Never available, whatever the level says."""

    def is_available(self, stock: int) -> bool:
        return False


FINITE_STOCK = StockPolicy()
UNLIMITED_CAPABLE_STOCK = UnlimitedCapableStockPolicy()
NO_STOCK = NoStockPolicy()


# ---------------------------------------------------------------------------
# Field validation
# ---------------------------------------------------------------------------


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_name(name: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Product name cannot be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Product name cannot exceed {MAX_NAME_LENGTH} characters"
        )


def validate_description(description: str) -> None:
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("Product description cannot be empty")


def _validate_price(price: Money) -> None:
    if not isinstance(price, Money):
        raise ValidationError(
            f"Product price must be Money, got {type(price).__name__}"
        )


def validate_text(field: str, value: str) -> None:
    if not isinstance(value, str):
        raise ValidationError(f"Product {field} must be a string")


def _validate_quantity(quantity: int) -> None:
    if not _is_int(quantity) or quantity <= 0:
        raise InvalidQuantity(f"Quantity must be a positive integer, got {quantity!r}")


def validate_discount(discount: int | float | Decimal) -> None:
    if isinstance(discount, bool) or not isinstance(discount, (int, float, Decimal)):
        raise InvalidDiscount(f"Discount must be a number, got {discount!r}")
    # NaN cannot be ordered; Decimal raises instead of returning False
    if not Decimal(str(discount)).is_finite():
        raise InvalidDiscount(f"Discount must be finite, got {discount!r}")
    if not 0 <= discount <= 100:
        raise InvalidDiscount("Discount must be between 0 and 100")


def validate_featured(featured: bool) -> None:
    if not isinstance(featured, bool):
        raise ValidationError("Featured flag must be a boolean")


def normalize_tag(tag: str) -> str:
    if not isinstance(tag, str) or not tag.strip():
        raise ValidationError("Tag cannot be empty")
    return tag.strip().lower()


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------


class Product(ABC):
    """Aggregate root shared by every catalog variant.

    All validation runs before any attribute is written, so a rejected
    construction or mutation leaves nothing half-applied.  Subclasses
    validate and store their own fields first and call
    ``super().__init__`` last; ``ProductCreated`` is therefore published
    only for a fully valid product.
    """

    variant: ClassVar[ProductVariant]
    stock_policy: ClassVar[StockPolicy] = FINITE_STOCK
    emits_events: ClassVar[bool] = True

    def __init__(
        self,
        id: ProductId | str,
        name: str,
        description: str,
        price: Money,
        stock: int,
        category_id: str,
        image_url: str = "",
        *,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        product_id = id if isinstance(id, ProductId) else ProductId.from_string(id)
        validate_name(name)
        validate_description(description)
        _validate_price(price)
        self.stock_policy.validate_level(stock)
        validate_text("category", category_id)
        validate_text("image URL", image_url)

        self._id = product_id
        self._name = name
        self._description = description
        self._price = price
        self._stock = stock
        self._category_id = category_id
        self._image_url = image_url
        self._created_at = created_at or datetime.now(timezone.utc)
        self._updated_at = max(updated_at or self._created_at, self._created_at)
        self._event_bus = event_bus

        self._publish(
            ProductCreated(product_id=str(self._id), product_name=name, price=price)
        )

    # --- Attributes -----------------------------------------------------------

    @property
    def id(self) -> ProductId:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def price(self) -> Money:
        return self._price

    @property
    def stock(self) -> int:
        return self._stock

    @property
    def category_id(self) -> str:
        return self._category_id

    @property
    def image_url(self) -> str:
        return self._image_url

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def discount(self) -> int | float | Decimal:
        """Discount percentage; variants without discounts report 0."""
        return 0

    @property
    def is_featured(self) -> bool:
        return False

    @property
    def has_unlimited_stock(self) -> bool:
        return self.stock_policy.is_unlimited(self._stock)

    # --- Setters --------------------------------------------------------------

    def set_name(self, name: str) -> None:
        validate_name(name)
        self._change("name", name)

    def set_description(self, description: str) -> None:
        validate_description(description)
        self._change("description", description)

    def set_price(self, price: Money) -> None:
        _validate_price(price)
        self._change("price", price)

    def set_image_url(self, image_url: str) -> None:
        validate_text("image URL", image_url)
        self._change("image_url", image_url)

    def set_stock(self, stock: int) -> None:
        self.stock_policy.validate_level(stock)
        self._apply_stock(stock, stock - self._stock)

    # --- Stock lifecycle ------------------------------------------------------

    def is_available(self) -> bool:
        return self.stock_policy.is_available(self._stock)

    def reduce_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises InvalidQuantity for non-positive quantities and
        InsufficientStock when more units are requested than remain.
        Unlimited stock is left untouched by the policy.
        """
        _validate_quantity(quantity)
        if not self.stock_policy.can_reduce(quantity, self._stock):
            raise InsufficientStock(
                f"Insufficient stock for {self._name} "
                f"(need {quantity}, have {self._stock})"
            )
        self._apply_stock(self.stock_policy.reduce(quantity, self._stock), -quantity)

    def increase_stock(self, quantity: int) -> None:
        _validate_quantity(quantity)
        self._apply_stock(self.stock_policy.increase(quantity, self._stock), quantity)

    # --- Pricing --------------------------------------------------------------

    @abstractmethod
    def compute_final_price(self) -> Money:
        """Price after the variant's own discount, before tax."""

    @abstractmethod
    def accept(self, visitor: ProductVisitor[T]) -> T:
        """Dispatch to the visitor method for this variant."""

    # --- Internal helpers -----------------------------------------------------

    def _change(self, field: str, new_value: Any) -> None:
        attribute = f"_{field}"
        old_value = getattr(self, attribute)
        setattr(self, attribute, new_value)
        self._touch()
        self._publish(
            ProductUpdated(
                product_id=str(self._id),
                field=field,
                old_value=old_value,
                new_value=new_value,
            )
        )

    def _apply_stock(self, new_stock: int, delta: int) -> None:
        old_stock = self._stock
        self._stock = new_stock
        self._touch()
        logger.debug(
            "Stock of product %s changed %s -> %s (delta %s)",
            self._id, old_stock, new_stock, delta,
        )
        self._publish(
            ProductStockChanged(
                product_id=str(self._id),
                old_stock=old_stock,
                new_stock=new_stock,
                delta=delta,
            )
        )

    def _touch(self) -> None:
        self._updated_at = max(datetime.now(timezone.utc), self._updated_at)

    def _publish(self, event: DomainEvent) -> None:
        if self.emits_events and self._event_bus is not None:
            self._event_bus.emit(event)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self._id}, name={self._name!r}, "
            f"price={self._price}, stock={self._stock})"
        )


class DiscountedProduct(Product):
    """A product whose final price is its base price minus a percentage."""

    def __init__(
        self,
        *args: Any,
        discount: int | float | Decimal = 0,
        **kwargs: Any,
    ) -> None:
        validate_discount(discount)
        self._discount = discount
        super().__init__(*args, **kwargs)

    @property
    def discount(self) -> int | float | Decimal:
        return self._discount

    def set_discount(self, discount: int | float | Decimal) -> None:
        validate_discount(discount)
        self._change("discount", discount)

    def compute_final_price(self) -> Money:
        if self._discount <= 0:
            return self._price
        return self._price.apply_discount(self._discount)


class PromotedProduct(DiscountedProduct):
    """Discounted product that can also be featured and tagged.

    Tags are stored lowercase, stripped and without duplicates, in the
    order they were first added.
    """

    def __init__(
        self,
        *args: Any,
        featured: bool = False,
        tags: Iterable[str] = (),
        **kwargs: Any,
    ) -> None:
        validate_featured(featured)
        normalized: list[str] = []
        for tag in tags:
            tag = normalize_tag(tag)
            if tag not in normalized:
                normalized.append(tag)
        self._featured = featured
        self._tags = normalized
        super().__init__(*args, **kwargs)

    @property
    def is_featured(self) -> bool:
        return self._featured

    @property
    def tags(self) -> list[str]:
        return list(self._tags)

    def set_featured(self, featured: bool) -> None:
        validate_featured(featured)
        self._change("featured", featured)

    def add_tag(self, tag: str) -> bool:
        """Add *tag*; return False when it was already present."""
        tag = normalize_tag(tag)
        if tag in self._tags:
            return False
        self._change("tags", [*self._tags, tag])
        return True

    def remove_tag(self, tag: str) -> bool:
        """Remove *tag*; return False when it was not present."""
        if not isinstance(tag, str):
            return False
        tag = tag.strip().lower()
        if tag not in self._tags:
            return False
        self._change("tags", [t for t in self._tags if t != tag])
        return True
