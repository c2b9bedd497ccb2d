"""Domain events raised by the Product aggregate.

Events are plain immutable records.  Subscribers receive them through the
``EventBus`` right after the mutation that produced them has been applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar

from shop.domain.model.value_objects import Money


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _plain(value: Any) -> Any:
    if isinstance(value, Money):
        return {"amount": str(value.amount), "currency": value.currency}
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class DomainEvent:
    """Base class for every event published on the bus."""

    name: ClassVar[str] = "domain.event"

    product_id: str

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"event": self.name}
        for key, value in self.__dict__.items():
            data[key] = _plain(value)
        return data


@dataclass(frozen=True)
class ProductCreated(DomainEvent):
    name: ClassVar[str] = "product.created"

    product_name: str
    price: Money
    occurred_at: datetime = dataclass_field(default_factory=_now)


@dataclass(frozen=True)
class ProductUpdated(DomainEvent):
    """A single attribute changed; carries the old and the new value."""

    name: ClassVar[str] = "product.updated"

    field: str
    old_value: Any
    new_value: Any
    occurred_at: datetime = dataclass_field(default_factory=_now)


@dataclass(frozen=True)
class ProductStockChanged(DomainEvent):
    name: ClassVar[str] = "product.stock_changed"

    old_stock: int
    new_stock: int
    delta: int
    occurred_at: datetime = dataclass_field(default_factory=_now)
