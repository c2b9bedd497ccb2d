"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  ``build_container`` is
called once at startup (or once per test); carts are created per owning
context through ``Container.new_cart``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from shop.domain.events.event_bus import EventBus
from shop.domain.model.cart import Cart
from shop.domain.model.product_factory import ProductFactory
from shop.infrastructure.config import Settings
from shop.infrastructure.logging_subscriber import LoggingEventSubscriber
from shop.infrastructure.persistence.in_memory_product_repository import (
    InMemoryProductRepository,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


@dataclass
class Container:
    settings: Settings
    event_bus: EventBus
    product_repository: InMemoryProductRepository
    product_factory: ProductFactory

    def new_cart(self) -> Cart:
        return Cart(
            max_lines=self.settings.cart_max_lines,
            currency=self.settings.default_currency,
        )


def build_container(settings: Settings | None = None, log_events: bool = True) -> Container:
    settings = settings or Settings.from_env()
    event_bus = EventBus()
    if log_events:
        event_bus.subscribe(LoggingEventSubscriber(level=logging.DEBUG))
    return Container(
        settings=settings,
        event_bus=event_bus,
        product_repository=InMemoryProductRepository(
            default_currency=settings.default_currency,
        ),
        product_factory=ProductFactory(
            event_bus=event_bus,
            default_currency=settings.default_currency,
        ),
    )
