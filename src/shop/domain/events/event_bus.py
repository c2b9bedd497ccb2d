"""In-process publish/subscribe sink for domain events.

One bus is built by the composition root (or by each test) and handed to
every product that should publish.  Delivery is synchronous and happens in
subscription order on the caller's thread.
"""

from __future__ import annotations

import logging
from typing import Callable

from shop.domain.events.product_events import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class EventBus:

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    def unsubscribe(self, handler: EventHandler) -> None:
        """Remove every registration of *handler*; unknown handlers are ignored."""
        self._handlers = [h for h in self._handlers if h != handler]

    def emit(self, event: DomainEvent) -> None:
        """Deliver *event* to every subscriber.

        The mutation that produced the event has already been applied, so a
        subscriber that raises is logged and skipped; the remaining
        subscribers still receive the event.
        """
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Event handler %r failed for %s (product %s)",
                    handler,
                    event.name,
                    event.product_id,
                )

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)
