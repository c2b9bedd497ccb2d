"""Event subscriber that writes every domain event to the log."""

from __future__ import annotations

import logging

from shop.domain.events.product_events import DomainEvent

logger = logging.getLogger("shop.events")


class LoggingEventSubscriber:

    def __init__(self, level: int = logging.INFO) -> None:
        self._level = level

    def __call__(self, event: DomainEvent) -> None:
        logger.log(self._level, "%s %s", event.name, event.to_dict())
