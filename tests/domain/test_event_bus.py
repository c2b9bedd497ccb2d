"""Unit tests for EventBus and the domain event records."""

import logging
from datetime import datetime

from shop.domain.events.event_bus import EventBus
from shop.domain.events.product_events import (
    ProductCreated,
    ProductStockChanged,
    ProductUpdated,
)
from shop.domain.model.value_objects import Money
from tests.fakes import ExplodingSubscriber, RecordingSubscriber, make_standard


def _event(product_id="p1"):
    return ProductStockChanged(product_id=product_id, old_stock=5, new_stock=3, delta=-2)


class TestEventBus:

    def test_delivers_in_subscription_order(self):
        bus = EventBus()
        seen = []
        bus.subscribe(lambda e: seen.append("first"))
        bus.subscribe(lambda e: seen.append("second"))
        bus.emit(_event())
        assert seen == ["first", "second"]

    def test_emit_without_subscribers_is_noop(self):
        EventBus().emit(_event())

    def test_unsubscribe(self):
        bus = EventBus()
        recorder = RecordingSubscriber()
        bus.subscribe(recorder)
        bus.unsubscribe(recorder)
        bus.emit(_event())
        assert recorder.events == []
        assert bus.subscriber_count == 0

    def test_unsubscribe_unknown_handler_is_ignored(self):
        bus = EventBus()
        bus.unsubscribe(RecordingSubscriber())
        assert bus.subscriber_count == 0

    def test_failing_subscriber_is_logged_and_skipped(self, caplog):
        bus = EventBus()
        exploding = ExplodingSubscriber()
        recorder = RecordingSubscriber()
        bus.subscribe(exploding)
        bus.subscribe(recorder)

        with caplog.at_level(logging.ERROR, logger="shop.domain.events.event_bus"):
            bus.emit(_event())

        assert exploding.calls == 1
        assert len(recorder.events) == 1
        assert "product.stock_changed" in caplog.text

    def test_failing_subscriber_does_not_undo_mutation(self):
        bus = EventBus()
        bus.subscribe(ExplodingSubscriber())
        product = make_standard(stock=5, event_bus=bus)
        product.reduce_stock(2)
        assert product.stock == 3

    def test_buses_are_independent(self):
        first, second = EventBus(), EventBus()
        recorder = RecordingSubscriber()
        first.subscribe(recorder)
        make_standard(event_bus=second)
        assert recorder.events == []


class TestDomainEvents:

    def test_event_names(self):
        assert ProductCreated.name == "product.created"
        assert ProductUpdated.name == "product.updated"
        assert ProductStockChanged.name == "product.stock_changed"

    def test_occurred_at_is_set(self):
        assert isinstance(_event().occurred_at, datetime)

    def test_to_dict_is_plain_data(self):
        event = ProductCreated(product_id="p1", product_name="Lamp", price=Money.of("3.50"))
        data = event.to_dict()
        assert data["event"] == "product.created"
        assert data["product_id"] == "p1"
        assert data["price"] == {"amount": "3.50", "currency": "USD"}
        assert isinstance(data["occurred_at"], str)
