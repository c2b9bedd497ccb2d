"""Tests for environment-based settings and the composition root."""

import logging
from decimal import Decimal

import pytest

from shop.domain.events.product_events import ProductUpdated
from shop.domain.model.product import ProductVariant
from shop.domain.model.value_objects import Money, ProductId
from shop.infrastructure.bootstrap import build_container
from shop.infrastructure.config import Settings
from shop.infrastructure.logging_subscriber import LoggingEventSubscriber
from tests.fakes import make_standard

SHOP_VARS = [
    "SHOP_DEFAULT_CURRENCY",
    "SHOP_GENERAL_TAX_RATE",
    "SHOP_DIGITAL_TAX_RATE",
    "SHOP_CART_MAX_LINES",
    "SHOP_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so teardown also undoes anything a .env file loaded
    for name in SHOP_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings.from_env(dotenv=False)
        assert settings.default_currency == "USD"
        assert settings.general_tax_rate == Decimal("21")
        assert settings.digital_tax_rate == Decimal("10")
        assert settings.cart_max_lines == 10
        assert settings.log_level == "INFO"

    def test_reads_environment(self, clean_env):
        clean_env.setenv("SHOP_DEFAULT_CURRENCY", " eur ")
        clean_env.setenv("SHOP_GENERAL_TAX_RATE", "19.5")
        clean_env.setenv("SHOP_DIGITAL_TAX_RATE", "7")
        clean_env.setenv("SHOP_CART_MAX_LINES", "3")
        clean_env.setenv("SHOP_LOG_LEVEL", "debug")

        settings = Settings.from_env(dotenv=False)

        assert settings.default_currency == "EUR"
        assert settings.general_tax_rate == Decimal("19.5")
        assert settings.digital_tax_rate == Decimal("7")
        assert settings.cart_max_lines == 3
        assert settings.log_level == "DEBUG"

    def test_blank_value_falls_back_to_default(self, clean_env):
        clean_env.setenv("SHOP_CART_MAX_LINES", "  ")
        assert Settings.from_env(dotenv=False).cart_max_lines == 10

    def test_invalid_rate_names_variable(self, clean_env):
        clean_env.setenv("SHOP_GENERAL_TAX_RATE", "lots")
        with pytest.raises(ValueError, match="SHOP_GENERAL_TAX_RATE"):
            Settings.from_env(dotenv=False)

    def test_invalid_integer_names_variable(self, clean_env):
        clean_env.setenv("SHOP_CART_MAX_LINES", "ten")
        with pytest.raises(ValueError, match="SHOP_CART_MAX_LINES"):
            Settings.from_env(dotenv=False)

    def test_reads_dotenv_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("SHOP_CART_MAX_LINES=4\n")
        clean_env.chdir(tmp_path)
        assert Settings.from_env().cart_max_lines == 4


class TestContainer:

    def test_wires_settings_through(self):
        settings = Settings(default_currency="EUR", cart_max_lines=2, general_tax_rate=Decimal("5"))
        container = build_container(settings, log_events=False)

        cart = container.new_cart()
        assert cart.max_lines == 2
        assert cart.currency == "EUR"
        assert container.settings.general_tax_rate == Decimal("5")
        assert container.product_repository.default_currency == "EUR"

        product = container.product_factory.create(
            "STANDARD", {"name": "Mug", "description": "Mug", "price": "3"}
        )
        assert product.price.currency == "EUR"

    @pytest.mark.asyncio
    async def test_unknown_product_is_priced_in_configured_currency(self):
        container = build_container(Settings(default_currency="EUR"), log_events=False)
        product = await container.product_repository.find_by_id(ProductId.create())
        assert product.variant is ProductVariant.NULL
        assert product.price == Money.zero("EUR")

    def test_each_container_has_its_own_bus(self):
        first = build_container(Settings(), log_events=False)
        second = build_container(Settings(), log_events=False)
        assert first.event_bus is not second.event_bus
        assert first.event_bus.subscriber_count == 0

    def test_event_logging_subscriber(self, caplog):
        container = build_container(Settings(), log_events=True)
        assert container.event_bus.subscriber_count == 1
        with caplog.at_level(logging.DEBUG, logger="shop.events"):
            make_standard(name="Logged", event_bus=container.event_bus)
        assert "product.created" in caplog.text
        assert "Logged" in caplog.text


class TestLoggingEventSubscriber:

    def test_logs_at_configured_level(self, caplog):
        subscriber = LoggingEventSubscriber(level=logging.WARNING)
        event = ProductUpdated(product_id="p1", field="name", old_value="a", new_value="b")

        with caplog.at_level(logging.WARNING, logger="shop.events"):
            subscriber(event)

        assert caplog.records[0].levelno == logging.WARNING
        assert "product.updated" in caplog.records[0].getMessage()
