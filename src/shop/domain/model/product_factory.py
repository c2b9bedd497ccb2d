"""Product factory — builds a catalog variant from a tag and a plain payload.

The factory only fills in defaults; every business rule is enforced by the
variant's constructor.  New variants are registered here and nowhere else.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from shop.domain.events.event_bus import EventBus
from shop.domain.exceptions import UnsupportedVariant
from shop.domain.model.digital_product import DigitalFormat, DigitalProduct
from shop.domain.model.natural_product import NaturalProduct
from shop.domain.model.product import UNLIMITED_STOCK, Product, ProductVariant
from shop.domain.model.standard_product import StandardProduct
from shop.domain.model.value_objects import DEFAULT_CURRENCY, Money, ProductId

ProductBuilder = Callable[[Mapping[str, Any]], Product]


class ProductFactory:

    def __init__(
        self,
        event_bus: EventBus | None = None,
        default_currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._event_bus = event_bus
        self._default_currency = default_currency
        self._builders: dict[ProductVariant, ProductBuilder] = {
            ProductVariant.STANDARD: self._build_standard,
            ProductVariant.DIGITAL: self._build_digital,
            ProductVariant.NATURAL: self._build_natural,
        }

    def register(self, variant: ProductVariant, builder: ProductBuilder) -> None:
        """Register (or replace) the builder used for *variant*."""
        self._builders[variant] = builder

    def create(self, variant: ProductVariant | str, payload: Mapping[str, Any]) -> Product:
        """Create a new product of the given variant.

        ``variant`` may be the enum member or its tag, in any case.
        Raises UnsupportedVariant for tags without a registered builder.
        """
        builder = self._builders.get(self._resolve(variant))
        if builder is None:
            raise UnsupportedVariant(f"Unsupported product variant: {variant}")
        return builder(payload)

    @property
    def supported_variants(self) -> list[ProductVariant]:
        return list(self._builders)

    # --- Builders -------------------------------------------------------------

    def _build_standard(self, data: Mapping[str, Any]) -> StandardProduct:
        return StandardProduct(
            *self._common(data, default_stock=0),
            discount=data.get("discount", 0),
            featured=data.get("featured", False),
            tags=data.get("tags") or [],
            event_bus=self._event_bus,
        )

    def _build_digital(self, data: Mapping[str, Any]) -> DigitalProduct:
        return DigitalProduct(
            *self._common(data, default_stock=UNLIMITED_STOCK),
            format=data.get("format", DigitalFormat.OTHER),
            size_mb=data.get("size_mb", 0),
            download_url=data.get("download_url"),
            discount=data.get("discount", 0),
            event_bus=self._event_bus,
        )

    def _build_natural(self, data: Mapping[str, Any]) -> NaturalProduct:
        return NaturalProduct(
            *self._common(data, default_stock=0),
            product_type=data.get("product_type"),
            ingredients=data.get("ingredients") or [],
            benefits=data.get("benefits") or [],
            certifications=data.get("certifications") or [],
            discount=data.get("discount", 0),
            featured=data.get("featured", False),
            tags=data.get("tags") or [],
            event_bus=self._event_bus,
        )

    # --- Internal helpers -----------------------------------------------------

    def _common(self, data: Mapping[str, Any], default_stock: int) -> tuple[Any, ...]:
        raw_id = data.get("id")
        return (
            ProductId.from_string(raw_id) if raw_id else ProductId.create(),
            data.get("name"),
            data.get("description"),
            Money.of(data.get("price"), data.get("currency") or self._default_currency),
            data.get("stock", default_stock),
            data.get("category_id", ""),
            data.get("image_url") or "",
        )

    @staticmethod
    def _resolve(variant: ProductVariant | str) -> ProductVariant | None:
        if isinstance(variant, ProductVariant):
            return variant
        if isinstance(variant, str):
            try:
                return ProductVariant(variant.strip().upper())
            except ValueError:
                return None
        return None
