"""Digital product: downloadable file sold without physical stock limits.

A digital product may carry the ``UNLIMITED_STOCK`` sentinel (-1).  While
it does, reductions and increases leave the level at -1 and the product
is always available.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from shop.domain.exceptions import ValidationError
from shop.domain.model.product import (
    UNLIMITED_CAPABLE_STOCK,
    DiscountedProduct,
    ProductVariant,
)

if TYPE_CHECKING:
    from shop.domain.service.pricing import ProductVisitor

T = TypeVar("T")


class DigitalFormat(Enum):
    PDF = "PDF"
    EPUB = "EPUB"
    MP3 = "MP3"
    MP4 = "MP4"
    ZIP = "ZIP"
    OTHER = "OTHER"


def _coerce_format(value: DigitalFormat | str) -> DigitalFormat:
    try:
        return DigitalFormat(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown digital format: {value!r}") from exc


def _validate_size(size_mb: int | float | Decimal) -> None:
    if isinstance(size_mb, bool) or not isinstance(size_mb, (int, float, Decimal)):
        raise ValidationError(f"Size must be a number, got {size_mb!r}")
    if not Decimal(str(size_mb)).is_finite():
        raise ValidationError(f"Size must be finite, got {size_mb!r}")
    if size_mb < 0:
        raise ValidationError("Size cannot be negative")


def _validate_download_url(url: str) -> None:
    if not isinstance(url, str) or not url.strip():
        raise ValidationError("A digital product requires a download URL")


class DigitalProduct(DiscountedProduct):

    variant = ProductVariant.DIGITAL
    stock_policy = UNLIMITED_CAPABLE_STOCK

    def __init__(
        self,
        *args: Any,
        format: DigitalFormat | str,
        size_mb: int | float | Decimal,
        download_url: str,
        **kwargs: Any,
    ) -> None:
        fmt = _coerce_format(format)
        _validate_size(size_mb)
        _validate_download_url(download_url)
        self._format = fmt
        self._size_mb = size_mb
        self._download_url = download_url
        super().__init__(*args, **kwargs)

    @property
    def format(self) -> DigitalFormat:
        return self._format

    @property
    def size_mb(self) -> int | float | Decimal:
        return self._size_mb

    @property
    def download_url(self) -> str:
        return self._download_url

    def set_format(self, format: DigitalFormat | str) -> None:
        self._change("format", _coerce_format(format))

    def set_size_mb(self, size_mb: int | float | Decimal) -> None:
        _validate_size(size_mb)
        self._change("size_mb", size_mb)

    def set_download_url(self, download_url: str) -> None:
        _validate_download_url(download_url)
        self._change("download_url", download_url)

    def accept(self, visitor: ProductVisitor[T]) -> T:
        return visitor.visit_digital(self)

    def __repr__(self) -> str:
        return (
            f"DigitalProduct(id={self.id}, name={self.name!r}, format={self._format.value}, "
            f"size={self._size_mb}MB, price={self.price}, discount={self.discount}%)"
        )
