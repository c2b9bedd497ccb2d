"""Standard catalog product: discount, featured flag and tags."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from shop.domain.model.product import PromotedProduct, ProductVariant

if TYPE_CHECKING:
    from shop.domain.service.pricing import ProductVisitor

T = TypeVar("T")


class StandardProduct(PromotedProduct):

    variant = ProductVariant.STANDARD

    def accept(self, visitor: ProductVisitor[T]) -> T:
        return visitor.visit_standard(self)

    def __repr__(self) -> str:
        return (
            f"StandardProduct(id={self.id}, name={self.name!r}, price={self.price}, "
            f"discount={self.discount}%, stock={self.stock})"
        )
