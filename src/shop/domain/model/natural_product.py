"""Natural product: organic food, supplements, natural cosmetics and the like.

Besides everything a standard product has, a natural product lists what it
is made of and what it is good for.  Both lists are required and fixed at
construction time.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, TypeVar

from shop.domain.exceptions import ValidationError
from shop.domain.model.product import PromotedProduct, ProductVariant

if TYPE_CHECKING:
    from shop.domain.service.pricing import ProductVisitor

T = TypeVar("T")


class NaturalProductType(Enum):
    ORGANIC_FOOD = "ORGANIC_FOOD"
    NATURAL_SUPPLEMENT = "NATURAL_SUPPLEMENT"
    NATURAL_COSMETIC = "NATURAL_COSMETIC"
    HOME_PRODUCT = "HOME_PRODUCT"
    BOOK_RESOURCE = "BOOK_RESOURCE"


def _required_list(items: Iterable[str] | None, what: str) -> tuple[str, ...]:
    values = tuple(items or ())
    if not values:
        raise ValidationError(f"A natural product must list at least one {what}")
    if any(not isinstance(v, str) or not v.strip() for v in values):
        raise ValidationError(f"Natural product {what} entries cannot be empty")
    return values


class NaturalProduct(PromotedProduct):

    variant = ProductVariant.NATURAL

    def __init__(
        self,
        *args: Any,
        product_type: NaturalProductType | str,
        ingredients: Iterable[str],
        benefits: Iterable[str],
        certifications: Iterable[str] = (),
        **kwargs: Any,
    ) -> None:
        try:
            kind = NaturalProductType(product_type)
        except ValueError as exc:
            raise ValidationError(
                f"Unknown natural product type: {product_type!r}"
            ) from exc
        self._product_type = kind
        self._ingredients = _required_list(ingredients, "ingredient")
        self._benefits = _required_list(benefits, "benefit")
        self._certifications = tuple(certifications or ())
        super().__init__(*args, **kwargs)

    @property
    def product_type(self) -> NaturalProductType:
        return self._product_type

    @property
    def ingredients(self) -> list[str]:
        return list(self._ingredients)

    @property
    def benefits(self) -> list[str]:
        return list(self._benefits)

    @property
    def certifications(self) -> list[str]:
        return list(self._certifications)

    def accept(self, visitor: ProductVisitor[T]) -> T:
        return visitor.visit_natural(self)
