"""Submitted update items, addressed by primary key or product number."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Protocol, Self

if TYPE_CHECKING:
    from pricesync.domain.model.pricing import AdvancedPriceTier, PriceSet
    from pricesync.domain.model.primitives import ProductId, ProductNumber


class UnresolvedReferenceError(LookupError):
    """Raised when a primary key is requested from a reference that has none."""


@dataclass(frozen=True, slots=True)
class ProductRef:
    """Reference to a product by primary key or by business key (product number).

    When both are given the primary key wins; the product number is then ignored.
    """

    id: ProductId | None = None
    product_number: ProductNumber | None = None

    def __post_init__(self) -> None:
        if self.id is None and self.product_number is None:
            raise ValueError("ProductRef requires an id or a product number")

    @classmethod
    def by_id(cls, product_id: ProductId) -> ProductRef:
        return cls(id=product_id)

    @classmethod
    def by_number(cls, product_number: ProductNumber) -> ProductRef:
        return cls(product_number=product_number)

    @property
    def is_resolved(self) -> bool:
        return self.id is not None


class AddressedUpdate(Protocol):
    """Structural contract shared by price and stock updates."""

    @property
    def ref(self) -> ProductRef: ...

    def with_product_id(self, product_id: ProductId) -> Self: ...


@dataclass(frozen=True, slots=True, kw_only=True)
class _UpdateItem:
    ref: ProductRef

    @property
    def product_id(self) -> ProductId:
        if self.ref.id is None:
            raise UnresolvedReferenceError(
                f"Update for product number {self.ref.product_number!r} is not resolved"
            )
        return self.ref.id

    def with_product_id(self, product_id: ProductId) -> Self:
        """Return a copy addressed purely by primary key."""
        return replace(self, ref=ProductRef.by_id(product_id))


@dataclass(frozen=True, slots=True, kw_only=True)
class PriceUpdate(_UpdateItem):
    """Price change for one product.

    ``prices`` of ``None`` leaves advanced prices untouched; an empty tuple is a
    request to remove all of them.
    """

    price: PriceSet | None = None
    prices: tuple[AdvancedPriceTier, ...] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class StockUpdate(_UpdateItem):
    """Stock change for one product, with an optional cache-invalidation threshold."""

    stock: int
    threshold: int | None = None
