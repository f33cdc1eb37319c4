"""Read-only view of persisted product state used for diffing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pricesync.domain.model.pricing import PriceSet

if TYPE_CHECKING:
    from pricesync.domain.model.pricing import AdvancedPriceTier
    from pricesync.domain.model.primitives import ProductId


@dataclass(frozen=True, slots=True, kw_only=True)
class ProductSnapshot:
    """Persisted state of one product at the start of a reconciliation pass.

    ``is_closeout`` and ``min_purchase`` are the effective values, i.e. already
    inherited from the parent product where the variant leaves them unset.
    Snapshots are never mutated; reconcilers compare them against submissions.
    """

    id: ProductId
    price: PriceSet = field(default_factory=PriceSet)
    advanced_prices: tuple[AdvancedPriceTier, ...] = ()
    stock: int = 0
    available: bool = True
    is_closeout: bool = False
    min_purchase: int = 1
