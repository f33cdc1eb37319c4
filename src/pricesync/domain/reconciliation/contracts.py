"""Result types returned by the reconciliation driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from pricesync.domain.model import ProductId, StockTransition

NO_CHANGES_REASON: Final[str] = "no changes detected"


@dataclass(frozen=True, slots=True)
class PriceUpdateResult:
    """Outcome of a price update for one product."""

    updated: bool
    reason: str | None = None

    @classmethod
    def changed(cls) -> PriceUpdateResult:
        return cls(updated=True)

    @classmethod
    def unchanged(cls) -> PriceUpdateResult:
        return cls(updated=False, reason=NO_CHANGES_REASON)


@dataclass(frozen=True, slots=True, kw_only=True)
class StockChange:
    """Applied stock change for one product and the transitions it triggered."""

    product_id: ProductId
    old_stock: int
    new_stock: int
    old_available: bool
    new_available: bool
    transitions: frozenset[StockTransition] = field(default_factory=frozenset["StockTransition"])


type PriceResultsById = dict[ProductId, PriceUpdateResult]
type StockResultsById = dict[ProductId, StockChange]
