"""Price value types: money, currency-keyed price sets and advanced price tiers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from decimal import Decimal

    from pricesync.domain.model.primitives import CurrencyId, RuleId, StorageId


@dataclass(frozen=True, slots=True, kw_only=True)
class Money:
    """Net/gross amount pair for one currency.

    ``list_price`` (strike-through) and ``regulation_price`` (regulatory reference)
    are nested amounts without their own currency; they inherit the currency of the
    price set entry that holds them.
    """

    net: Decimal
    gross: Decimal
    linked: bool = False
    list_price: Money | None = None
    regulation_price: Money | None = None


class PriceSet(Mapping["CurrencyId", Money]):
    """Immutable mapping from internal currency id to :class:`Money`."""

    __slots__ = ("_prices",)

    def __init__(
        self,
        prices: Mapping[CurrencyId, Money] | Iterable[tuple[CurrencyId, Money]] = (),
    ) -> None:
        self._prices: dict[CurrencyId, Money] = dict(prices)

    def __getitem__(self, currency_id: CurrencyId) -> Money:
        return self._prices[currency_id]

    def __iter__(self) -> Iterator[CurrencyId]:
        return iter(self._prices)

    def __len__(self) -> int:
        return len(self._prices)

    def __repr__(self) -> str:
        return f"PriceSet({self._prices!r})"


class TierIdentity(NamedTuple):
    """Slot occupied by an advanced price tier.

    Two tiers are the same slot iff all three parts match; the storage id plays no
    part in identity.
    """

    rule_id: RuleId
    quantity_start: int
    quantity_end: int | None


@dataclass(frozen=True, slots=True, kw_only=True)
class AdvancedPriceTier:
    """Quantity- and rule-scoped price override.

    ``storage_id`` is only known for tiers that are already persisted.
    """

    rule_id: RuleId
    price: PriceSet
    quantity_start: int = 1
    quantity_end: int | None = None
    storage_id: StorageId | None = None

    def __post_init__(self) -> None:
        if self.quantity_start < 1:
            raise ValueError("quantity_start must be at least 1")

    @property
    def identity(self) -> TierIdentity:
        return TierIdentity(self.rule_id, self.quantity_start, self.quantity_end)

    def with_storage_id(self, storage_id: StorageId) -> AdvancedPriceTier:
        return replace(self, storage_id=storage_id)
