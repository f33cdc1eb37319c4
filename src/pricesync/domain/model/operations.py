"""Write operations accumulated by reconcilers and handed to the sync facility."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Final

from pricesync.domain.model.enums import EntityType, OperationAction

if TYPE_CHECKING:
    from pricesync.domain.model.pricing import PriceSet
    from pricesync.domain.model.primitives import ProductId, RuleId, StorageId

PRODUCT_PRICE_UPDATE: Final[str] = "product-price-update"
ADVANCED_PRICE_DELETE: Final[str] = "product-price-delete"
ADVANCED_PRICE_UPSERT: Final[str] = "product-price-upsert"


@dataclass(frozen=True, slots=True)
class ProductPriceRecord:
    """Replacement of a product's complete simple price set."""

    id: ProductId
    price: PriceSet


@dataclass(frozen=True, slots=True, kw_only=True)
class AdvancedPriceRecord:
    """Advanced price row to create (``id`` unset) or update in place."""

    product_id: ProductId
    rule_id: RuleId
    quantity_start: int
    quantity_end: int | None
    price: PriceSet
    id: StorageId | None = None


type UpsertRecord = ProductPriceRecord | AdvancedPriceRecord


@dataclass(frozen=True, slots=True)
class Upsert:
    key: str
    entity_type: EntityType
    records: tuple[UpsertRecord, ...]

    action: ClassVar[OperationAction] = OperationAction.UPSERT

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True, slots=True)
class Delete:
    key: str
    entity_type: EntityType
    keys: tuple[StorageId, ...]

    action: ClassVar[OperationAction] = OperationAction.DELETE

    def __len__(self) -> int:
        return len(self.keys)


type Operation = Upsert | Delete


@dataclass(slots=True)
class OperationLog:
    """Ordered operations submitted to the sync facility as one atomic batch."""

    _operations: list[Operation] = field(default_factory=list["Operation"])

    @property
    def operations(self) -> tuple[Operation, ...]:
        return tuple(self._operations)

    def append(self, operation: Operation) -> None:
        self._operations.append(operation)

    def extend(self, operations: Iterable[Operation]) -> None:
        self._operations.extend(operations)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)
