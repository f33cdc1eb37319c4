"""Ports for reading and writing persisted catalog state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection

    from pricesync.domain.model import (
        CurrencyId,
        Operation,
        ProductId,
        ProductNumber,
        ProductSnapshot,
        VersionId,
    )


@runtime_checkable
class ProductLookupRepository(Protocol):
    """Resolve business keys to primary keys within one catalog version."""

    def ids_by_product_number(
        self,
        product_numbers: Collection[ProductNumber],
        *,
        version_id: VersionId,
    ) -> dict[ProductNumber, ProductId]: ...


@runtime_checkable
class SnapshotRepository(Protocol):
    """Load diffable product state for a batch of primary keys."""

    def snapshots_by_id(
        self,
        product_ids: Collection[ProductId],
        *,
        version_id: VersionId,
        include_advanced_prices: bool = True,
    ) -> dict[ProductId, ProductSnapshot]: ...


@runtime_checkable
class StockRepository(Protocol):
    """Persist stock together with the availability derived from it."""

    def write_stock(
        self,
        product_id: ProductId,
        *,
        stock: int,
        available: bool,
        version_id: VersionId,
    ) -> None: ...


@runtime_checkable
class CurrencyRepository(Protocol):
    """Translate ISO currency codes into internal currency ids."""

    def ids_by_iso_code(self) -> dict[str, CurrencyId]: ...


@runtime_checkable
class OperationWriter(Protocol):
    """Apply one sync operation inside the current transaction."""

    def apply(self, operation: Operation, *, version_id: VersionId) -> None: ...
