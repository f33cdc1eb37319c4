"""Builders and in-memory fakes for catalog reconciliation tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Literal

from pricesync.domain.model import (
    AdvancedPriceTier,
    Money,
    OperationLog,
    PriceSet,
    PriceUpdate,
    ProductRef,
    ProductSnapshot,
    StockUpdate,
)
from pricesync.domain.ports import CatalogRepositories

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from types import TracebackType

    from pricesync.domain.model import (
        CurrencyId,
        Operation,
        ProductId,
        ProductNumber,
        VersionId,
    )

EUR: CurrencyId = "b7d2554b0ce847cd82f3ac9bd1c0dfca"
USD: CurrencyId = "3f1c2a7e9b0d4e6f8a5c1b2d3e4f5a6b"
CURRENCY_IDS: dict[str, CurrencyId] = {"EUR": EUR, "USD": USD}

RULE_A = "a0000000000000000000000000000001"
RULE_B = "b0000000000000000000000000000002"


def money(
    net: str | int,
    gross: str | int | None = None,
    *,
    linked: bool = False,
    list_price: Money | None = None,
    regulation_price: Money | None = None,
) -> Money:
    return Money(
        net=Decimal(str(net)),
        gross=Decimal(str(gross if gross is not None else net)),
        linked=linked,
        list_price=list_price,
        regulation_price=regulation_price,
    )


def price_set(
    net: str | int,
    gross: str | int | None = None,
    *,
    currency: CurrencyId = EUR,
) -> PriceSet:
    return PriceSet({currency: money(net, gross)})


def tier(
    rule_id: str,
    net: str | int,
    *,
    quantity_start: int = 1,
    quantity_end: int | None = None,
    storage_id: str | None = None,
) -> AdvancedPriceTier:
    return AdvancedPriceTier(
        rule_id=rule_id,
        price=price_set(net),
        quantity_start=quantity_start,
        quantity_end=quantity_end,
        storage_id=storage_id,
    )


def price_update(
    product_id: ProductId | None = None,
    *,
    product_number: ProductNumber | None = None,
    price: PriceSet | None = None,
    prices: Sequence[AdvancedPriceTier] | None = None,
) -> PriceUpdate:
    return PriceUpdate(
        ref=ProductRef(id=product_id, product_number=product_number),
        price=price,
        prices=tuple(prices) if prices is not None else None,
    )


def stock_update(
    product_id: ProductId | None = None,
    *,
    stock: int,
    product_number: ProductNumber | None = None,
    threshold: int | None = None,
) -> StockUpdate:
    return StockUpdate(
        ref=ProductRef(id=product_id, product_number=product_number),
        stock=stock,
        threshold=threshold,
    )


@dataclass
class InMemoryCatalog:
    """Catalog state shared by the in-memory repositories of one test."""

    snapshots: dict[ProductId, ProductSnapshot] = field(default_factory=dict)
    product_numbers: dict[ProductNumber, ProductId] = field(default_factory=dict)
    currencies: dict[str, CurrencyId] = field(default_factory=lambda: dict(CURRENCY_IDS))
    lookup_calls: list[tuple[ProductNumber, ...]] = field(default_factory=list)
    snapshot_calls: list[tuple[ProductId, ...]] = field(default_factory=list)
    stock_writes: list[tuple[ProductId, int, bool]] = field(default_factory=list)
    applied: list[Operation] = field(default_factory=list)
    stock_error: Exception | None = None
    commits: int = 0
    rollbacks: int = 0

    def add(
        self,
        snapshot: ProductSnapshot,
        *,
        product_number: ProductNumber | None = None,
    ) -> None:
        self.snapshots[snapshot.id] = snapshot
        if product_number is not None:
            self.product_numbers[product_number] = snapshot.id


class InMemoryProductLookup:
    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog

    def ids_by_product_number(
        self,
        product_numbers: Collection[ProductNumber],
        *,
        version_id: VersionId,
    ) -> dict[ProductNumber, ProductId]:
        _ = version_id
        self.catalog.lookup_calls.append(tuple(product_numbers))
        return {
            number: self.catalog.product_numbers[number]
            for number in product_numbers
            if number in self.catalog.product_numbers
        }


class InMemorySnapshots:
    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog

    def snapshots_by_id(
        self,
        product_ids: Collection[ProductId],
        *,
        version_id: VersionId,
        include_advanced_prices: bool = True,
    ) -> dict[ProductId, ProductSnapshot]:
        _ = version_id, include_advanced_prices
        self.catalog.snapshot_calls.append(tuple(product_ids))
        return {
            product_id: self.catalog.snapshots[product_id]
            for product_id in product_ids
            if product_id in self.catalog.snapshots
        }


class InMemoryStock:
    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog

    def write_stock(
        self,
        product_id: ProductId,
        *,
        stock: int,
        available: bool,
        version_id: VersionId,
    ) -> None:
        _ = version_id
        if self.catalog.stock_error is not None:
            raise self.catalog.stock_error
        self.catalog.stock_writes.append((product_id, stock, available))


class InMemoryCurrencies:
    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog

    def ids_by_iso_code(self) -> dict[str, CurrencyId]:
        return dict(self.catalog.currencies)


class RecordingOperationWriter:
    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog

    def apply(self, operation: Operation, *, version_id: VersionId) -> None:
        _ = version_id
        self.catalog.applied.append(operation)


class InMemoryUnitOfWork:
    """Unit of work over an :class:`InMemoryCatalog`."""

    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog
        self._repositories = CatalogRepositories(
            products=InMemoryProductLookup(catalog),
            snapshots=InMemorySnapshots(catalog),
            stock=InMemoryStock(catalog),
            currencies=InMemoryCurrencies(catalog),
            operations=RecordingOperationWriter(catalog),
        )

    @property
    def repositories(self) -> CatalogRepositories:
        return self._repositories

    def __enter__(self) -> InMemoryUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.catalog.commits += 1

    def rollback(self) -> None:
        self.catalog.rollbacks += 1


@dataclass
class FakeSyncService:
    """Records each submitted operation log instead of applying it."""

    calls: list[tuple[tuple[Operation, ...], VersionId]] = field(default_factory=list)

    def __call__(self, operations: OperationLog, *, version_id: VersionId) -> None:
        self.calls.append((operations.operations, version_id))

    @property
    def operations(self) -> list[Operation]:
        return [operation for batch, _ in self.calls for operation in batch]


@dataclass
class RecordingNotifier:
    no_longer_available: list[tuple[ProductId, ...]] = field(default_factory=list)
    cache_invalidations: list[tuple[ProductId, ...]] = field(default_factory=list)

    def product_no_longer_available(self, product_ids: Sequence[ProductId]) -> None:
        self.no_longer_available.append(tuple(product_ids))

    def invalidate_product_cache(self, product_ids: Sequence[ProductId]) -> None:
        self.cache_invalidations.append(tuple(product_ids))


def make_snapshot(
    product_id: ProductId,
    *,
    price: PriceSet | None = None,
    advanced_prices: Sequence[AdvancedPriceTier] = (),
    stock: int = 0,
    available: bool = True,
    is_closeout: bool = False,
    min_purchase: int = 1,
) -> ProductSnapshot:
    return ProductSnapshot(
        id=product_id,
        price=price if price is not None else PriceSet(),
        advanced_prices=tuple(advanced_prices),
        stock=stock,
        available=available,
        is_closeout=is_closeout,
        min_purchase=min_purchase,
    )
