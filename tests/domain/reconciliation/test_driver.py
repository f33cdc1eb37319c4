from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pricesync.domain.model import LIVE_VERSION_ID, Delete, EntityType, Upsert
from pricesync.domain.reconciliation import (
    NO_CHANGES_REASON,
    PriceUpdateResult,
    ReconciliationDriver,
)
from tests.helpers.catalog import (
    RULE_A,
    RULE_B,
    FakeSyncService,
    RecordingNotifier,
    make_snapshot,
    price_set,
    price_update,
    stock_update,
    tier,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from tests.helpers.catalog import InMemoryCatalog, InMemoryUnitOfWork

DRAFT_VERSION_ID = "ffffffffffffffffffffffffffffffff"


@pytest.fixture
def sync() -> FakeSyncService:
    return FakeSyncService()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def driver(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    sync: FakeSyncService,
    notifier: RecordingNotifier,
) -> ReconciliationDriver:
    return ReconciliationDriver(
        unit_of_work_factory=memory_unit_of_work,
        sync=sync,
        notifier=notifier,
    )


def test_price_batch_reports_changed_and_unchanged_products(
    driver: ReconciliationDriver,
    catalog: InMemoryCatalog,
    sync: FakeSyncService,
) -> None:
    catalog.add(make_snapshot("p1", price=price_set(10)))
    catalog.add(make_snapshot("p2", price=price_set(20)), product_number="SW-2")

    results = driver.update_prices(
        [
            price_update("p1", price=price_set(11)),
            price_update(product_number="SW-2", price=price_set(20)),
        ]
    )

    assert results == {
        "p1": PriceUpdateResult(updated=True),
        "p2": PriceUpdateResult(updated=False, reason=NO_CHANGES_REASON),
    }
    [(operations, version_id)] = sync.calls
    assert version_id == LIVE_VERSION_ID
    assert [(type(op), op.entity_type) for op in operations] == [(Upsert, EntityType.PRODUCT)]


def test_price_batch_without_changes_skips_sync(
    driver: ReconciliationDriver,
    catalog: InMemoryCatalog,
    sync: FakeSyncService,
) -> None:
    catalog.add(make_snapshot("p1", price=price_set(10)))

    results = driver.update_prices([price_update("p1", price=price_set(10))])

    assert results["p1"].reason == NO_CHANGES_REASON
    assert sync.calls == []


def test_price_batch_combines_all_products_into_one_operation_log(
    driver: ReconciliationDriver,
    catalog: InMemoryCatalog,
    sync: FakeSyncService,
) -> None:
    catalog.add(make_snapshot("p1", advanced_prices=[tier(RULE_A, 1, storage_id="s1")]))
    catalog.add(make_snapshot("p2", price=price_set(1)))

    driver.update_prices(
        [
            price_update("p1", prices=[tier(RULE_B, 2)]),
            price_update("p2", price=price_set(2)),
        ]
    )

    assert len(sync.calls) == 1
    assert [type(operation) for operation in sync.operations] == [Delete, Upsert, Upsert]


def test_repeated_price_items_plan_only_the_last_submission(
    driver: ReconciliationDriver,
    catalog: InMemoryCatalog,
    sync: FakeSyncService,
) -> None:
    catalog.add(
        make_snapshot("p1", advanced_prices=[tier(RULE_A, 1, storage_id="s1")]),
        product_number="SW-1",
    )

    results = driver.update_prices(
        [
            price_update(product_number="SW-1", prices=[tier(RULE_A, 5, quantity_start=50)]),
            price_update(product_number="SW-1", prices=[tier(RULE_B, 6, quantity_start=60)]),
        ]
    )

    assert results == {"p1": PriceUpdateResult.changed()}
    delete, upsert = sync.operations
    assert isinstance(delete, Delete)
    assert delete.keys == ("s1",)
    assert isinstance(upsert, Upsert)
    assert [(record.rule_id, record.quantity_start) for record in upsert.records] == [
        (RULE_B, 60)
    ]


def test_unknown_products_have_no_result_entry(
    driver: ReconciliationDriver,
    catalog: InMemoryCatalog,
) -> None:
    results = driver.update_prices(
        [
            price_update("ghost", price=price_set(1)),
            price_update(product_number="missing", price=price_set(1)),
        ]
    )

    assert results == {}
    assert catalog.lookup_calls == [("missing",)]
    assert catalog.snapshot_calls == [("ghost",)]


def test_duplicate_product_numbers_load_one_snapshot(
    driver: ReconciliationDriver,
    catalog: InMemoryCatalog,
) -> None:
    catalog.add(make_snapshot("p1", stock=1), product_number="SW-1")

    driver.update_stock(
        [
            stock_update(product_number="SW-1", stock=2),
            stock_update(product_number="SW-1", stock=3),
        ]
    )

    assert catalog.lookup_calls == [("SW-1",)]
    assert catalog.snapshot_calls == [("p1",)]


def test_stock_batch_commits_then_notifies(
    driver: ReconciliationDriver,
    catalog: InMemoryCatalog,
    notifier: RecordingNotifier,
) -> None:
    catalog.add(make_snapshot("p1", stock=10, is_closeout=True, min_purchase=5))
    catalog.add(make_snapshot("p2", stock=3, available=False, is_closeout=True, min_purchase=5))
    catalog.add(make_snapshot("p3", stock=4))

    results = driver.update_stock(
        [
            stock_update("p1", stock=3),
            stock_update("p2", stock=10),
            stock_update("p3", stock=4, threshold=2),
        ]
    )

    assert sorted(results) == ["p1", "p2"]
    assert catalog.stock_writes == [("p1", 3, False), ("p2", 10, True)]
    assert catalog.commits == 1
    assert notifier.no_longer_available == [("p1",)]
    assert notifier.cache_invalidations == [("p2",)]


def test_stock_batch_on_non_live_version_is_ignored(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    catalog: InMemoryCatalog,
    sync: FakeSyncService,
    notifier: RecordingNotifier,
) -> None:
    catalog.add(make_snapshot("p1", stock=1))
    driver = ReconciliationDriver(
        unit_of_work_factory=memory_unit_of_work,
        sync=sync,
        notifier=notifier,
        version_id=DRAFT_VERSION_ID,
    )

    assert driver.update_stock([stock_update("p1", stock=5)]) == {}
    assert catalog.stock_writes == []
    assert catalog.lookup_calls == catalog.snapshot_calls == []


def test_price_batch_on_draft_version_passes_version_to_sync(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    catalog: InMemoryCatalog,
    sync: FakeSyncService,
    notifier: RecordingNotifier,
) -> None:
    catalog.add(make_snapshot("p1"))
    driver = ReconciliationDriver(
        unit_of_work_factory=memory_unit_of_work,
        sync=sync,
        notifier=notifier,
        version_id=DRAFT_VERSION_ID,
    )

    driver.update_prices([price_update("p1", price=price_set(1))])

    assert [version_id for _, version_id in sync.calls] == [DRAFT_VERSION_ID]


def test_failed_stock_write_rolls_back_and_sends_no_events(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    catalog: InMemoryCatalog,
    sync: FakeSyncService,
    notifier: RecordingNotifier,
) -> None:
    catalog.add(make_snapshot("p1", stock=10, is_closeout=True, min_purchase=5))
    catalog.stock_error = RuntimeError("store unavailable")
    driver = ReconciliationDriver(
        unit_of_work_factory=memory_unit_of_work, sync=sync, notifier=notifier
    )

    with pytest.raises(RuntimeError, match="store unavailable"):
        driver.update_stock([stock_update("p1", stock=1)])

    assert catalog.rollbacks == 1
    assert catalog.commits == 0
    assert notifier.no_longer_available == []
