"""Orchestrator for price and stock reconciliation.

The driver composes the reconciliation stages but does not prescribe concrete
adapters: persistence, the sync facility and the notifier are all ports.

Price flow: resolve -> load snapshots -> diff -> operation log -> sync facility.
Stock flow: resolve -> load snapshots -> apply inside one transaction -> commit
-> dispatch availability events.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from pricesync.domain.model import LIVE_VERSION_ID, OperationLog, is_live_version

from .contracts import PriceUpdateResult
from .events import emit_stock_events
from .price import reconcile_price
from .resolve import collapse_repeated_updates, resolve_identifiers
from .snapshot import load_snapshots
from .stock import reconcile_stock
from .tiers import reconcile_advanced_prices

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pricesync.domain.model import (
        Operation,
        PriceUpdate,
        ProductSnapshot,
        StockUpdate,
        VersionId,
    )
    from pricesync.domain.ports import AvailabilityNotifier, CatalogUnitOfWork, SyncService

    from .contracts import PriceResultsById, StockResultsById

type UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


log = getLogger(__name__)


def plan_price_update(update: PriceUpdate, snapshot: ProductSnapshot) -> list[Operation]:
    """Operations needed to bring ``snapshot`` in line with ``update``.

    The simple price is only considered when submitted. Advanced prices are
    replaced as a full set whenever ``prices`` is submitted, even when empty.
    """

    operations: list[Operation] = []
    if update.price is not None:
        upsert = reconcile_price(snapshot.id, update.price, snapshot)
        if upsert is not None:
            operations.append(upsert)
    if update.prices is not None:
        operations.extend(
            reconcile_advanced_prices(snapshot.id, update.prices, snapshot.advanced_prices)
        )
    return operations


@dataclass(slots=True)
class ReconciliationDriver:
    """Run one price or stock batch against the catalog."""

    unit_of_work_factory: UnitOfWorkFactory
    sync: SyncService
    notifier: AvailabilityNotifier
    version_id: VersionId = LIVE_VERSION_ID

    def update_prices(self, updates: Sequence[PriceUpdate]) -> PriceResultsById:
        """Diff ``updates`` against stored prices and submit the minimal operations."""

        with self.unit_of_work_factory() as uow:
            repositories = uow.repositories
            resolved = collapse_repeated_updates(
                resolve_identifiers(
                    updates,
                    lookup=partial(
                        repositories.products.ids_by_product_number, version_id=self.version_id
                    ),
                )
            )
            snapshots = load_snapshots(
                (update.product_id for update in resolved),
                lookup=partial(repositories.snapshots.snapshots_by_id, version_id=self.version_id),
            )

        operations = OperationLog()
        results: PriceResultsById = {}
        for update in resolved:
            snapshot = snapshots.get(update.product_id)
            if snapshot is None:
                log.debug("Skipping price update for unknown product %s", update.product_id)
                continue
            item_operations = plan_price_update(update, snapshot)
            operations.extend(item_operations)
            results[update.product_id] = (
                PriceUpdateResult.changed() if item_operations else PriceUpdateResult.unchanged()
            )

        if len(operations) > 0:
            self.sync(operations, version_id=self.version_id)

        log.info(
            "Price batch finished: submitted=%s, resolved=%s, updated=%s, operations=%s",
            len(updates),
            len(resolved),
            sum(1 for result in results.values() if result.updated),
            len(operations),
        )
        return results

    def update_stock(self, updates: Sequence[StockUpdate]) -> StockResultsById:
        """Apply stock ``updates`` in one transaction, then dispatch availability events.

        Only the live catalog partition is touched; any other working version
        yields an empty result.
        """

        if not is_live_version(self.version_id):
            log.info("Ignoring stock batch for non-live version %s", self.version_id)
            return {}

        with self.unit_of_work_factory() as uow:
            repositories = uow.repositories
            resolved = resolve_identifiers(
                updates,
                lookup=partial(
                    repositories.products.ids_by_product_number, version_id=self.version_id
                ),
            )
            snapshots = load_snapshots(
                (update.product_id for update in resolved),
                lookup=partial(
                    repositories.snapshots.snapshots_by_id,
                    version_id=self.version_id,
                    include_advanced_prices=False,
                ),
            )
            results = reconcile_stock(
                resolved,
                snapshots,
                write_stock=partial(repositories.stock.write_stock, version_id=self.version_id),
            )
            uow.commit()

        # dispatch happens outside the transaction; a crash here loses the events
        emit_stock_events(results.values(), self.notifier)

        log.info(
            "Stock batch finished: submitted=%s, resolved=%s, changed=%s",
            len(updates),
            len(resolved),
            len(results),
        )
        return results
