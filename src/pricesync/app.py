"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pricesync.adapters.api import handle_price_update, handle_stock_update
from pricesync.adapters.notifications import LoggingAvailabilityNotifier
from pricesync.adapters.sqlalchemy import (
    SqlAlchemyCatalogUnitOfWork,
    SqlAlchemySyncService,
    is_started,
    startup,
)
from pricesync.config import get_reconciliation_config
from pricesync.domain.reconciliation import ReconciliationDriver

if TYPE_CHECKING:
    from pricesync.adapters.api import ApiResponse
    from pricesync.adapters.api.handlers import CurrencyLookup, Payload
    from pricesync.domain.ports import AvailabilityNotifier, SyncService
    from pricesync.domain.reconciliation import UnitOfWorkFactory


log = getLogger(__name__)


def build_driver(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    sync: SyncService | None = None,
    notifier: AvailabilityNotifier | None = None,
    version_id: str | None = None,
) -> ReconciliationDriver:
    """Wire the reconciliation driver, defaulting to the SQLAlchemy adapters."""

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyCatalogUnitOfWork
    config = get_reconciliation_config(version_id=version_id)
    return ReconciliationDriver(
        unit_of_work_factory=unit_of_work_factory,
        sync=sync or SqlAlchemySyncService(unit_of_work_factory),
        notifier=notifier or LoggingAvailabilityNotifier(),
        version_id=config.version_id,
    )


def update_prices(
    payload: Payload,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    sync: SyncService | None = None,
    notifier: AvailabilityNotifier | None = None,
    version_id: str | None = None,
    currency_ids: CurrencyLookup | None = None,
) -> ApiResponse:
    """Handle one price update request against the configured catalog."""

    driver = build_driver(
        unit_of_work_factory=unit_of_work_factory,
        sync=sync,
        notifier=notifier,
        version_id=version_id,
    )
    log.info("Starting price update for version %s", driver.version_id)
    return handle_price_update(payload, driver=driver, currency_ids=currency_ids)


def update_stock(
    payload: Payload,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    sync: SyncService | None = None,
    notifier: AvailabilityNotifier | None = None,
    version_id: str | None = None,
) -> ApiResponse:
    """Handle one stock update request against the configured catalog."""

    driver = build_driver(
        unit_of_work_factory=unit_of_work_factory,
        sync=sync,
        notifier=notifier,
        version_id=version_id,
    )
    log.info("Starting stock update for version %s", driver.version_id)
    return handle_stock_update(payload, driver=driver)
