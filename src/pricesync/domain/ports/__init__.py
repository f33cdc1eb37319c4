"""Domain port definitions for adapters."""

from __future__ import annotations

from .notification import AvailabilityNotifier
from .persistence import (
    CurrencyRepository,
    OperationWriter,
    ProductLookupRepository,
    SnapshotRepository,
    StockRepository,
)
from .sync import SyncService
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AvailabilityNotifier",
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "CurrencyRepository",
    "OperationWriter",
    "ProductLookupRepository",
    "RepositoryCollection",
    "SnapshotRepository",
    "StockRepository",
    "SyncService",
    "UnitOfWork",
]
