"""SQLAlchemy adapter package for pricesync."""

from __future__ import annotations

from .mappings import (
    PriceSetType,
    currency_table,
    mapper_registry,
    product_price_table,
    product_table,
)
from .repositories import (
    SqlAlchemyCurrencyRepository,
    SqlAlchemyOperationWriter,
    SqlAlchemyProductLookupRepository,
    SqlAlchemySnapshotRepository,
    SqlAlchemyStockRepository,
    UnsupportedOperationError,
)
from .sync import SqlAlchemySyncService
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "PriceSetType",
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyCurrencyRepository",
    "SqlAlchemyOperationWriter",
    "SqlAlchemyProductLookupRepository",
    "SqlAlchemySnapshotRepository",
    "SqlAlchemyStockRepository",
    "SqlAlchemySyncService",
    "StartupError",
    "UnsupportedOperationError",
    "currency_table",
    "is_started",
    "mapper_registry",
    "product_price_table",
    "product_table",
    "shutdown",
    "startup",
]
