"""Public domain model surface."""

from __future__ import annotations

from pricesync.domain.model.enums import EntityType, OperationAction, StockTransition
from pricesync.domain.model.operations import (
    ADVANCED_PRICE_DELETE,
    ADVANCED_PRICE_UPSERT,
    PRODUCT_PRICE_UPDATE,
    AdvancedPriceRecord,
    Delete,
    Operation,
    OperationLog,
    ProductPriceRecord,
    Upsert,
    UpsertRecord,
)
from pricesync.domain.model.pricing import AdvancedPriceTier, Money, PriceSet, TierIdentity
from pricesync.domain.model.primitives import (
    LIVE_VERSION_ID,
    CurrencyId,
    ProductId,
    ProductNumber,
    RuleId,
    StorageId,
    VersionId,
    is_live_version,
)
from pricesync.domain.model.snapshot import ProductSnapshot
from pricesync.domain.model.updates import (
    AddressedUpdate,
    PriceUpdate,
    ProductRef,
    StockUpdate,
    UnresolvedReferenceError,
)

__all__ = [  # noqa: RUF022
    # primitives
    "LIVE_VERSION_ID",
    "CurrencyId",
    "ProductId",
    "ProductNumber",
    "RuleId",
    "StorageId",
    "VersionId",
    "is_live_version",
    # enums
    "EntityType",
    "OperationAction",
    "StockTransition",
    # pricing
    "AdvancedPriceTier",
    "Money",
    "PriceSet",
    "TierIdentity",
    # updates
    "AddressedUpdate",
    "PriceUpdate",
    "ProductRef",
    "StockUpdate",
    "UnresolvedReferenceError",
    # snapshot
    "ProductSnapshot",
    # operations
    "ADVANCED_PRICE_DELETE",
    "ADVANCED_PRICE_UPSERT",
    "PRODUCT_PRICE_UPDATE",
    "AdvancedPriceRecord",
    "Delete",
    "Operation",
    "OperationLog",
    "ProductPriceRecord",
    "Upsert",
    "UpsertRecord",
]
