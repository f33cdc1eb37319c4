"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Entity addressed by a sync operation."""

    PRODUCT = "product"
    PRODUCT_PRICE = "product_price"


class OperationAction(StrEnum):
    UPSERT = "upsert"
    DELETE = "delete"


class StockTransition(StrEnum):
    """Secondary business event derived from a before/after stock comparison."""

    NO_LONGER_AVAILABLE = "no_longer_available"
    AVAILABILITY_REGAINED = "availability_regained"
    THRESHOLD_EXCEEDED = "threshold_exceeded"
