"""Reconciliation core for bulk price and stock updates.

Layered flow:
1) resolve product numbers to primary keys (one batched lookup)
2) load snapshots of persisted state (one batched lookup)
3) diff submissions against snapshots
4) hand operations to the sync facility (prices) or write inside one
   transaction (stock)
5) dispatch availability events after the stock transaction commits
"""

from __future__ import annotations

from .contracts import (
    NO_CHANGES_REASON,
    PriceResultsById,
    PriceUpdateResult,
    StockChange,
    StockResultsById,
)
from .diff import Difference, has_changes, structural_diff
from .engine import ReconciliationDriver, UnitOfWorkFactory, plan_price_update
from .events import AvailabilityEvents, collect_events, emit_stock_events
from .lookup import BatchedLookup, batched_lookup
from .price import reconcile_price
from .resolve import collapse_repeated_updates, resolve_identifiers
from .snapshot import load_snapshots
from .stock import (
    classify_transitions,
    compute_availability,
    evaluate_stock_update,
    reconcile_stock,
)
from .tiers import TierPlan, index_tiers, plan_advanced_prices, reconcile_advanced_prices

__all__ = [
    "NO_CHANGES_REASON",
    "AvailabilityEvents",
    "BatchedLookup",
    "Difference",
    "PriceResultsById",
    "PriceUpdateResult",
    "ReconciliationDriver",
    "StockChange",
    "StockResultsById",
    "TierPlan",
    "UnitOfWorkFactory",
    "batched_lookup",
    "classify_transitions",
    "collapse_repeated_updates",
    "collect_events",
    "compute_availability",
    "emit_stock_events",
    "evaluate_stock_update",
    "has_changes",
    "index_tiers",
    "load_snapshots",
    "plan_advanced_prices",
    "plan_price_update",
    "reconcile_advanced_prices",
    "reconcile_price",
    "reconcile_stock",
    "resolve_identifiers",
    "structural_diff",
]
