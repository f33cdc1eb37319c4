"""Stock reconciliation with availability recomputation.

Responsibilities of this stage:
- skip updates whose stock equals the stored stock (strict equality)
- derive the new availability from closeout policy and minimum purchase
- write stock and availability together through the supplied writer
- classify each applied change into availability/threshold transitions

Transaction control and event dispatch belong to the caller.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from pricesync.domain.model import StockTransition

from .contracts import StockChange
from .resolve import collapse_repeated_updates

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from pricesync.domain.model import ProductId, ProductSnapshot, StockUpdate

    from .contracts import StockResultsById


log = getLogger(__name__)


class WriteStock(Protocol):
    """Persist stock and availability of one product."""

    def __call__(self, product_id: ProductId, *, stock: int, available: bool) -> None: ...


def compute_availability(new_stock: int, snapshot: ProductSnapshot) -> bool:
    """Only closeout products become unavailable when stock runs short."""

    if snapshot.is_closeout:
        return new_stock >= snapshot.min_purchase
    return True


def classify_transitions(
    *,
    old_stock: int,
    new_stock: int,
    old_available: bool,
    new_available: bool,
    threshold: int | None = None,
) -> frozenset[StockTransition]:
    transitions: set[StockTransition] = set()
    if old_available and not new_available:
        transitions.add(StockTransition.NO_LONGER_AVAILABLE)
    if not old_available and new_available:
        transitions.add(StockTransition.AVAILABILITY_REGAINED)
    # upward crossing only; landing exactly on the threshold is not exceeding it
    if threshold is not None and old_stock <= threshold < new_stock:
        transitions.add(StockTransition.THRESHOLD_EXCEEDED)
    return frozenset(transitions)


def evaluate_stock_update(update: StockUpdate, snapshot: ProductSnapshot) -> StockChange | None:
    """Return the change ``update`` causes against ``snapshot``, or ``None`` for a no-op."""

    if update.stock == snapshot.stock:
        return None

    new_available = compute_availability(update.stock, snapshot)
    return StockChange(
        product_id=snapshot.id,
        old_stock=snapshot.stock,
        new_stock=update.stock,
        old_available=snapshot.available,
        new_available=new_available,
        transitions=classify_transitions(
            old_stock=snapshot.stock,
            new_stock=update.stock,
            old_available=snapshot.available,
            new_available=new_available,
            threshold=update.threshold,
        ),
    )


def reconcile_stock(
    updates: Iterable[StockUpdate],
    snapshots: Mapping[ProductId, ProductSnapshot],
    *,
    write_stock: WriteStock,
) -> StockResultsById:
    """Apply resolved ``updates`` and return the applied changes keyed by product id.

    Repeated updates of one product collapse to the last one submitted, which is
    then compared against the snapshot loaded at the start of the batch.
    """

    results: StockResultsById = {}
    for update in collapse_repeated_updates(updates):
        snapshot = snapshots.get(update.product_id)
        if snapshot is None:
            log.debug("Skipping stock update for unknown product %s", update.product_id)
            continue

        change = evaluate_stock_update(update, snapshot)
        if change is None:
            log.debug("Stock of %s unchanged at %s", update.product_id, update.stock)
            continue

        write_stock(change.product_id, stock=change.new_stock, available=change.new_available)
        results[change.product_id] = change
    return results
