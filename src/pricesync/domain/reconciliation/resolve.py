"""Identifier resolution for mixed-key update batches.

Responsibilities of this stage:
- pass items that already carry a primary key through unchanged
- resolve product numbers with one batched lookup against the catalog
- drop items whose product number has no match (best-effort batch)
- collapse repeated items for one product so the last submission wins

Out of scope for this stage:
- checking that primary keys exist (the snapshot loader does that)
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pricesync.domain.model import UnresolvedReferenceError

from .lookup import batched_lookup

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from pricesync.domain.model import AddressedUpdate, ProductId, ProductNumber

    from .lookup import BatchedLookup


log = getLogger(__name__)


def resolve_identifiers[TUpdate: AddressedUpdate](
    items: Sequence[TUpdate],
    *,
    lookup: BatchedLookup[ProductNumber, ProductId],
) -> list[TUpdate]:
    """Return ``items`` addressed purely by primary key, in submission order."""

    product_numbers = [
        item.ref.product_number
        for item in items
        if item.ref.id is None and item.ref.product_number is not None
    ]
    ids_by_number = batched_lookup(product_numbers, lookup)

    resolved: list[TUpdate] = []
    for item in items:
        if item.ref.id is not None:
            resolved.append(item.with_product_id(item.ref.id))
            continue
        product_number = item.ref.product_number
        product_id = ids_by_number.get(product_number) if product_number is not None else None
        if product_id is None:
            log.debug("Skipping update for unknown product number %s", product_number)
            continue
        resolved.append(item.with_product_id(product_id))
    return resolved


def collapse_repeated_updates[TUpdate: AddressedUpdate](
    items: Iterable[TUpdate],
) -> list[TUpdate]:
    """Keep one update per product id: the last one submitted wins.

    Items must already be resolved. Each product keeps the position of its first
    occurrence so results stay in submission order.
    """

    latest: dict[ProductId, TUpdate] = {}
    for item in items:
        product_id = item.ref.id
        if product_id is None:
            raise UnresolvedReferenceError(
                f"Update for product number {item.ref.product_number!r} is not resolved"
            )
        if product_id in latest:
            log.debug("Later update for %s replaces an earlier one in the batch", product_id)
        latest[product_id] = item
    return list(latest.values())
