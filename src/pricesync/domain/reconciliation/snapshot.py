"""Batched loading of persisted product state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .lookup import batched_lookup

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pricesync.domain.model import ProductId, ProductSnapshot

    from .lookup import BatchedLookup


def load_snapshots(
    product_ids: Iterable[ProductId],
    *,
    lookup: BatchedLookup[ProductId, ProductSnapshot],
) -> dict[ProductId, ProductSnapshot]:
    """Fetch snapshots for ``product_ids`` in one round trip.

    Products without a persisted record are absent from the result; callers treat
    absence exactly like an unknown reference.
    """

    return batched_lookup(product_ids, lookup)
