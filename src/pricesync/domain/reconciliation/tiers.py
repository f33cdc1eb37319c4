"""Advanced price reconciliation.

Submitted tiers replace the stored tiers as a full set: a stored tier whose slot
(``rule_id``, ``quantity_start``, ``quantity_end``) is missing from the submission is
deleted, a submitted tier for a free slot is created, and a tier present on both
sides is rewritten in place only when its content differs.

An empty submission therefore deletes every stored tier of the product.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pricesync.domain.model import (
    ADVANCED_PRICE_DELETE,
    ADVANCED_PRICE_UPSERT,
    AdvancedPriceRecord,
    Delete,
    EntityType,
    Upsert,
)

from .diff import has_changes

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pricesync.domain.model import (
        AdvancedPriceTier,
        Operation,
        ProductId,
        StorageId,
        TierIdentity,
    )


@dataclass(frozen=True, slots=True)
class TierPlan:
    """Tier mutations needed to converge one product."""

    deletions: tuple[StorageId, ...] = ()
    upserts: tuple[AdvancedPriceRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.deletions and not self.upserts

    def operations(self) -> list[Operation]:
        """Batch all deletions into one delete and all writes into one upsert."""

        operations: list[Operation] = []
        if self.deletions:
            operations.append(
                Delete(
                    key=ADVANCED_PRICE_DELETE,
                    entity_type=EntityType.PRODUCT_PRICE,
                    keys=self.deletions,
                )
            )
        if self.upserts:
            operations.append(
                Upsert(
                    key=ADVANCED_PRICE_UPSERT,
                    entity_type=EntityType.PRODUCT_PRICE,
                    records=self.upserts,
                )
            )
        return operations


def index_tiers(tiers: Iterable[AdvancedPriceTier]) -> dict[TierIdentity, AdvancedPriceTier]:
    """Index tiers by slot; a later tier for the same slot replaces an earlier one."""

    return {tier.identity: tier for tier in tiers}


def plan_advanced_prices(
    product_id: ProductId,
    submitted: Iterable[AdvancedPriceTier],
    current: Iterable[AdvancedPriceTier],
) -> TierPlan:
    """Compare submitted tiers against the stored ones for ``product_id``."""

    submitted_index = index_tiers(submitted)
    current_index = index_tiers(current)

    deletions = tuple(
        tier.storage_id
        for identity, tier in current_index.items()
        if identity not in submitted_index and tier.storage_id is not None
    )

    upserts: list[AdvancedPriceRecord] = []
    for identity, tier in submitted_index.items():
        stored = current_index.get(identity)
        if stored is None:
            upserts.append(_record(product_id, tier))
        elif has_changes(tier, stored):
            upserts.append(_record(product_id, tier, storage_id=stored.storage_id))

    return TierPlan(deletions=deletions, upserts=tuple(upserts))


def reconcile_advanced_prices(
    product_id: ProductId,
    submitted: Iterable[AdvancedPriceTier],
    current: Iterable[AdvancedPriceTier],
) -> list[Operation]:
    return plan_advanced_prices(product_id, submitted, current).operations()


def _record(
    product_id: ProductId,
    tier: AdvancedPriceTier,
    *,
    storage_id: StorageId | None = None,
) -> AdvancedPriceRecord:
    return AdvancedPriceRecord(
        id=storage_id,
        product_id=product_id,
        rule_id=tier.rule_id,
        quantity_start=tier.quantity_start,
        quantity_end=tier.quantity_end,
        price=tier.price,
    )
