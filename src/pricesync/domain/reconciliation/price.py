"""Simple price reconciliation."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pricesync.domain.model import PRODUCT_PRICE_UPDATE, EntityType, ProductPriceRecord, Upsert

from .diff import structural_diff

if TYPE_CHECKING:
    from pricesync.domain.model import PriceSet, ProductId, ProductSnapshot


log = getLogger(__name__)


def reconcile_price(
    product_id: ProductId,
    submitted: PriceSet,
    snapshot: ProductSnapshot,
) -> Upsert | None:
    """Return an upsert replacing the whole price set, or ``None`` when unchanged.

    The submitted set replaces the stored one wholesale; currencies missing from
    the submission are dropped from the product.
    """

    differences = structural_diff(submitted, snapshot.price)
    if not differences:
        return None
    log.debug(
        "Price of %s differs at %s",
        product_id,
        ", ".join(difference.dotted_path for difference in differences),
    )
    return Upsert(
        key=PRODUCT_PRICE_UPDATE,
        entity_type=EntityType.PRODUCT,
        records=(ProductPriceRecord(id=product_id, price=submitted),),
    )
