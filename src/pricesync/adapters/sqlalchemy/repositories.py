"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from typing import TYPE_CHECKING

from sqlalchemy import and_, delete, false, func, literal, select, update

from pricesync.adapters.sqlalchemy.mappings import (
    currency_table,
    product_price_table,
    product_table,
)
from pricesync.domain.model import (
    AdvancedPriceRecord,
    AdvancedPriceTier,
    Delete,
    EntityType,
    PriceSet,
    ProductPriceRecord,
    ProductSnapshot,
    Upsert,
)

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from sqlalchemy.orm import Session

    from pricesync.domain.model import (
        CurrencyId,
        Operation,
        ProductId,
        ProductNumber,
        StorageId,
        VersionId,
    )

log = logging.getLogger(__name__)


class UnsupportedOperationError(ValueError):
    """Raised when an operation targets an entity the writer cannot persist."""


class SqlAlchemyProductLookupRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def ids_by_product_number(
        self,
        product_numbers: Collection[ProductNumber],
        *,
        version_id: VersionId,
    ) -> dict[ProductNumber, ProductId]:
        if not product_numbers:
            return {}
        stmt = (
            select(product_table.c.product_number, product_table.c.id)
            .where(product_table.c.version_id == version_id)
            .where(product_table.c.product_number.in_(list(product_numbers)))
        )
        return {number: product_id for number, product_id in self.session.execute(stmt).all()}


class SqlAlchemySnapshotRepository:
    """Reads product snapshots with closeout settings inherited from the parent."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def snapshots_by_id(
        self,
        product_ids: Collection[ProductId],
        *,
        version_id: VersionId,
        include_advanced_prices: bool = True,
    ) -> dict[ProductId, ProductSnapshot]:
        if not product_ids:
            return {}
        ids = list(product_ids)
        product = product_table
        parent = product_table.alias("parent")
        stmt = (
            select(
                product.c.id,
                product.c.price,
                product.c.stock,
                product.c.available,
                func.coalesce(product.c.is_closeout, parent.c.is_closeout, false()).label(
                    "is_closeout"
                ),
                func.coalesce(product.c.min_purchase, parent.c.min_purchase, literal(1)).label(
                    "min_purchase"
                ),
            )
            .select_from(
                product.outerjoin(
                    parent,
                    and_(
                        parent.c.id == product.c.parent_id,
                        parent.c.version_id == product.c.version_id,
                    ),
                )
            )
            .where(product.c.version_id == version_id)
            .where(product.c.id.in_(ids))
        )
        rows = self.session.execute(stmt).all()
        tiers = self._tiers_by_product(ids, version_id) if include_advanced_prices else {}

        snapshots: dict[ProductId, ProductSnapshot] = {}
        for row in rows:
            snapshots[row.id] = ProductSnapshot(
                id=row.id,
                price=row.price if row.price is not None else PriceSet(),
                advanced_prices=tuple(tiers.get(row.id, ())),
                stock=int(row.stock),
                available=bool(row.available),
                is_closeout=bool(row.is_closeout),
                min_purchase=int(row.min_purchase),
            )
        return snapshots

    def _tiers_by_product(
        self,
        product_ids: Sequence[ProductId],
        version_id: VersionId,
    ) -> dict[ProductId, list[AdvancedPriceTier]]:
        stmt = (
            select(product_price_table)
            .where(product_price_table.c.version_id == version_id)
            .where(product_price_table.c.product_id.in_(product_ids))
            .order_by(
                product_price_table.c.product_id,
                product_price_table.c.rule_id,
                product_price_table.c.quantity_start,
                product_price_table.c.id,
            )
        )
        tiers: defaultdict[ProductId, list[AdvancedPriceTier]] = defaultdict(list)
        for row in self.session.execute(stmt).all():
            tiers[row.product_id].append(
                AdvancedPriceTier(
                    rule_id=row.rule_id,
                    price=row.price,
                    quantity_start=row.quantity_start,
                    quantity_end=row.quantity_end,
                    storage_id=row.id,
                )
            )
        return tiers


class SqlAlchemyStockRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def write_stock(
        self,
        product_id: ProductId,
        *,
        stock: int,
        available: bool,
        version_id: VersionId,
    ) -> None:
        stmt = (
            update(product_table)
            .where(product_table.c.id == product_id)
            .where(product_table.c.version_id == version_id)
            .values(stock=stock, available=available)
        )
        self.session.execute(stmt)


class SqlAlchemyCurrencyRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def ids_by_iso_code(self) -> dict[str, CurrencyId]:
        stmt = select(currency_table.c.iso_code, currency_table.c.id)
        rows = self.session.execute(stmt).all()
        return {iso_code.upper(): currency_id for iso_code, currency_id in rows}


class SqlAlchemyOperationWriter:
    """Applies planned write operations to the catalog tables."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def apply(self, operation: Operation, *, version_id: VersionId) -> None:
        if isinstance(operation, Upsert) and operation.entity_type is EntityType.PRODUCT:
            self._update_product_prices(operation, version_id)
        elif isinstance(operation, Upsert) and operation.entity_type is EntityType.PRODUCT_PRICE:
            self._upsert_advanced_prices(operation, version_id)
        elif isinstance(operation, Delete) and operation.entity_type is EntityType.PRODUCT_PRICE:
            self._delete_advanced_prices(operation.keys, version_id)
        else:
            raise UnsupportedOperationError(
                f"Cannot apply {operation.action} of {operation.entity_type} ({operation.key})"
            )

    def _update_product_prices(self, operation: Upsert, version_id: VersionId) -> None:
        for record in operation.records:
            if not isinstance(record, ProductPriceRecord):
                raise UnsupportedOperationError(f"Unexpected record for product: {record!r}")
            stmt = (
                update(product_table)
                .where(product_table.c.id == record.id)
                .where(product_table.c.version_id == version_id)
                .values(price=record.price)
            )
            self.session.execute(stmt)

    def _upsert_advanced_prices(self, operation: Upsert, version_id: VersionId) -> None:
        records: list[AdvancedPriceRecord] = []
        for record in operation.records:
            if not isinstance(record, AdvancedPriceRecord):
                raise UnsupportedOperationError(f"Unexpected record for product price: {record!r}")
            records.append(record)

        existing = self._existing_price_ids(
            [record.id for record in records if record.id is not None], version_id
        )
        for record in records:
            values = {
                "product_id": record.product_id,
                "rule_id": record.rule_id,
                "quantity_start": record.quantity_start,
                "quantity_end": record.quantity_end,
                "price": record.price,
            }
            if record.id is not None and record.id in existing:
                self.session.execute(
                    update(product_price_table)
                    .where(product_price_table.c.id == record.id)
                    .where(product_price_table.c.version_id == version_id)
                    .values(**values)
                )
                continue
            storage_id = record.id or uuid.uuid4().hex
            self.session.execute(
                product_price_table.insert().values(id=storage_id, version_id=version_id, **values)
            )
            log.debug("Inserted advanced price %s for product %s", storage_id, record.product_id)

    def _delete_advanced_prices(self, keys: Sequence[StorageId], version_id: VersionId) -> None:
        if not keys:
            return
        stmt = (
            delete(product_price_table)
            .where(product_price_table.c.version_id == version_id)
            .where(product_price_table.c.id.in_(list(keys)))
        )
        self.session.execute(stmt)

    def _existing_price_ids(
        self,
        storage_ids: Sequence[StorageId],
        version_id: VersionId,
    ) -> set[StorageId]:
        if not storage_ids:
            return set()
        stmt = (
            select(product_price_table.c.id)
            .where(product_price_table.c.version_id == version_id)
            .where(product_price_table.c.id.in_(storage_ids))
        )
        return set(self.session.execute(stmt).scalars())
