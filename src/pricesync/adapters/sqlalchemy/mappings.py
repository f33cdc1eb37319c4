"""SQLAlchemy table metadata for the pricesync catalog."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Boolean,
    Column,
    Dialect,
    ForeignKeyConstraint,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    orm,
)

from pricesync.domain.model import Money, PriceSet

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

ID_LENGTH = 32


def money_to_json(money: Money) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "net": str(money.net),
        "gross": str(money.gross),
        "linked": money.linked,
    }
    if money.list_price is not None:
        payload["listPrice"] = money_to_json(money.list_price)
    if money.regulation_price is not None:
        payload["regulationPrice"] = money_to_json(money.regulation_price)
    return payload


def money_from_json(payload: Mapping[str, Any]) -> Money:
    list_price = payload.get("listPrice")
    regulation_price = payload.get("regulationPrice")
    return Money(
        net=Decimal(str(payload["net"])),
        gross=Decimal(str(payload["gross"])),
        linked=bool(payload.get("linked", False)),
        list_price=money_from_json(list_price) if list_price is not None else None,
        regulation_price=(
            money_from_json(regulation_price) if regulation_price is not None else None
        ),
    )


def price_set_to_json(price_set: PriceSet) -> dict[str, dict[str, Any]]:
    """Serialise a price set keyed by currency id, repeating the id in each entry."""

    return {
        currency_id: {"currencyId": currency_id, **money_to_json(money)}
        for currency_id, money in price_set.items()
    }


def price_set_from_json(payload: Mapping[str, Any]) -> PriceSet:
    entries = cast("Mapping[str, Mapping[str, Any]]", payload)
    return PriceSet(
        (str(entry.get("currencyId", key)), money_from_json(entry))
        for key, entry in entries.items()
    )


class PriceSetType(TypeDecorator[PriceSet]):
    """JSON text column holding a :class:`PriceSet`; ``NULL`` reads as an empty set."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: PriceSet | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(price_set_to_json(value), sort_keys=True)

    def process_result_value(self, value: str | None, dialect: Dialect) -> PriceSet:
        _ = dialect
        if value is None:
            return PriceSet()
        loaded = json.loads(value)
        if not isinstance(loaded, dict):
            log.warning("Ignoring malformed price payload: %r", value)
            return PriceSet()
        return price_set_from_json(cast("dict[str, Any]", loaded))


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

currency_table = Table(
    "currency",
    mapper_registry.metadata,
    Column("id", String(ID_LENGTH), primary_key=True),
    Column("iso_code", String(3), nullable=False, unique=True),
    Column("name", String, nullable=True),
)

# Versioned catalog tables ----------------------------------------------------

product_table = Table(
    "product",
    mapper_registry.metadata,
    Column("id", String(ID_LENGTH), primary_key=True),
    Column("version_id", String(ID_LENGTH), primary_key=True),
    Column("parent_id", String(ID_LENGTH), nullable=True),
    Column("product_number", String, nullable=True),
    Column("price", PriceSetType, nullable=True),
    Column("stock", Integer, nullable=False, default=0),
    Column("available", Boolean, nullable=False, default=True),
    Column("is_closeout", Boolean, nullable=True),
    Column("min_purchase", Integer, nullable=True),
    Index("ix_product_product_number", "product_number", "version_id"),
)

product_price_table = Table(
    "product_price",
    mapper_registry.metadata,
    Column("id", String(ID_LENGTH), primary_key=True),
    Column("version_id", String(ID_LENGTH), primary_key=True),
    Column("product_id", String(ID_LENGTH), nullable=False),
    Column("rule_id", String(ID_LENGTH), nullable=False),
    Column("quantity_start", Integer, nullable=False, default=1),
    Column("quantity_end", Integer, nullable=True),
    Column("price", PriceSetType, nullable=False),
    ForeignKeyConstraint(
        ["product_id", "version_id"],
        ["product.id", "product.version_id"],
        ondelete="CASCADE",
    ),
    Index("ix_product_price_product_id", "product_id", "version_id"),
)

