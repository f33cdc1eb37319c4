"""Pydantic models for the price and stock update request bodies."""

from __future__ import annotations

from decimal import Decimal  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt


class ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class MoneyPayload(ApiModel):
    net: Decimal
    gross: Decimal
    linked: StrictBool = False
    list_price: MoneyPayload | None = Field(default=None, alias="listPrice")
    regulation_price: MoneyPayload | None = Field(default=None, alias="regulationPrice")


class AdvancedPricePayload(ApiModel):
    rule_id: str = Field(alias="ruleId", min_length=1)
    quantity_start: StrictInt = Field(default=1, alias="quantityStart", ge=1)
    quantity_end: StrictInt | None = Field(default=None, alias="quantityEnd", ge=1)
    price: dict[str, MoneyPayload]


class UpdateItemPayload(ApiModel):
    """Common addressing fields; unknown keys are rejected on update items."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str | None = Field(default=None, min_length=1)
    product_number: str | None = Field(default=None, alias="productNumber", min_length=1)


class PriceUpdatePayload(UpdateItemPayload):
    price: dict[str, MoneyPayload] | None = None
    prices: list[AdvancedPricePayload] | None = None


class StockUpdatePayload(UpdateItemPayload):
    stock: StrictInt
    threshold: StrictInt | None = None


class PriceUpdateRequest(ApiModel):
    updates: list[PriceUpdatePayload] = Field(min_length=1)


class StockUpdateRequest(ApiModel):
    updates: list[StockUpdatePayload] = Field(min_length=1)
