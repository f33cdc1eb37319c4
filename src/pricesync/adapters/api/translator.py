"""Translate validated request payloads into domain update items."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pricesync.domain.model import (
    AdvancedPriceTier,
    Money,
    PriceSet,
    PriceUpdate,
    ProductRef,
    StockUpdate,
)

from .errors import (
    RequestValidationError,
    Violation,
    ambiguous_identifier,
    currency_not_found,
    duplicate_currency,
    identifier_not_given,
    price_data_required,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pricesync.domain.model import CurrencyId

    from .schema import (
        AdvancedPricePayload,
        MoneyPayload,
        PriceUpdateRequest,
        StockUpdateRequest,
        UpdateItemPayload,
    )


def translate_price_request(
    request: PriceUpdateRequest,
    *,
    currency_ids: Mapping[str, CurrencyId],
) -> list[PriceUpdate]:
    """Build price updates, collecting every semantic violation before raising."""

    violations: list[Violation] = []
    updates: list[PriceUpdate] = []
    for index, item in enumerate(request.updates):
        path = f"updates/{index}"
        ref = _product_ref(item, path, violations)
        if item.price is None and item.prices is None:
            violations.append(price_data_required(path))

        price = (
            _price_set(item.price, f"{path}/price", currency_ids, violations)
            if item.price is not None
            else None
        )
        prices = (
            tuple(
                _tier(tier, f"{path}/prices/{tier_index}", currency_ids, violations)
                for tier_index, tier in enumerate(item.prices)
            )
            if item.prices is not None
            else None
        )
        if ref is not None:
            updates.append(PriceUpdate(ref=ref, price=price, prices=prices))

    if violations:
        raise RequestValidationError(violations)
    return updates


def translate_stock_request(request: StockUpdateRequest) -> list[StockUpdate]:
    violations: list[Violation] = []
    updates: list[StockUpdate] = []
    for index, item in enumerate(request.updates):
        ref = _product_ref(item, f"updates/{index}", violations)
        if ref is not None:
            updates.append(StockUpdate(ref=ref, stock=item.stock, threshold=item.threshold))

    if violations:
        raise RequestValidationError(violations)
    return updates


def translate_money(payload: MoneyPayload) -> Money:
    return Money(
        net=payload.net,
        gross=payload.gross,
        linked=payload.linked,
        list_price=translate_money(payload.list_price) if payload.list_price else None,
        regulation_price=(
            translate_money(payload.regulation_price) if payload.regulation_price else None
        ),
    )


def _product_ref(
    item: UpdateItemPayload,
    path: str,
    violations: list[Violation],
) -> ProductRef | None:
    if item.id is None and item.product_number is None:
        violations.append(identifier_not_given(path))
        return None
    if item.id is not None and item.product_number is not None:
        violations.append(ambiguous_identifier(path))
        return None
    if item.id is not None:
        return ProductRef.by_id(item.id)
    return ProductRef.by_number(item.product_number)


def _price_set(
    payload: Mapping[str, MoneyPayload],
    path: str,
    currency_ids: Mapping[str, CurrencyId],
    violations: list[Violation],
) -> PriceSet:
    prices: dict[CurrencyId, Money] = {}
    seen: set[str] = set()
    for iso_code, money in payload.items():
        normalized = iso_code.upper()
        if normalized in seen:
            violations.append(duplicate_currency(f"{path}/{iso_code}", normalized))
            continue
        seen.add(normalized)
        currency_id = currency_ids.get(normalized)
        if currency_id is None:
            violations.append(currency_not_found(f"{path}/{iso_code}", iso_code))
            continue
        prices[currency_id] = translate_money(money)
    return PriceSet(prices)


def _tier(
    payload: AdvancedPricePayload,
    path: str,
    currency_ids: Mapping[str, CurrencyId],
    violations: list[Violation],
) -> AdvancedPriceTier:
    return AdvancedPriceTier(
        rule_id=payload.rule_id,
        quantity_start=payload.quantity_start,
        quantity_end=payload.quantity_end,
        price=_price_set(payload.price, f"{path}/price", currency_ids, violations),
    )
