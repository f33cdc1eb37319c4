"""Request boundary for price and stock updates."""

from __future__ import annotations

from .errors import RequestValidationError, Violation
from .handlers import ApiResponse, handle_price_update, handle_stock_update
from .schema import (
    AdvancedPricePayload,
    MoneyPayload,
    PriceUpdatePayload,
    PriceUpdateRequest,
    StockUpdatePayload,
    StockUpdateRequest,
)
from .translator import translate_money, translate_price_request, translate_stock_request

__all__ = [
    "AdvancedPricePayload",
    "ApiResponse",
    "MoneyPayload",
    "PriceUpdatePayload",
    "PriceUpdateRequest",
    "RequestValidationError",
    "StockUpdatePayload",
    "StockUpdateRequest",
    "Violation",
    "handle_price_update",
    "handle_stock_update",
    "translate_money",
    "translate_price_request",
    "translate_stock_request",
]
