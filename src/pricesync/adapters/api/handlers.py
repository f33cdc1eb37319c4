"""Transport-agnostic request handlers for the update endpoints.

Each handler validates the whole request before any reconciliation runs and
answers with a status code plus a JSON-ready body.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from .errors import RequestValidationError
from .schema import PriceUpdateRequest, StockUpdateRequest
from .translator import translate_price_request, translate_stock_request

if TYPE_CHECKING:
    from collections.abc import Callable

    from pricesync.domain.model import CurrencyId
    from pricesync.domain.reconciliation import (
        PriceResultsById,
        ReconciliationDriver,
        StockResultsById,
    )

type Payload = str | bytes | Mapping[str, Any]
type CurrencyLookup = Callable[[], Mapping[str, CurrencyId]]

HTTP_OK = 200
HTTP_BAD_REQUEST = 400

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ApiResponse:
    status: int
    body: dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status < HTTP_BAD_REQUEST


def handle_price_update(
    payload: Payload,
    *,
    driver: ReconciliationDriver,
    currency_ids: CurrencyLookup | None = None,
) -> ApiResponse:
    """Validate a price update request and reconcile it.

    Currency codes are resolved through ``currency_ids``; by default the currency
    table is read through the driver's unit of work.
    """

    lookup = currency_ids or (lambda: _catalog_currency_ids(driver))
    try:
        request = _parse(PriceUpdateRequest, payload)
        updates = translate_price_request(request, currency_ids=lookup())
    except RequestValidationError as error:
        return _rejected("price", error)

    results = driver.update_prices(updates)
    return ApiResponse(status=HTTP_OK, body={"results": price_results_to_json(results)})


def handle_stock_update(payload: Payload, *, driver: ReconciliationDriver) -> ApiResponse:
    try:
        request = _parse(StockUpdateRequest, payload)
        updates = translate_stock_request(request)
    except RequestValidationError as error:
        return _rejected("stock", error)

    results = driver.update_stock(updates)
    return ApiResponse(status=HTTP_OK, body={"results": stock_results_to_json(results)})


def price_results_to_json(results: PriceResultsById) -> dict[str, dict[str, Any]]:
    body: dict[str, dict[str, Any]] = {}
    for product_id, result in results.items():
        entry: dict[str, Any] = {"updated": result.updated}
        if result.reason is not None:
            entry["reason"] = result.reason
        body[product_id] = entry
    return body


def stock_results_to_json(results: StockResultsById) -> dict[str, dict[str, Any]]:
    return {
        product_id: {
            "oldStock": change.old_stock,
            "newStock": change.new_stock,
            "oldAvailable": change.old_available,
            "newAvailable": change.new_available,
        }
        for product_id, change in results.items()
    }


def _parse[TModel: BaseModel](model: type[TModel], payload: Payload) -> TModel:
    try:
        if isinstance(payload, Mapping):
            return model.model_validate(payload)
        return model.model_validate_json(payload)
    except ValidationError as error:
        raise RequestValidationError.from_pydantic(error) from error


def _catalog_currency_ids(driver: ReconciliationDriver) -> dict[str, CurrencyId]:
    with driver.unit_of_work_factory() as uow:
        return uow.repositories.currencies.ids_by_iso_code()


def _rejected(kind: str, error: RequestValidationError) -> ApiResponse:
    log.info("Rejected %s update request with %s violation(s)", kind, len(error.violations))
    for violation in error.violations:
        log.debug("Violation at %s: %s (%s)", violation.path, violation.message, violation.code)
    return ApiResponse(status=HTTP_BAD_REQUEST, body=error.to_json())
