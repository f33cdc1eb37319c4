"""Request validation errors reported back to API callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pydantic import ValidationError

UNIQUE_IDENTIFIER_NOT_GIVEN: Final[str] = "uniqueIdentifierNotGiven"
AMBIGUOUS_IDENTIFIER: Final[str] = "ambiguousIdentifier"
PRICE_DATA_REQUIRED: Final[str] = "priceDataRequired"
CURRENCY_NOT_FOUND: Final[str] = "currencyNotFound"
DUPLICATE_CURRENCY: Final[str] = "duplicateCurrency"


@dataclass(frozen=True, slots=True)
class Violation:
    """One rejected field: ``path`` is ``/``-separated using wire field names."""

    path: str
    code: str
    message: str

    def to_json(self) -> dict[str, str]:
        return {"path": self.path, "code": self.code, "message": self.message}


class RequestValidationError(ValueError):
    """Raised when a request is rejected before reconciliation starts."""

    def __init__(self, violations: Iterable[Violation]) -> None:
        self.violations = tuple(violations)
        summary = "; ".join(f"{item.path}: {item.message}" for item in self.violations)
        super().__init__(f"Request rejected with {len(self.violations)} violation(s): {summary}")

    @classmethod
    def from_pydantic(cls, error: ValidationError) -> RequestValidationError:
        return cls(
            Violation(
                path="/".join(str(part) for part in detail["loc"]),
                code=detail["type"],
                message=detail["msg"],
            )
            for detail in error.errors()
        )

    def to_json(self) -> dict[str, list[dict[str, str]]]:
        return {"errors": [violation.to_json() for violation in self.violations]}


def identifier_not_given(path: str) -> Violation:
    return Violation(
        path=path,
        code=UNIQUE_IDENTIFIER_NOT_GIVEN,
        message='Either "id" or "productNumber" must be provided',
    )


def ambiguous_identifier(path: str) -> Violation:
    return Violation(
        path=path,
        code=AMBIGUOUS_IDENTIFIER,
        message='Only one of "id" or "productNumber" may be provided',
    )


def price_data_required(path: str) -> Violation:
    return Violation(
        path=path,
        code=PRICE_DATA_REQUIRED,
        message='Either "price" or "prices" must be provided',
    )


def currency_not_found(path: str, iso_code: str) -> Violation:
    return Violation(
        path=path,
        code=CURRENCY_NOT_FOUND,
        message=f"The currency with code {iso_code} cannot be found",
    )


def duplicate_currency(path: str, iso_code: str) -> Violation:
    return Violation(
        path=path,
        code=DUPLICATE_CURRENCY,
        message=f"The currency with code {iso_code} is given more than once",
    )
