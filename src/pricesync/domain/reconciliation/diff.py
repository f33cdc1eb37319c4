"""Structural deep comparison over the price value types.

Composite values (money, price sets, advanced price tiers and tuples of them) are
compared key by key; a key present on one side only is a difference. Scalars are
compared with ``!=`` so ``Decimal("10")`` and ``Decimal("10.00")`` are equal.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Final, NamedTuple

from pricesync.domain.model import AdvancedPriceTier, Money

if TYPE_CHECKING:
    from collections.abc import Iterable


class _Missing(Enum):
    MISSING = "<missing>"

    def __repr__(self) -> str:
        return self.value


MISSING: Final = _Missing.MISSING

type Scalar = Decimal | int | str | bool | None
type Comparable = (
    Money | AdvancedPriceTier | Mapping[str, Comparable] | tuple[Comparable, ...] | Scalar
)


class Difference(NamedTuple):
    """One leaf where the submitted and current values disagree."""

    path: tuple[str, ...]
    submitted: Comparable | _Missing
    current: Comparable | _Missing

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)


def structural_diff(submitted: Comparable, current: Comparable) -> tuple[Difference, ...]:
    """Return every leaf difference between ``submitted`` and ``current``."""

    differences: list[Difference] = []
    _collect((), submitted, current, differences)
    return tuple(differences)


def has_changes(submitted: Comparable, current: Comparable) -> bool:
    return bool(structural_diff(submitted, current))


def _collect(
    path: tuple[str, ...],
    submitted: Comparable,
    current: Comparable,
    differences: list[Difference],
) -> None:
    submitted_fields = _fields(submitted)
    current_fields = _fields(current)

    if submitted_fields is None or current_fields is None:
        if submitted_fields is not None or current_fields is not None or submitted != current:
            differences.append(Difference(path, submitted, current))
        return

    for key in _union_keys(submitted_fields, current_fields):
        key_path = (*path, key)
        if key not in current_fields:
            differences.append(Difference(key_path, submitted_fields[key], MISSING))
        elif key not in submitted_fields:
            differences.append(Difference(key_path, MISSING, current_fields[key]))
        else:
            _collect(key_path, submitted_fields[key], current_fields[key], differences)


def _union_keys(left: Mapping[str, Comparable], right: Mapping[str, Comparable]) -> Iterable[str]:
    return dict.fromkeys([*left, *right])


def _fields(value: Comparable) -> Mapping[str, Comparable] | None:
    if isinstance(value, Money):
        return _money_fields(value)
    if isinstance(value, AdvancedPriceTier):
        return _tier_fields(value)
    if isinstance(value, Mapping):
        return {str(key): item for key, item in value.items()}
    if isinstance(value, tuple):
        return {str(index): item for index, item in enumerate(value)}
    return None


def _money_fields(money: Money) -> dict[str, Comparable]:
    fields: dict[str, Comparable] = {
        "net": money.net,
        "gross": money.gross,
        "linked": money.linked,
    }
    # absent nested prices are omitted, so set-vs-unset surfaces as a missing key
    if money.list_price is not None:
        fields["list_price"] = money.list_price
    if money.regulation_price is not None:
        fields["regulation_price"] = money.regulation_price
    return fields


def _tier_fields(tier: AdvancedPriceTier) -> dict[str, Comparable]:
    return {
        "rule_id": tier.rule_id,
        "quantity_start": tier.quantity_start,
        "quantity_end": tier.quantity_end,
        "price": tier.price,
    }
