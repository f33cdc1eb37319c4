"""Post-commit dispatch of availability events derived from stock changes."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pricesync.domain.model import StockTransition

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pricesync.domain.model import ProductId
    from pricesync.domain.ports import AvailabilityNotifier

    from .contracts import StockChange


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AvailabilityEvents:
    """Product ids per notification, each without duplicates."""

    no_longer_available: tuple[ProductId, ...] = ()
    cache_invalidations: tuple[ProductId, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.no_longer_available and not self.cache_invalidations


def collect_events(changes: Iterable[StockChange]) -> AvailabilityEvents:
    """Group transitions into notifications.

    Regained availability and exceeded thresholds both map onto cache invalidation;
    ids whose availability was regained come first.
    """

    changes = tuple(changes)
    no_longer_available = _ids_with(changes, StockTransition.NO_LONGER_AVAILABLE)
    regained = _ids_with(changes, StockTransition.AVAILABILITY_REGAINED)
    exceeded = _ids_with(changes, StockTransition.THRESHOLD_EXCEEDED)
    return AvailabilityEvents(
        no_longer_available=no_longer_available,
        cache_invalidations=tuple(dict.fromkeys((*regained, *exceeded))),
    )


def emit_stock_events(
    changes: Iterable[StockChange],
    notifier: AvailabilityNotifier,
) -> AvailabilityEvents:
    """Notify ``notifier``; call only after the stock transaction has committed."""

    events = collect_events(changes)
    if events.no_longer_available:
        notifier.product_no_longer_available(events.no_longer_available)
    if events.cache_invalidations:
        notifier.invalidate_product_cache(events.cache_invalidations)
    if not events.is_empty:
        log.info(
            "Dispatched availability events: no_longer_available=%s, cache_invalidations=%s",
            len(events.no_longer_available),
            len(events.cache_invalidations),
        )
    return events


def _ids_with(
    changes: tuple[StockChange, ...],
    transition: StockTransition,
) -> tuple[ProductId, ...]:
    return tuple(dict.fromkeys(c.product_id for c in changes if transition in c.transitions))
