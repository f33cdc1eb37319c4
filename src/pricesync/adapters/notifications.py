"""Availability notifier that reports events through the logging system."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pricesync.domain.model import ProductId

log = getLogger(__name__)


class LoggingAvailabilityNotifier:
    """Log availability events; stands in where no message bus is wired up."""

    def product_no_longer_available(self, product_ids: Sequence[ProductId]) -> None:
        log.info("Products no longer available: %s", ", ".join(product_ids))

    def invalidate_product_cache(self, product_ids: Sequence[ProductId]) -> None:
        log.info("Invalidating product cache for: %s", ", ".join(product_ids))


if TYPE_CHECKING:
    from pricesync.domain.ports import AvailabilityNotifier

    _notifier_check: AvailabilityNotifier = LoggingAvailabilityNotifier()
