"""Port for availability notifications raised after stock changes commit."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pricesync.domain.model import ProductId


@runtime_checkable
class AvailabilityNotifier(Protocol):
    """Transport-agnostic sink for availability events."""

    def product_no_longer_available(self, product_ids: Sequence[ProductId]) -> None: ...

    def invalidate_product_cache(self, product_ids: Sequence[ProductId]) -> None: ...


__all__ = ["AvailabilityNotifier"]
