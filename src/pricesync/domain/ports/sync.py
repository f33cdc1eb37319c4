"""Port for the batched sync facility that applies operation logs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pricesync.domain.model import OperationLog, VersionId


@runtime_checkable
class SyncService(Protocol):
    """Callable port applying a whole operation log atomically."""

    def __call__(self, operations: OperationLog, *, version_id: VersionId) -> None: ...


__all__ = ["SyncService"]
