"""Batched sync facility applying operation logs in a single transaction."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pricesync.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork

if TYPE_CHECKING:
    from pricesync.domain.model import OperationLog, VersionId
    from pricesync.domain.reconciliation import UnitOfWorkFactory

log = getLogger(__name__)


class SqlAlchemySyncService:
    """Apply every operation of a log or none of them."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory | None = None) -> None:
        self.unit_of_work_factory = unit_of_work_factory or SqlAlchemyCatalogUnitOfWork

    def __call__(self, operations: OperationLog, *, version_id: VersionId) -> None:
        if len(operations) == 0:
            return
        with self.unit_of_work_factory() as uow:
            writer = uow.repositories.operations
            for operation in operations:
                log.debug(
                    "Applying %s: %s %s (%s rows)",
                    operation.key,
                    operation.action,
                    operation.entity_type,
                    len(operation),
                )
                writer.apply(operation, version_id=version_id)
            uow.commit()
        log.info("Synced %s operations to version %s", len(operations), version_id)
