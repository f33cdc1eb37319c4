from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from pricesync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from pricesync.domain.model import LIVE_VERSION_ID
from tests.helpers.sqlite_catalog import insert_product, product_row

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyCatalogUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)
    assert is_started()

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_repositories_unavailable_outside_block(
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> None:
    uow = sqlite_unit_of_work()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_commit_persists_stock_write(
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
    sqlite_session: Session,
) -> None:
    insert_product(sqlite_session, "p1", stock=1)
    sqlite_session.commit()

    with sqlite_unit_of_work() as uow:
        uow.repositories.stock.write_stock(
            "p1", stock=9, available=True, version_id=LIVE_VERSION_ID
        )
        uow.commit()

    assert product_row(sqlite_session, "p1").stock == 9


def test_exception_rolls_back_pending_writes(
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
    sqlite_session: Session,
    sqlite_engine: Engine,
) -> None:
    insert_product(sqlite_session, "p1", stock=1)
    sqlite_session.commit()
    sqlite_session.close()

    with pytest.raises(RuntimeError, match="boom"), sqlite_unit_of_work() as uow:
        uow.repositories.stock.write_stock(
            "p1", stock=9, available=True, version_id=LIVE_VERSION_ID
        )
        raise RuntimeError("boom")

    with sqlite_engine.connect() as connection:
        stock = connection.exec_driver_sql("SELECT stock FROM product WHERE id = 'p1'").scalar()
    assert stock == 1
