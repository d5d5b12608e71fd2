from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from gymsupply.adapters.sqlalchemy.migrations import upgrade_head
from gymsupply.adapters.sqlalchemy.session import catalog_store, shutdown, startup
from gymsupply.adapters.sqlalchemy.store import SqlAlchemyCatalogStore

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session_factory(sqlite_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=sqlite_engine, expire_on_commit=False)


@pytest.fixture
def sqlite_store(sqlite_session_factory: sessionmaker[Session]) -> SqlAlchemyCatalogStore:
    return SqlAlchemyCatalogStore(sqlite_session_factory)


@pytest.fixture
def started_store(sqlite_engine: Engine) -> Iterator[SqlAlchemyCatalogStore]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield catalog_store()
    finally:
        shutdown()
