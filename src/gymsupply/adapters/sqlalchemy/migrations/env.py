"""Alembic environment for the gymsupply catalog store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from alembic import context
from sqlalchemy import create_engine, pool

from gymsupply.adapters.sqlalchemy.mappings import metadata
from gymsupply.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

config = context.config
log = logging.getLogger("alembic.env")

# SQLite needs batch mode for ALTER TABLE.
_CONTEXT_OPTIONS: dict[str, object] = {
    "target_metadata": metadata,
    "render_as_batch": True,
    "compare_type": True,
    "compare_server_default": True,
}


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_database_config().uri


def _run(connection: Connection) -> None:
    context.configure(connection=connection, **_CONTEXT_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    context.configure(url=_database_url(), literal_binds=True, **_CONTEXT_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    shared_connection: Connection | None = config.attributes.get("connection")
    if shared_connection is not None:
        _run(shared_connection)
        return

    engine = create_engine(_database_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _run(connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
