"""Alembic migrations for the catalog store.

The ``alembic`` command line reads ``[tool.alembic]`` from ``pyproject.toml``;
``upgrade_head`` builds its configuration in code so it also works from an
installed package.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from gymsupply.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent


def _build_config(database_uri: str | None = None) -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    if database_uri is not None:
        config.set_main_option("sqlalchemy.url", database_uri)
    return config


def head_revision() -> str | None:
    return ScriptDirectory.from_config(_build_config()).get_current_head()


def current_revision(engine: Engine) -> str | None:
    with engine.connect() as connection:
        return MigrationContext.configure(connection).get_current_revision()


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Upgrade the schema on ``engine`` (or ``database_uri``) to the latest revision."""

    if engine is None:
        command.upgrade(_build_config(database_uri or get_database_config().uri), "head")
        return
    config = _build_config()
    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, "head")
