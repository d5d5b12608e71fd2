"""Process-wide engine and session factory behind the catalog store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from gymsupply.config import get_database_config

from .migrations import current_revision, upgrade_head
from .store import SqlAlchemyCatalogStore

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the adapter is used before ``startup`` or started twice."""


@dataclass(slots=True, frozen=True)
class _Binding:
    engine: Engine
    sessions: sessionmaker[Session] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "sessions", sessionmaker(bind=self.engine, expire_on_commit=False)
        )


_binding: _Binding | None = None


def _require_binding() -> _Binding:
    if _binding is None:
        raise StartupError(
            "Catalog database not initialised; call "
            "gymsupply.adapters.sqlalchemy.session.startup() first."
        )
    return _binding


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to ``engine`` (or a new one) after upgrading its schema."""

    global _binding  # noqa: PLW0603
    if _binding is not None and not force:
        raise StartupError("Catalog database already initialised; pass force=True to rebind.")

    bound_engine = engine or create_engine(database_uri or get_database_config().uri)
    upgrade_head(engine=bound_engine)
    log.debug("Catalog schema at revision %s", current_revision(bound_engine))
    _binding = _Binding(engine=bound_engine)


def ensure_started() -> None:
    if _binding is None:
        startup()


def is_started() -> bool:
    return _binding is not None


def configured_engine() -> Engine | None:
    return _binding.engine if _binding is not None else None


def shutdown() -> None:
    """Dispose the bound engine; safe to call when not started."""

    global _binding  # noqa: PLW0603
    if _binding is not None:
        _binding.engine.dispose()
    _binding = None


def session_factory() -> sessionmaker[Session]:
    return _require_binding().sessions


def catalog_store() -> SqlAlchemyCatalogStore:
    return SqlAlchemyCatalogStore(_require_binding().sessions)
