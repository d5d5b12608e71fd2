"""SQLAlchemy adapter package for gymsupply."""

from __future__ import annotations

from .mappings import RECORD_COLUMNS, catalog_item_table, metadata
from .session import (
    StartupError,
    catalog_store,
    configured_engine,
    ensure_started,
    is_started,
    session_factory,
    shutdown,
    startup,
)
from .store import SqlAlchemyCatalogStore

__all__ = [
    "RECORD_COLUMNS",
    "SqlAlchemyCatalogStore",
    "StartupError",
    "catalog_item_table",
    "catalog_store",
    "configured_engine",
    "ensure_started",
    "is_started",
    "metadata",
    "session_factory",
    "shutdown",
    "startup",
]
