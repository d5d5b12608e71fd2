"""Domain port definitions for adapters."""

from __future__ import annotations

from .store import (
    BatchCommitError,
    BatchOperation,
    CatalogSource,
    CatalogStore,
    CatalogStoreError,
    OperationKind,
)

__all__ = [
    "BatchCommitError",
    "BatchOperation",
    "CatalogSource",
    "CatalogStore",
    "CatalogStoreError",
    "OperationKind",
]
