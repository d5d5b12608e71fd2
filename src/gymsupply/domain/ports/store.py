"""Ports for reading and writing the persisted catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from gymsupply.domain.model import CatalogRecord, CollectionName, StorageId


class OperationKind(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(slots=True, frozen=True, kw_only=True)
class BatchOperation:
    """One write inside an atomic batch.

    ``payload`` is the full record for ``create``, the changed attributes only for
    ``update`` and empty for ``delete``.
    """

    kind: OperationKind
    collection: CollectionName
    storage_id: StorageId
    payload: Mapping[str, object] = field(default_factory=dict[str, object])


class CatalogStoreError(RuntimeError):
    """Raised when the catalog store cannot serve a request."""


class BatchCommitError(CatalogStoreError):
    """Raised when a batch is rejected; none of its operations were committed."""


@runtime_checkable
class CatalogStore(Protocol):
    """Document-collection style store holding catalog records."""

    def list_all(self, collection: CollectionName) -> list[CatalogRecord]:
        """Return every record of ``collection`` with ``storage_id`` populated."""
        ...

    def batch_write(self, operations: Sequence[BatchOperation]) -> None:
        """Commit all ``operations`` or none of them."""
        ...


@runtime_checkable
class CatalogSource(Protocol):
    """Callable port returning the authoritative item list."""

    def __call__(self) -> list[CatalogRecord]: ...
