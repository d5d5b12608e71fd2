"""Apply an operator-approved subset of changes to the catalog store.

Responsibilities of this stage:
- re-read the store once and resolve storage identities from that snapshot
- translate changes into batch operations (full create, partial update, delete)
- skip changes whose target vanished or is ambiguous, without failing the rest
- submit everything else as a single all-or-nothing batch
"""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from gymsupply.domain.ports.store import BatchOperation, OperationKind

from .changes import Add, Delete, Update

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gymsupply.domain.model import CatalogRecord, CollectionName, PartNumber, StorageId
    from gymsupply.domain.ports.store import CatalogStore

    from .changes import Change

CATALOG_COLLECTION = "catalog"

log = logging.getLogger(__name__)


class SkipReason(StrEnum):
    MISSING = "missing"
    AMBIGUOUS = "ambiguous"


@dataclass(slots=True, frozen=True)
class SkippedChange:
    change: Change
    reason: SkipReason


@dataclass(slots=True)
class ApplyResult:
    """Summary of one apply call."""

    added: int = 0
    updated: int = 0
    deleted: int = 0
    skipped: list[SkippedChange] = field(default_factory=list[SkippedChange])

    @property
    def written(self) -> int:
        return self.added + self.updated + self.deleted

    @property
    def skipped_changes(self) -> list[Change]:
        return [entry.change for entry in self.skipped]

    @property
    def is_noop(self) -> bool:
        return self.written == 0 and not self.skipped


@dataclass(slots=True)
class _IdentityIndex:
    """Storage identities present in the store right before the batch is built."""

    ids: set[StorageId]
    ids_by_key: dict[PartNumber, list[StorageId]]

    @classmethod
    def from_records(cls, records: Iterable[CatalogRecord]) -> _IdentityIndex:
        ids: set[StorageId] = set()
        ids_by_key: defaultdict[PartNumber, list[StorageId]] = defaultdict(list)
        for record in records:
            if record.storage_id is None:
                continue
            ids.add(record.storage_id)
            if record.key is not None:
                ids_by_key[record.key].append(record.storage_id)
        return cls(ids=ids, ids_by_key=dict(ids_by_key))

    def resolve(self, change: Update | Delete) -> StorageId | SkipReason:
        snapshot_id = change.storage_id
        if snapshot_id is not None:
            return snapshot_id if snapshot_id in self.ids else SkipReason.MISSING
        candidates = self.ids_by_key.get(change.key, [])
        if not candidates:
            return SkipReason.MISSING
        if len(candidates) > 1:
            return SkipReason.AMBIGUOUS
        return candidates[0]


def apply_changes(
    selected: Iterable[Change],
    store: CatalogStore,
    *,
    collection: CollectionName = CATALOG_COLLECTION,
    id_factory: Callable[[], StorageId] = uuid.uuid4,
) -> ApplyResult:
    """Write ``selected`` to ``store`` as one batch.

    Raises whatever ``store.batch_write`` raises (``BatchCommitError`` for the
    bundled adapters); in that case nothing was committed.
    """

    changes = list(selected)
    result = ApplyResult()
    if not changes:
        log.info("No catalog changes selected, nothing to apply")
        return result

    identities = _IdentityIndex.from_records(store.list_all(collection))
    operations: list[BatchOperation] = []

    for change in changes:
        if isinstance(change, Add):
            operations.append(
                BatchOperation(
                    kind=OperationKind.CREATE,
                    collection=collection,
                    storage_id=id_factory(),
                    payload=change.record.to_payload(),
                )
            )
            result.added += 1
            continue

        resolved = identities.resolve(change)
        if isinstance(resolved, SkipReason):
            log.warning(
                "Skipping %s for %s: storage target %s",
                change.kind,
                change.key,
                resolved,
            )
            result.skipped.append(SkippedChange(change=change, reason=resolved))
            continue

        if isinstance(change, Update):
            operations.append(
                BatchOperation(
                    kind=OperationKind.UPDATE,
                    collection=collection,
                    storage_id=resolved,
                    payload={
                        catalog_field.attribute: change.new_record.value_of(catalog_field)
                        for catalog_field in change.changed_fields
                    },
                )
            )
            result.updated += 1
        else:
            operations.append(
                BatchOperation(
                    kind=OperationKind.DELETE,
                    collection=collection,
                    storage_id=resolved,
                )
            )
            result.deleted += 1

    if operations:
        log.info(
            "Committing catalog batch: added=%d, updated=%d, deleted=%d, skipped=%d",
            result.added,
            result.updated,
            result.deleted,
            len(result.skipped),
        )
        store.batch_write(operations)
    return result
