"""Compute the add/update/delete changes between a source list and the catalog."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .changes import Add, ChangeSet, Delete, DuplicateKey, ReconcileSide, Update
from .compare import DEFAULT_COMPARISON_RULES, compare_records

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gymsupply.domain.model import CatalogRecord, PartNumber

    from .changes import Change
    from .compare import ComparisonRule

log = logging.getLogger(__name__)


@dataclass(slots=True)
class _KeyIndex:
    side: ReconcileSide
    records: dict[PartNumber, CatalogRecord] = field(
        default_factory=dict["PartNumber", "CatalogRecord"]
    )
    occurrences: Counter[PartNumber] = field(default_factory=Counter["PartNumber"])
    ordered: list[CatalogRecord] = field(default_factory=list["CatalogRecord"])
    malformed: int = 0

    def add(self, record: CatalogRecord) -> None:
        key = record.key
        if key is None:
            self.malformed += 1
            log.warning(
                "Skipping %s record without part number: name=%r",
                self.side,
                record.name,
            )
            return
        # Re-assigning keeps the first-seen position, so ordering stays stable.
        self.records[key] = record
        self.occurrences[key] += 1
        self.ordered.append(record)

    def duplicates(self) -> list[DuplicateKey]:
        found = [
            DuplicateKey(side=self.side, key=key, count=count)
            for key, count in self.occurrences.items()
            if count > 1
        ]
        for duplicate in found:
            log.warning(
                "Duplicate part number in %s: %s seen %d times, using the last one",
                duplicate.side,
                duplicate.key,
                duplicate.count,
            )
        return found


def _index(records: Iterable[CatalogRecord], side: ReconcileSide) -> _KeyIndex:
    index = _KeyIndex(side=side)
    for record in records:
        index.add(record)
    return index


def compute_changes(
    source: Iterable[CatalogRecord],
    target: Iterable[CatalogRecord],
    *,
    rules: Iterable[ComparisonRule] = DEFAULT_COMPARISON_RULES,
) -> ChangeSet:
    """Diff ``source`` (authoritative) against ``target`` (current catalog).

    Adds come first in source order, then updates in source order, then deletes in
    target order. Records without a part number are skipped and counted; duplicate
    part numbers are reported and resolved to their last occurrence, except that a
    key missing from the source deletes every stored record carrying it.
    """

    active_rules = tuple(rules)
    source_index = _index(source, ReconcileSide.SOURCE)
    target_index = _index(target, ReconcileSide.TARGET)

    adds: list[Change] = []
    updates: list[Change] = []
    deletes: list[Change] = []

    for key, new_record in source_index.records.items():
        old_record = target_index.records.get(key)
        if old_record is None:
            adds.append(Add(record=new_record))
            continue
        differences = compare_records(old_record, new_record, active_rules)
        if differences:
            updates.append(
                Update(
                    key=key,
                    old_record=old_record,
                    new_record=new_record,
                    changed_fields=tuple(difference.field for difference in differences),
                    field_changes=differences,
                )
            )

    # Every stored copy of a vanished key goes, not just the last one seen.
    for old_record in target_index.ordered:
        key = old_record.key
        if key is not None and key not in source_index.records:
            deletes.append(Delete(key=key, record=old_record))

    changes = [*adds, *updates, *deletes]
    change_set = ChangeSet(
        changes=changes,
        selection=set(range(len(changes))),
        duplicates=[*source_index.duplicates(), *target_index.duplicates()],
        malformed={
            ReconcileSide.SOURCE: source_index.malformed,
            ReconcileSide.TARGET: target_index.malformed,
        },
    )
    log.info(
        "Computed catalog changes: add=%d, update=%d, delete=%d",
        len(adds),
        len(updates),
        len(deletes),
    )
    return change_set
